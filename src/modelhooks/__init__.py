"""
modelhooks public package initialization.

Lifecycle events for ORM models: observers, vetoable ``*ing`` events and
custom event payloads on top of a pluggable dispatcher.
"""

from .core.model import Model, ModelConfigurationError  # noqa: F401
from .core.soft_deletes import SoftDeletes  # noqa: F401
from .events import (
    BUILTIN_EVENTS,
    Dispatcher,
    EventDispatcher,
    ModelEvent,
    ModelEventRegistry,
    Observer,
    ObserverResolutionError,
    channel_name,
    registry,
)  # noqa: F401
from .utils import configure_logging  # noqa: F401

__all__ = [
    "BUILTIN_EVENTS",
    "Dispatcher",
    "EventDispatcher",
    "Model",
    "ModelConfigurationError",
    "ModelEvent",
    "ModelEventRegistry",
    "Observer",
    "ObserverResolutionError",
    "SoftDeletes",
    "channel_name",
    "configure_logging",
    "registry",
]
