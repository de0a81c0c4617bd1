"""
Lifecycle event registration and dispatch for modelhooks models.
"""

from .dispatcher import Dispatcher, EventDispatcher, ListenerRegistration
from .observer import Observer, ObserverResolutionError
from .payloads import ModelEvent
from .registry import BUILTIN_EVENTS, ModelEventRegistry, channel_name, registry

__all__ = [
    "BUILTIN_EVENTS",
    "Dispatcher",
    "EventDispatcher",
    "ListenerRegistration",
    "ModelEvent",
    "ModelEventRegistry",
    "Observer",
    "ObserverResolutionError",
    "channel_name",
    "registry",
]
