"""
Custom event payloads wrapping a model instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from ..core.model import Model


PayloadFactory = Callable[["Model"], Any]


@dataclass
class ModelEvent:
    """
    Base class for object-based model events.

    Subclasses are mapped to event names through ``Meta.dispatches_events``
    and are published on their own class name, so listeners subscribe with
    ``dispatcher.listen(qualified_name(UserCreating), ...)``.
    """

    model: "Model"

    @property
    def model_class(self) -> type:
        return type(self.model)
