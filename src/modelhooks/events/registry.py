"""
Registry of per-model event state: dispatchers, observable names and
custom event payload maps.
"""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional, Type

from ..utils import get_logger, qualified_name
from .dispatcher import Dispatcher, Listener
from .observer import handler_table, resolve_observer
from .payloads import PayloadFactory

if TYPE_CHECKING:
    from ..core.model import Model


BUILTIN_EVENTS = (
    "creating",
    "created",
    "updating",
    "updated",
    "deleting",
    "deleted",
    "saving",
    "saved",
    "restoring",
    "restored",
)

CHANNEL_PREFIX = "eloquent"


def channel_name(event: str, model: Type["Model"]) -> str:
    return f"{CHANNEL_PREFIX}.{event}: {qualified_name(model)}"


def _normalize_names(names: Iterable[Any]) -> List[str]:
    normalized: List[str] = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"Event names must be strings, got {type(name).__name__}")
        if name not in normalized:
            normalized.append(name)
    return normalized


class ModelEventRegistry:
    """
    Holds event state for model classes.

    Dispatchers are looked up along the model's MRO so that a dispatcher set
    on a base model serves every subclass that does not set its own.
    Observable extensions and custom event maps are kept per class and seeded
    lazily from the class's ``Meta`` options.
    """

    def __init__(self) -> None:
        self._dispatchers: Dict[type, Any] = {}
        self._observables: Dict[type, List[str]] = {}
        self._custom_events: Dict[type, Dict[str, PayloadFactory]] = {}
        self._suspended: Counter = Counter()
        self.logger = get_logger("events.registry")

    # ------------------------------------------------------------------ #
    # Dispatcher
    # ------------------------------------------------------------------ #
    def get_dispatcher(self, model: Type["Model"]) -> Optional[Dispatcher]:
        if any(self._suspended[klass] for klass in model.__mro__):
            return None
        for klass in model.__mro__:
            if klass in self._dispatchers:
                return self._dispatchers[klass]
        return None

    def set_dispatcher(self, model: Type["Model"], dispatcher: Dispatcher) -> None:
        self._dispatchers[model] = dispatcher
        self.logger.debug("Event dispatcher set for %s", qualified_name(model))

    def unset_dispatcher(self, model: Type["Model"]) -> None:
        self._dispatchers.pop(model, None)
        self.logger.debug("Event dispatcher unset for %s", qualified_name(model))

    @contextmanager
    def suspended(self, model: Type["Model"]) -> Iterator[None]:
        """
        Disable event dispatching for ``model`` and its subclasses.
        """

        self._suspended[model] += 1
        try:
            yield
        finally:
            self._suspended[model] -= 1
            if not self._suspended[model]:
                del self._suspended[model]

    # ------------------------------------------------------------------ #
    # Observable events
    # ------------------------------------------------------------------ #
    def _extensions(self, model: Type["Model"]) -> List[str]:
        if model not in self._observables:
            self._observables[model] = _normalize_names(model._meta.observables)
        return self._observables[model]

    def observable_events(self, model: Type["Model"]) -> List[str]:
        return list(dict.fromkeys(BUILTIN_EVENTS + tuple(self._extensions(model))))

    def set_observable_events(self, model: Type["Model"], names: Iterable[str]) -> None:
        self._observables[model] = _normalize_names(names)

    def add_observable_events(self, model: Type["Model"], names: Iterable[str]) -> None:
        extensions = self._extensions(model)
        for name in _normalize_names(names):
            if name not in extensions:
                extensions.append(name)

    def remove_observable_events(self, model: Type["Model"], names: Iterable[str]) -> None:
        removed = set(_normalize_names(names))
        self._observables[model] = [
            name for name in self._extensions(model) if name not in removed
        ]

    # ------------------------------------------------------------------ #
    # Custom events
    # ------------------------------------------------------------------ #
    def custom_events(self, model: Type["Model"]) -> Dict[str, PayloadFactory]:
        if model not in self._custom_events:
            self._custom_events[model] = dict(model._meta.dispatches_events)
        return self._custom_events[model]

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def register(
        self, model: Type["Model"], event: str, callback: Listener, priority: int = 0
    ) -> None:
        dispatcher = self.get_dispatcher(model)
        if dispatcher is None:
            return
        dispatcher.listen(channel_name(event, model), callback, priority)

    def observe(self, model: Type["Model"], target: Any, priority: int = 0) -> None:
        if isinstance(target, (list, tuple)):
            for item in target:
                self.observe(model, item, priority)
            return
        observer = resolve_observer(target)
        table = handler_table(observer, self.observable_events(model))
        if self.get_dispatcher(model) is None:
            self.logger.debug(
                "No event dispatcher for %s; observer %s not registered",
                qualified_name(model),
                type(observer).__name__,
            )
            return
        for event, handler in table.items():
            self.register(model, event, handler, priority)
        self.logger.debug(
            "Observer %s registered for %s on events %s",
            type(observer).__name__,
            qualified_name(model),
            ", ".join(table),
        )

    def flush(self, model: Type["Model"]) -> None:
        dispatcher = self.get_dispatcher(model)
        if dispatcher is None:
            return
        for event in self.observable_events(model):
            dispatcher.forget(channel_name(event, model))
        self.logger.debug("Flushed event listeners for %s", qualified_name(model))

    # ------------------------------------------------------------------ #
    # Firing
    # ------------------------------------------------------------------ #
    def fire(self, instance: "Model", event: str, halt: bool = True) -> Any:
        model = type(instance)
        dispatcher = self.get_dispatcher(model)
        if dispatcher is None:
            return True

        method = "until" if halt else "fire"
        result = self.fire_custom(instance, event, method)
        if result is not None:
            return result
        return getattr(dispatcher, method)(channel_name(event, model), instance)

    def fire_custom(self, instance: "Model", event: str, method: str) -> Any:
        model = type(instance)
        factory = self.custom_events(model).get(event)
        if factory is None:
            return None
        dispatcher = self.get_dispatcher(model)
        if dispatcher is None:
            return None

        result = getattr(dispatcher, method)(factory(instance))
        if method == "fire" and isinstance(result, list):
            # ``fire`` collects every response; only real answers count.
            return [response for response in result if response is not None] or None
        return result

    def clear(self) -> None:
        self._dispatchers.clear()
        self._observables.clear()
        self._custom_events.clear()
        self._suspended.clear()


registry = ModelEventRegistry()
