"""
Model-facing event API mixed into :class:`modelhooks.core.Model`.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from .dispatcher import Dispatcher, Listener

if TYPE_CHECKING:
    from .registry import ModelEventRegistry


def _flatten(names: tuple) -> list:
    if len(names) == 1 and isinstance(names[0], (list, tuple, set, frozenset)):
        return list(names[0])
    return list(names)


class HasEvents:
    """
    Lifecycle event registration and firing for model classes.

    All state lives in the model's :class:`ModelEventRegistry`, taken from
    ``Meta.registry`` and defaulting to the package-wide registry.
    """

    @classmethod
    def _event_registry(cls) -> "ModelEventRegistry":
        return cls._meta.registry

    # Observers --------------------------------------------------------
    @classmethod
    def observe(cls, target: Any, priority: int = 0) -> None:
        """
        Register an observer with the model.

        ``target`` may be an :class:`~modelhooks.events.Observer`, any object
        with methods named after events, a mapping of event name to handler,
        a class (instantiated without arguments), an import path such as
        ``"app.observers:UserObserver"``, or a list of those.
        """
        cls._event_registry().observe(cls, target, priority)

    # Observable event names -------------------------------------------
    def get_observable_events(self) -> List[str]:
        return self._event_registry().observable_events(type(self))

    def set_observable_events(self, observables: List[str]):
        self._event_registry().set_observable_events(type(self), observables)
        return self

    def add_observable_events(self, *observables: Any) -> None:
        self._event_registry().add_observable_events(type(self), _flatten(observables))

    def remove_observable_events(self, *observables: Any) -> None:
        self._event_registry().remove_observable_events(type(self), _flatten(observables))

    # Registration -----------------------------------------------------
    @classmethod
    def register_model_event(cls, event: str, callback: Listener, priority: int = 0) -> None:
        cls._event_registry().register(cls, event, callback, priority)

    @classmethod
    def saving(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("saving", callback, priority)

    @classmethod
    def saved(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("saved", callback, priority)

    @classmethod
    def updating(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("updating", callback, priority)

    @classmethod
    def updated(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("updated", callback, priority)

    @classmethod
    def creating(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("creating", callback, priority)

    @classmethod
    def created(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("created", callback, priority)

    @classmethod
    def deleting(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("deleting", callback, priority)

    @classmethod
    def deleted(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("deleted", callback, priority)

    @classmethod
    def flush_event_listeners(cls) -> None:
        """
        Remove every listener registered on this model's event channels.
        """
        cls._event_registry().flush(cls)

    # Firing -----------------------------------------------------------
    def fire_model_event(self, event: str, halt: bool = True) -> Any:
        """
        Fire ``event`` for this instance.

        Returns ``True`` when no dispatcher is configured. With ``halt`` the
        first non-``None`` listener response is returned (``False`` vetoes the
        operation); otherwise the list of responses is returned.
        """
        return self._event_registry().fire(self, event, halt)

    def fire_custom_model_event(self, event: str, method: str) -> Any:
        return self._event_registry().fire_custom(self, event, method)

    # Dispatcher -------------------------------------------------------
    @classmethod
    def get_event_dispatcher(cls) -> Optional[Dispatcher]:
        return cls._event_registry().get_dispatcher(cls)

    @classmethod
    def set_event_dispatcher(cls, dispatcher: Dispatcher) -> None:
        cls._event_registry().set_dispatcher(cls, dispatcher)

    @classmethod
    def unset_event_dispatcher(cls) -> None:
        cls._event_registry().unset_dispatcher(cls)

    @classmethod
    @contextmanager
    def without_events(cls) -> Iterator[None]:
        with cls._event_registry().suspended(cls):
            yield
