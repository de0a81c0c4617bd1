"""
Observer capability tables and observer target resolution.
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Iterable, Mapping

from ..utils.naming import is_event_name


Handler = Callable[[Any], Any]


class ObserverResolutionError(LookupError):
    """Raised when an observer given by import path cannot be loaded."""


class Observer:
    """
    Base class for model observers.

    Public methods named after events are collected into ``observed_events``
    when the subclass is defined::

        class UserObserver(Observer):
            def creating(self, user):
                user.slug = slugify(user.name)
    """

    observed_events: ClassVar[FrozenSet[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        names = set()
        for name, member in inspect.getmembers(cls):
            if name.startswith("_") or name == "handlers" or not is_event_name(name):
                continue
            if inspect.isfunction(member) or inspect.ismethod(member):
                names.add(name)
        cls.observed_events = frozenset(names)

    def handlers(self) -> Dict[str, Handler]:
        return {name: getattr(self, name) for name in self.observed_events}


def resolve_observer(target: Any) -> Any:
    """
    Turn an import path or class into an observer instance.
    """

    if isinstance(target, str):
        target = _import_path(target)
    if inspect.isclass(target):
        return target()
    return target


def handler_table(observer: Any, events: Iterable[str]) -> Dict[str, Handler]:
    """
    Build the event-to-handler table of ``observer`` restricted to ``events``.
    """

    wanted = list(events)
    if isinstance(observer, Observer):
        available: Mapping[str, Handler] = observer.handlers()
    elif isinstance(observer, Mapping):
        available = observer
    else:
        available = {}
        for name in wanted:
            handler = getattr(observer, name, None)
            if callable(handler):
                available[name] = handler
    table: Dict[str, Handler] = {}
    for name in wanted:
        handler = available.get(name)
        if handler is not None and callable(handler):
            table[name] = handler
    return table


def _import_path(path: str) -> Any:
    if ":" in path:
        module_name, _, attribute = path.partition(":")
    else:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise ObserverResolutionError(f"Invalid observer path '{path}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ObserverResolutionError(f"Cannot import observer module '{module_name}'") from exc
    try:
        target = module
        for part in attribute.split("."):
            target = getattr(target, part)
    except AttributeError as exc:
        raise ObserverResolutionError(
            f"Module '{module_name}' has no observer named '{attribute}'"
        ) from exc
    return target
