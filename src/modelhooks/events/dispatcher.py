"""
Event dispatcher delivering payloads to priority-ordered listeners.
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from dataclasses import dataclass
from fnmatch import fnmatchcase
from threading import RLock
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple, Union

from ..utils import get_logger, qualified_name, time_call


Listener = Callable[[Any], Any]
EventSpec = Union[str, Iterable[str]]


class Dispatcher(Protocol):
    def listen(self, events: EventSpec, listener: Listener, priority: int = 0) -> None: ...

    def until(self, event: Any, payload: Any = None) -> Any: ...

    def fire(self, event: Any, payload: Any = None, halt: bool = False) -> Any: ...

    def forget(self, event: str) -> None: ...

    def has_listeners(self, event: str) -> bool: ...


@dataclass(frozen=True)
class ListenerRegistration:
    listener: Listener
    priority: int
    sequence: int

    @property
    def sort_key(self) -> Tuple[int, int]:
        return (-self.priority, self.sequence)


class EventDispatcher:
    """
    In-process dispatcher with priorities and shell-style wildcard channels.

    Listeners with a higher priority run first; equal priorities run in the
    order they were registered. Wildcard listeners (channel names containing
    ``*``) run after the exact listeners of a channel.
    """

    def __init__(self, *, slow_threshold_ms: int = 100) -> None:
        self._listeners: Dict[str, List[ListenerRegistration]] = defaultdict(list)
        self._wildcards: Dict[str, List[ListenerRegistration]] = defaultdict(list)
        self._sequence = itertools.count()
        self._lock = RLock()
        self.slow_threshold_ms = slow_threshold_ms
        self.logger = get_logger("events.dispatcher")

    def listen(self, events: EventSpec, listener: Listener, priority: int = 0) -> None:
        names = [events] if isinstance(events, str) else list(events)
        with self._lock:
            for name in names:
                registration = ListenerRegistration(listener, priority, next(self._sequence))
                if "*" in name:
                    self._wildcards[name].append(registration)
                else:
                    self._listeners[name].append(registration)

    def has_listeners(self, event: str) -> bool:
        with self._lock:
            if self._listeners.get(event):
                return True
            return any(
                registrations and fnmatchcase(event, pattern)
                for pattern, registrations in self._wildcards.items()
            )

    def get_listeners(self, event: str) -> List[Listener]:
        with self._lock:
            exact = sorted(self._listeners.get(event, []), key=lambda item: item.sort_key)
            wildcard = sorted(
                (
                    registration
                    for pattern, registrations in self._wildcards.items()
                    if fnmatchcase(event, pattern)
                    for registration in registrations
                ),
                key=lambda item: item.sort_key,
            )
        return [registration.listener for registration in exact + wildcard]

    def until(self, event: Any, payload: Any = None) -> Any:
        return self.fire(event, payload, halt=True)

    def fire(self, event: Any, payload: Any = None, halt: bool = False) -> Any:
        channel, payload = self._parse_event(event, payload)
        listeners = self.get_listeners(channel)
        responses: List[Any] = []
        with time_call(
            "dispatch",
            self.logger,
            channel=channel,
            listeners=len(listeners),
            threshold_ms=self.slow_threshold_ms,
        ) as timer:
            for index, listener in enumerate(listeners, start=1):
                response = listener(payload)
                if halt:
                    if response is not None:
                        timer.note(halted_after=index)
                        return response
                    continue
                responses.append(response)
                # Returning False stops propagation to later listeners.
                if response is False:
                    timer.note(halted_after=index)
                    break
        return None if halt else responses

    def forget(self, event: str) -> None:
        with self._lock:
            if "*" in event:
                self._wildcards.pop(event, None)
            else:
                self._listeners.pop(event, None)

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()
            self._wildcards.clear()

    @staticmethod
    def _parse_event(event: Any, payload: Optional[Any]) -> Tuple[str, Any]:
        if isinstance(event, str):
            return event, payload
        return qualified_name(type(event)), event
