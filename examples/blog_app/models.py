"""
Data models for the modelhooks blog example.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict

from modelhooks import Model, ModelEvent, SoftDeletes


class PostPublished(ModelEvent):
    """Object event published whenever a post is saved."""


class MemoryModel(Model):
    """
    Keeps rows in a per-class dictionary so the example runs without a database.
    """

    class Meta:
        abstract = True

    rows: Dict[int, Dict[str, Any]] = {}
    _ids = itertools.count(1)

    def perform_insert(self) -> None:
        self.id = next(self._ids)
        self.rows[self.id] = self.to_dict()

    def perform_update(self, changes: Dict[str, Any]) -> None:
        self.rows[self.id].update(changes)

    def perform_delete(self) -> None:
        self.rows.pop(self.id, None)


class Author(MemoryModel):
    rows: Dict[int, Dict[str, Any]] = {}


class Post(SoftDeletes, MemoryModel):
    rows: Dict[int, Dict[str, Any]] = {}

    class Meta:
        observables = ["publishing", "published"]
        dispatches_events = {"saved": PostPublished}

    def publish(self) -> bool:
        if self.fire_model_event("publishing") is False:
            return False
        self.published = True
        saved = self.save()
        if saved:
            self.fire_model_event("published", halt=False)
        return saved
