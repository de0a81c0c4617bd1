"""
Soft-delete support adding the ``restoring``/``restored`` lifecycle.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from ..events.dispatcher import Listener


class SoftDeletes:
    """
    Mixin marking models as deleted through a ``deleted_at`` timestamp.

    Must precede :class:`~modelhooks.core.Model` in the bases::

        class Post(SoftDeletes, Model):
            pass
    """

    _force_deleting = False

    def trashed(self) -> bool:
        return self._attributes.get("deleted_at") is not None

    def restore(self) -> Any:
        if self.fire_model_event("restoring") is False:
            return False
        self.deleted_at = None
        self._exists = True
        result = self.save()
        self.fire_model_event("restored", halt=False)
        return result

    def force_delete(self) -> Optional[bool]:
        self._force_deleting = True
        try:
            return self.delete()
        finally:
            self._force_deleting = False

    def _perform_delete_on_model(self) -> None:
        if self._force_deleting:
            super()._perform_delete_on_model()
            return
        deleted_at = datetime.now(timezone.utc)
        self.deleted_at = deleted_at
        self.perform_update({"deleted_at": deleted_at})
        self._original["deleted_at"] = deleted_at

    @classmethod
    def restoring(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("restoring", callback, priority)

    @classmethod
    def restored(cls, callback: Listener, priority: int = 0) -> None:
        cls.register_model_event("restored", callback, priority)
