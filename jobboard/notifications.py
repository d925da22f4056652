"""Per-user notification feed (newest first)."""
from __future__ import annotations

import uuid
from dataclasses import replace

from jobboard.clock import SystemClock
from jobboard.errors import InvalidField
from jobboard.log import get_logger
from jobboard.models import NOTIFICATION_KINDS, PRIORITIES, Notification

log = get_logger(__name__)


class NotificationCenter:
    def __init__(self, clock=None) -> None:
        self._clock = clock or SystemClock()
        self._items: list[Notification] = []

    def push(
        self,
        user_id: str,
        kind: str,
        title: str,
        message: str,
        priority: str = "medium",
    ) -> Notification:
        if kind not in NOTIFICATION_KINDS:
            raise InvalidField("kind", f"unknown notification kind '{kind}'")
        if priority not in PRIORITIES:
            raise InvalidField("priority", f"unknown priority '{priority}'")
        note = Notification(
            id=uuid.uuid4().hex[:10],
            user_id=user_id,
            kind=kind,
            title=title,
            message=message,
            timestamp=self._clock.now(),
            priority=priority,
        )
        self._items.insert(0, note)
        log.debug("Notify %s: %s", user_id, title)
        return note

    def for_user(self, user_id: str) -> list[Notification]:
        return [n for n in self._items if n.user_id == user_id]

    def unread_count(self, user_id: str) -> int:
        return sum(1 for n in self._items if n.user_id == user_id and not n.read)

    def mark_read(self, user_id: str, notification_id: str) -> bool:
        for i, n in enumerate(self._items):
            if n.id == notification_id and n.user_id == user_id:
                if not n.read:
                    self._items[i] = replace(n, read=True)
                return True
        return False

    def mark_all_read(self, user_id: str) -> int:
        changed = 0
        for i, n in enumerate(self._items):
            if n.user_id == user_id and not n.read:
                self._items[i] = replace(n, read=True)
                changed += 1
        return changed

    def remove(self, user_id: str, notification_id: str) -> bool:
        before = len(self._items)
        self._items = [
            n for n in self._items
            if not (n.id == notification_id and n.user_id == user_id)
        ]
        return len(self._items) != before
