from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Callable, Sequence

from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

Snapshot = Sequence[Notification]
Listener = Callable[[Snapshot], None]


class NotificationFeed:
    """Observer for per-recipient notification changes.

    Every delivery carries the recipient's complete notification list, newest
    first. Subscribers must replace their local state with it, never merge.
    """

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications
        self._listeners: dict[int, list[Listener]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, recipient_id: int, callback: Listener, *, replay: bool = True) -> Callable[[], None]:
        """Register callback; returns the unsubscribe handle.

        With replay, the current snapshot is delivered immediately.
        """
        recipient_id = int(recipient_id)
        with self._lock:
            self._listeners[recipient_id].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(recipient_id, [])
                if callback in listeners:
                    listeners.remove(callback)
                if not listeners:
                    self._listeners.pop(recipient_id, None)

        if replay:
            self._deliver(callback, self.snapshot(recipient_id))
        return unsubscribe

    def subscriber_count(self, recipient_id: int) -> int:
        with self._lock:
            return len(self._listeners.get(int(recipient_id), []))

    def snapshot(self, recipient_id: int) -> Snapshot:
        return list(self._notifications.list_for_recipient(int(recipient_id)))

    def publish(self, recipient_id: int) -> None:
        with self._lock:
            listeners = list(self._listeners.get(int(recipient_id), []))
        if not listeners:
            return

        snapshot = self.snapshot(recipient_id)
        for callback in listeners:
            self._deliver(callback, snapshot)

    @staticmethod
    def _deliver(callback: Listener, snapshot: Snapshot) -> None:
        try:
            callback(snapshot)
        except Exception:
            logger.exception("Notification subscriber failed")
