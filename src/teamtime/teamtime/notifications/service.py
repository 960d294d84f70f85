from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import NotificationType
from ..core.exceptions import AuthorizationError, NotFoundError
from .feed import NotificationFeed
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository, feed: NotificationFeed):
        self._notifications = notifications
        self._feed = feed

    @property
    def feed(self) -> NotificationFeed:
        return self._feed

    def notify(
        self,
        recipient_id: int,
        message: str,
        *,
        type: NotificationType = NotificationType.INFO,
        link: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        notification_id = self._notifications.create(
            recipient_id=int(recipient_id),
            message=message,
            type=type,
            created_at=now or now_local(),
            link=link,
        )
        self._feed.publish(recipient_id)
        return notification_id

    def notify_safely(self, recipient_id: Optional[int], message: str, **kwargs) -> Optional[int]:
        """Side-effect notification: a failure is logged, never raised to the caller."""
        if recipient_id is None:
            logger.warning("Notification dropped, no recipient: %s", message)
            return None
        try:
            return self.notify(recipient_id, message, **kwargs)
        except Exception:
            logger.warning("Failed to send notification to %s", recipient_id, exc_info=True)
            return None

    def list_for(self, recipient_id: int) -> Sequence[Notification]:
        return self._notifications.list_for_recipient(int(recipient_id))

    def unread_count(self, recipient_id: int) -> int:
        return sum(1 for n in self.list_for(recipient_id) if not n.read)

    def mark_read(self, recipient_id: int, notification_id: int) -> Notification:
        notification = self._notifications.get_by_id(int(notification_id))
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.recipient_id != int(recipient_id):
            raise AuthorizationError("This notification belongs to someone else")

        if notification.read:
            return notification

        self._notifications.mark_read(notification.notification_id)
        self._feed.publish(recipient_id)
        return self._notifications.get_by_id(notification.notification_id)

    def clear_all(self, recipient_id: int) -> int:
        removed = self._notifications.delete_for_recipient(int(recipient_id))
        self._feed.publish(recipient_id)
        return removed
