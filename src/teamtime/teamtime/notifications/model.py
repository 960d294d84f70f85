from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    notification_id: int
    recipient_id: int
    message: str
    type: NotificationType
    read: bool
    created_at: datetime
    link: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "notification_id": self.notification_id,
            "recipient_id": self.recipient_id,
            "message": self.message,
            "type": self.type.value,
            "read": self.read,
            "created_at": self.created_at.isoformat(),
            "link": self.link,
        }
