from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AnnouncementType


@dataclass(frozen=True)
class Announcement:
    announcement_id: int
    message: str
    type: AnnouncementType
    created_by: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "announcement_id": self.announcement_id,
            "message": self.message,
            "type": self.type.value,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }
