from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AnnouncementType
from .model import Announcement


class AnnouncementRepository(Protocol):
    def create(self, *, message: str, type: AnnouncementType, created_by: str, created_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Announcement]:
        """Newest first."""

        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError
