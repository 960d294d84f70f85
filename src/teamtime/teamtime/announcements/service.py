from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import AnnouncementType, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)

_PUBLISHERS = {Role.ADMIN, Role.MANAGER}


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def list_all(self) -> Sequence[Announcement]:
        return self._announcements.list_all()

    def create(
        self,
        *,
        current_role: Role,
        author_name: str,
        message: str,
        type: str = AnnouncementType.INFO.value,
        now: Optional[datetime] = None,
    ) -> Announcement:
        if current_role not in _PUBLISHERS:
            raise AuthorizationError("Only Admins and Managers can post announcements")

        announcement_id = self._announcements.create(
            message=require_non_empty(message, "Message"),
            type=parse_enum(AnnouncementType, type, "Announcement type"),
            created_by=author_name,
            created_at=now or now_local(),
        )
        logger.info("Announcement %s posted by %s", announcement_id, author_name)
        return self._announcements.get_by_id(announcement_id)

    def delete(self, *, current_role: Role, announcement_id: int) -> None:
        if current_role not in _PUBLISHERS:
            raise AuthorizationError("Only Admins and Managers can remove announcements")
        if not self._announcements.delete(int(announcement_id)):
            raise NotFoundError("Announcement not found")
