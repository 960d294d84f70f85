from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AnnouncementType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Announcement
from .repository import AnnouncementRepository


def _row_to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["announcement_id"]),
        message=r["message"],
        type=AnnouncementType(r["type"]),
        created_by=r["created_by"],
        created_at=r["created_at"],
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, message: str, type: AnnouncementType, created_by: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO announcements(message, type, created_by, created_at) VALUES(%s,%s,%s,%s)",
                (message, type.value, created_by, created_at),
            )
            return int(cur.lastrowid)

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT announcement_id, message, type, created_by, created_at FROM announcements WHERE announcement_id=%s",
                (int(announcement_id),),
            )
            r = fetchone(cur)
            return _row_to_announcement(r) if r else None

    def list_all(self) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT announcement_id, message, type, created_by, created_at
                FROM announcements
                ORDER BY created_at DESC, announcement_id DESC
                """
            )
            return [_row_to_announcement(r) for r in fetchall(cur)]

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE announcement_id=%s", (int(announcement_id),))
            return cur.rowcount > 0
