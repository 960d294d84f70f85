from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CompanySettings
from .repository import SettingsRepository

SETTINGS_ROW_ID = 1


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[CompanySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT latitude, longitude, radius_m, location_name, team_name, updated_at
                FROM company_settings
                WHERE settings_id=%s
                """,
                (SETTINGS_ROW_ID,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CompanySettings(
                latitude=float(r["latitude"]),
                longitude=float(r["longitude"]),
                radius_m=int(r["radius_m"]),
                location_name=r["location_name"],
                team_name=r.get("team_name"),
                updated_at=r.get("updated_at"),
            )

    def save(self, settings: CompanySettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO company_settings(settings_id, latitude, longitude, radius_m, location_name, team_name, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    latitude=VALUES(latitude), longitude=VALUES(longitude), radius_m=VALUES(radius_m),
                    location_name=VALUES(location_name), team_name=VALUES(team_name), updated_at=VALUES(updated_at)
                """,
                (
                    SETTINGS_ROW_ID,
                    settings.latitude,
                    settings.longitude,
                    int(settings.radius_m),
                    settings.location_name,
                    settings.team_name,
                    settings.updated_at,
                ),
            )
