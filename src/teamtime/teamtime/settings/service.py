from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core import constants
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import CompanySettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def default_settings(overrides: Optional[dict] = None) -> CompanySettings:
    data = dict(overrides or {})
    return CompanySettings(
        latitude=float(data.get("latitude", constants.DEFAULT_OFFICE_LATITUDE)),
        longitude=float(data.get("longitude", constants.DEFAULT_OFFICE_LONGITUDE)),
        radius_m=int(data.get("radius_m", constants.DEFAULT_OFFICE_RADIUS_M)),
        location_name=str(data.get("location_name", constants.DEFAULT_OFFICE_NAME)),
        is_default=True,
    )


class SettingsService:
    """Use case: read and configure the office geofence."""

    def __init__(self, settings: SettingsRepository, *, fallback: Optional[CompanySettings] = None):
        self._settings = settings
        self._fallback = fallback or default_settings()

    def get(self) -> CompanySettings:
        current = self._settings.get()
        if current is None:
            return CompanySettings(
                latitude=self._fallback.latitude,
                longitude=self._fallback.longitude,
                radius_m=self._fallback.radius_m,
                location_name=self._fallback.location_name,
                updated_at=now_local(),
                is_default=True,
            )
        return current

    def update(
        self,
        *,
        current_role: Role,
        latitude: float,
        longitude: float,
        radius_m: int,
        location_name: str,
        team_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CompanySettings:
        if current_role not in {Role.ADMIN, Role.MANAGER}:
            raise AuthorizationError("Only Admins and Managers can change the office location")

        try:
            latitude = float(latitude)
            longitude = float(longitude)
            radius_m = int(radius_m)
        except (TypeError, ValueError):
            raise ValidationError("Latitude, longitude and radius must be numbers")

        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise ValidationError("Coordinates are out of range")
        if radius_m <= 0:
            raise ValidationError("Radius must be a positive number of meters")

        settings = CompanySettings(
            latitude=latitude,
            longitude=longitude,
            radius_m=radius_m,
            location_name=require_non_empty(location_name, "Location name"),
            team_name=(team_name or "").strip() or None,
            updated_at=now or now_local(),
        )
        self._settings.save(settings)
        logger.info("Office geofence set to %s (%.6f, %.6f, r=%dm)", settings.location_name, latitude, longitude, radius_m)
        return settings
