from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CompanySettings:
    """Office geofence singleton read by every punch."""

    latitude: float
    longitude: float
    radius_m: int
    location_name: str
    updated_at: Optional[datetime] = None
    team_name: Optional[str] = None
    is_default: bool = False
