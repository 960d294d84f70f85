from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import clock_time, elapsed_minutes, format_duration, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, WEEKLY_HISTORY_LIMIT
from ..core.enums import LocationStatus, Mood
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..geofence.evaluator import evaluate
from ..settings.model import CompanySettings
from ..settings.service import SettingsService
from ..users.repository import EmployeeRepository
from .model import AttendanceRecord, LocationSample, PunchState
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_POSITION_ERRORS = {
    "denied": LocationStatus.DENIED,
    "permission_denied": LocationStatus.DENIED,
    "timeout": LocationStatus.ERROR,
    "unsupported": LocationStatus.ERROR,
    "error": LocationStatus.ERROR,
}


@dataclass(frozen=True)
class PositionFix:
    """What the device reported: coordinates, or the reason it could not provide them."""

    lat: Optional[float] = None
    lng: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Optional[dict]) -> Optional["PositionFix"]:
        if not payload:
            return None
        error = payload.get("error")
        try:
            lat = float(payload["lat"]) if payload.get("lat") is not None else None
            lng = float(payload["lng"]) if payload.get("lng") is not None else None
        except (TypeError, ValueError):
            raise ValidationError("Latitude and longitude must be numbers")
        return cls(lat=lat, lng=lng, error=str(error) if error else None)


@dataclass(frozen=True)
class PunchResult:
    record: AttendanceRecord
    location_status: LocationStatus
    distance_m: Optional[int] = None


def classify_position(
    position: Optional[PositionFix], settings: CompanySettings
) -> tuple[Optional[LocationSample], LocationStatus]:
    """Evaluate a device fix against the geofence snapshot taken for this punch."""
    if position is None:
        return None, LocationStatus.UNAVAILABLE
    if position.error or position.lat is None or position.lng is None:
        return None, _POSITION_ERRORS.get((position.error or "").lower(), LocationStatus.UNAVAILABLE)

    result = evaluate(position.lat, position.lng, settings.latitude, settings.longitude, settings.radius_m)
    sample = LocationSample(
        lat=position.lat,
        lng=position.lng,
        in_office=result.in_range,
        distance_m=result.display_distance_m,
    )
    return sample, sample.status


def location_label(sample: Optional[LocationSample]) -> str:
    if sample is None:
        return "No location"
    if sample.in_office:
        return "In office"
    if sample.distance_m is not None:
        return f"Remote ({sample.distance_m}m away)"
    return "Remote"


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        settings: SettingsService,
    ):
        self._attendance = attendance
        self._employees = employees
        self._settings = settings

    def _require_active_employee(self, employee_id: int):
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise AuthorizationError("Account inactive")
        return employee

    def punch_in(
        self,
        employee_id: int,
        *,
        position: Optional[PositionFix] = None,
        mood: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PunchResult:
        now = now or now_local()
        today = now.date()

        self._require_active_employee(employee_id)

        still_open = self._attendance.get_open_for_employee(int(employee_id))
        if still_open and still_open.work_date != today:
            raise ConflictError(
                f"You are still punched in since {still_open.work_date.isoformat()}. Punch out first."
            )

        existing = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if existing:
            if existing.is_open:
                raise ConflictError("You have already punched in today")
            raise ConflictError("Attendance for today is already complete")

        try:
            mood_value = Mood(mood) if mood else Mood.NEUTRAL
        except ValueError:
            raise ValidationError("Mood is invalid")

        settings = self._settings.get()
        sample, status = classify_position(position, settings)

        record_id = self._attendance.create_punch_in(
            employee_id=int(employee_id),
            work_date=today,
            punch_in=now,
            location=sample,
            mood=mood_value,
        )
        logger.info("Employee %s punched in at %s (%s)", employee_id, now.isoformat(), status.value)

        record = self._attendance.get_by_id(record_id)
        return PunchResult(record=record, location_status=status, distance_m=sample.distance_m if sample else None)

    def punch_out(
        self,
        employee_id: int,
        *,
        position: Optional[PositionFix] = None,
        work_log: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PunchResult:
        now = now or now_local()
        today = now.date()

        # an open session from an earlier day is closed here too
        record = self._current_record(int(employee_id), today)
        if not record:
            raise ValidationError("You have not punched in today")
        if not record.is_open:
            raise ConflictError("You have already punched out today")

        minutes = elapsed_minutes(record.punch_in, now)
        if minutes < 0:
            raise ValidationError("Punch-out cannot be earlier than punch-in")

        settings = self._settings.get()
        sample, status = classify_position(position, settings)

        ok = self._attendance.update_punch_out(
            record_id=record.record_id,
            punch_out=now,
            working_minutes=minutes,
            location=sample,
            work_log=work_log.strip() if work_log is not None else None,
        )
        if not ok:
            raise ConflictError("You have already punched out today")
        logger.info("Employee %s punched out after %d minutes (%s)", employee_id, minutes, status.value)

        updated = self._attendance.get_by_id(record.record_id)
        return PunchResult(record=updated, location_status=status, distance_m=sample.distance_m if sample else None)

    def update_work_log(self, employee_id: int, *, record_id: int, work_log: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.employee_id != int(employee_id):
            raise AuthorizationError("You can only edit your own work log")
        if not record.is_open:
            raise ValidationError("The work log is read-only after punch-out")

        self._attendance.update_work_log(record_id=record.record_id, work_log=(work_log or "").strip())
        return self._attendance.get_by_id(record.record_id)

    def _current_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_open_for_employee(employee_id) or self._attendance.get_for_employee_and_date(
            employee_id, today
        )

    def state_for(self, employee_id: int, today: date) -> PunchState:
        record = self._current_record(int(employee_id), today)
        return record.state if record else PunchState.NO_RECORD

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        """Today's record, or an older session that was never punched out."""
        return self._current_record(int(employee_id), today)

    def get_history_ui(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_employee(int(employee_id), int(limit))
        return [self.to_ui(r) for r in rows]

    def get_weekly_ui(self, employee_id: int) -> list[dict]:
        return self.get_history_ui(employee_id, limit=WEEKLY_HISTORY_LIMIT)

    def team_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)

    def working_now(self) -> Sequence[AttendanceRecord]:
        """Colleagues currently punched in, including sessions opened on an earlier day."""
        return list(self._attendance.list_open())

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    @staticmethod
    def to_ui(r: AttendanceRecord, *, now: Optional[datetime] = None) -> dict:
        if r.is_open and now is not None:
            minutes = max(elapsed_minutes(r.punch_in, now), 0)
        else:
            minutes = r.working_minutes

        return {
            "record_id": r.record_id,
            "employee_id": r.employee_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "punch_in": clock_time(r.punch_in),
            "punch_out": clock_time(r.punch_out),
            "state": r.state.value,
            "working_minutes": minutes,
            "duration": format_duration(minutes),
            "punch_in_location": location_label(r.punch_in_location),
            "punch_out_location": location_label(r.punch_out_location) if r.punch_out else "-",
            "work_log": r.work_log,
            "mood": r.mood.value,
        }
