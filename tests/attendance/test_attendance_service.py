from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.teamtime.teamtime.attendance.model import AttendanceRecord, PunchState
from src.teamtime.teamtime.attendance.service import AttendanceService, PositionFix
from src.teamtime.teamtime.core.enums import EmployeeStatus, LocationStatus, Mood, Role
from src.teamtime.teamtime.core.exceptions import AuthorizationError, ConflictError, ValidationError

OFFICE = PositionFix(lat=28.6273928, lng=77.3725545)


def test_full_day_in_office(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service

    punched_in = svc.punch_in(alice.employee_id, position=OFFICE, mood="happy", now=fixed_now)
    assert punched_in.location_status == LocationStatus.IN_RANGE
    assert punched_in.distance_m == 0
    assert punched_in.record.mood == Mood.HAPPY
    assert svc.state_for(alice.employee_id, fixed_now.date()) == PunchState.PUNCHED_IN

    punched_out = svc.punch_out(
        alice.employee_id,
        position=OFFICE,
        work_log="Shipped the release",
        now=fixed_now.replace(hour=17, minute=30),
    )
    record = punched_out.record
    assert record.working_minutes == 510
    assert record.work_log == "Shipped the release"
    assert record.punch_in_location.in_office is True
    assert svc.state_for(alice.employee_id, fixed_now.date()) == PunchState.PUNCHED_OUT

    ui = AttendanceService.to_ui(record)
    assert ui["duration"] == "8h 30m"
    assert ui["punch_in_location"] == "In office"


def test_elapsed_minutes_are_truncated(container, employees, fixed_now):
    bob = employees.add("Bob")
    svc = container.attendance_service
    svc.punch_in(bob.employee_id, position=OFFICE, now=fixed_now)

    result = svc.punch_out(bob.employee_id, position=OFFICE, now=fixed_now + timedelta(minutes=59, seconds=59))
    assert result.record.working_minutes == 59


def test_second_punch_in_same_day_is_rejected(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service
    svc.punch_in(alice.employee_id, position=OFFICE, now=fixed_now)

    with pytest.raises(ConflictError):
        svc.punch_in(alice.employee_id, position=OFFICE, now=fixed_now + timedelta(hours=1))


def test_punch_in_after_day_is_complete_is_rejected(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service
    svc.punch_in(alice.employee_id, now=fixed_now)
    svc.punch_out(alice.employee_id, now=fixed_now + timedelta(hours=8))

    with pytest.raises(ConflictError):
        svc.punch_in(alice.employee_id, now=fixed_now + timedelta(hours=9))


def test_punch_without_location_is_recorded_without_sample(container, employees, fixed_now):
    alice = employees.add("Alice")
    result = container.attendance_service.punch_in(
        alice.employee_id,
        position=PositionFix(error="denied"),
        now=fixed_now,
    )

    assert result.location_status == LocationStatus.DENIED
    assert result.record.punch_in_location is None
    assert AttendanceService.to_ui(result.record)["punch_in_location"] == "No location"


def test_missing_position_reports_unavailable(container, employees, fixed_now):
    alice = employees.add("Alice")
    result = container.attendance_service.punch_in(alice.employee_id, position=None, now=fixed_now)
    assert result.location_status == LocationStatus.UNAVAILABLE


def test_out_of_range_punch_is_allowed_and_labelled(container, employees, fixed_now):
    alice = employees.add("Alice")
    result = container.attendance_service.punch_in(
        alice.employee_id,
        position=PositionFix(lat=28.70, lng=77.40),
        now=fixed_now,
    )

    assert result.location_status == LocationStatus.OUT_OF_RANGE
    assert result.distance_m > 300
    assert AttendanceService.to_ui(result.record)["punch_in_location"] == f"Remote ({result.distance_m}m away)"


def test_classification_is_frozen_at_punch_time(container, employees, fixed_now):
    alice = employees.add("Alice")
    container.attendance_service.punch_in(alice.employee_id, position=OFFICE, now=fixed_now)

    container.settings_service.update(
        current_role=Role.ADMIN,
        latitude=0,
        longitude=0,
        radius_m=10,
        location_name="Elsewhere",
    )

    record = container.attendance_service.get_today_record(alice.employee_id, fixed_now.date())
    assert record.punch_in_location.in_office is True


def test_work_log_is_read_only_after_punch_out(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service
    record = svc.punch_in(alice.employee_id, now=fixed_now).record

    updated = svc.update_work_log(alice.employee_id, record_id=record.record_id, work_log="  drafting  ")
    assert updated.work_log == "drafting"

    svc.punch_out(alice.employee_id, now=fixed_now + timedelta(hours=1))
    with pytest.raises(ValidationError):
        svc.update_work_log(alice.employee_id, record_id=record.record_id, work_log="late edit")


def test_cannot_edit_someone_elses_work_log(container, employees, fixed_now):
    alice = employees.add("Alice")
    bob = employees.add("Bob")
    record = container.attendance_service.punch_in(alice.employee_id, now=fixed_now).record

    with pytest.raises(AuthorizationError):
        container.attendance_service.update_work_log(bob.employee_id, record_id=record.record_id, work_log="x")


def test_punch_out_without_punch_in(container, employees, fixed_now):
    alice = employees.add("Alice")
    with pytest.raises(ValidationError):
        container.attendance_service.punch_out(alice.employee_id, now=fixed_now)


def test_inactive_employee_cannot_punch_in(container, employees, fixed_now):
    ghost = employees.add("Ghost", status=EmployeeStatus.INACTIVE)
    with pytest.raises(AuthorizationError):
        container.attendance_service.punch_in(ghost.employee_id, now=fixed_now)


def test_invalid_mood_is_rejected(container, employees, fixed_now):
    alice = employees.add("Alice")
    with pytest.raises(ValidationError):
        container.attendance_service.punch_in(alice.employee_id, mood="ecstatic", now=fixed_now)


def test_working_now_lists_only_open_sessions(container, employees, fixed_now):
    alice = employees.add("Alice")
    bob = employees.add("Bob")
    svc = container.attendance_service
    svc.punch_in(alice.employee_id, now=fixed_now)
    svc.punch_in(bob.employee_id, now=fixed_now)
    svc.punch_out(bob.employee_id, now=fixed_now + timedelta(hours=2))

    working = svc.working_now()
    assert [r.employee_id for r in working] == [alice.employee_id]


def test_history_is_newest_first_and_limited(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service
    for day in range(7):
        start = fixed_now + timedelta(days=day)
        svc.punch_in(alice.employee_id, now=start)
        svc.punch_out(alice.employee_id, now=start + timedelta(hours=8))

    history = svc.get_history_ui(alice.employee_id)
    assert len(history) == 5
    assert history[0]["date"] == (fixed_now + timedelta(days=6)).strftime("%Y-%m-%d")
    assert len(svc.get_weekly_ui(alice.employee_id)) == 7


def test_open_session_ui_shows_running_time():
    record = AttendanceRecord(
        record_id=1,
        employee_id=1,
        work_date=datetime(2026, 3, 2).date(),
        punch_in=datetime(2026, 3, 2, 9, 0),
        punch_out=None,
    )
    ui = AttendanceService.to_ui(record, now=datetime(2026, 3, 2, 10, 15))
    assert ui["working_minutes"] == 75
    assert ui["duration"] == "1h 15m"
    assert ui["punch_out"] == "-"


def test_open_session_from_yesterday_blocks_punch_in(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service
    svc.punch_in(alice.employee_id, position=OFFICE, now=fixed_now)

    next_day = fixed_now + timedelta(days=1)
    with pytest.raises(ConflictError, match="still punched in since 2026-03-02"):
        svc.punch_in(alice.employee_id, position=OFFICE, now=next_day)

    assert len([r for r in svc.list_all() if r.is_open]) == 1
    assert svc.state_for(alice.employee_id, next_day.date()) == PunchState.PUNCHED_IN
    assert svc.get_today_record(alice.employee_id, next_day.date()).work_date == fixed_now.date()
    assert [r.employee_id for r in svc.working_now()] == [alice.employee_id]


def test_punch_out_closes_session_left_open_overnight(container, employees, fixed_now):
    alice = employees.add("Alice")
    svc = container.attendance_service
    svc.punch_in(alice.employee_id, now=fixed_now)

    next_morning = fixed_now + timedelta(days=1)
    closed = svc.punch_out(alice.employee_id, now=next_morning).record
    assert closed.work_date == fixed_now.date()
    assert closed.working_minutes == 24 * 60
    assert svc.working_now() == []

    reopened = svc.punch_in(alice.employee_id, now=next_morning + timedelta(minutes=5)).record
    assert reopened.work_date == next_morning.date()
