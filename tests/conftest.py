"""In-memory repositories shared by the service and controller tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.teamtime.teamtime.announcements.model import Announcement
from src.teamtime.teamtime.attendance.model import AttendanceRecord
from src.teamtime.teamtime.breaks.model import BreakRecord
from src.teamtime.teamtime.container import Container, wire_container
from src.teamtime.teamtime.core.enums import EmployeeStatus, LeaveStatus, Role, TaskStatus
from src.teamtime.teamtime.leaves.model import LeaveRecord
from src.teamtime.teamtime.notifications.model import Notification
from src.teamtime.teamtime.tasks.model import Task, TaskComment
from src.teamtime.teamtime.users.model import Employee


class InMemoryEmployees:
    def __init__(self):
        self._items: dict[int, Employee] = {}
        self._id = 0

    def add(
        self,
        name: str,
        role: Role = Role.EMPLOYEE,
        *,
        email: Optional[str] = None,
        password: str = "secret",
        phone: Optional[str] = None,
        status: EmployeeStatus = EmployeeStatus.ACTIVE,
    ) -> Employee:
        employee_id = self.create(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            password_hash=generate_password_hash(password),
            role=role,
            phone=phone,
            designation="Member",
            joining_date=date(2026, 1, 5),
        )
        if status != EmployeeStatus.ACTIVE:
            self.update_status(employee_id, status=status)
        return self._items[employee_id]

    def get_by_id(self, employee_id):
        return self._items.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self._items.values() if e.email == email.strip().lower()), None)

    def get_by_phone(self, phone):
        return next((e for e in self._items.values() if e.phone == phone), None)

    def list_all(self):
        return sorted(self._items.values(), key=lambda e: e.name)

    def count(self):
        return len(self._items)

    def create(self, *, name, email, password_hash, role, phone, designation, joining_date):
        self._id += 1
        self._items[self._id] = Employee(
            employee_id=self._id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            phone=phone,
            designation=designation,
            joining_date=joining_date,
        )
        return self._id

    def update_status(self, employee_id, *, status):
        return self._update(employee_id, status=status)

    def update_password(self, employee_id, *, password_hash):
        return self._update(employee_id, password_hash=password_hash)

    def update_profile(self, employee_id, *, fields):
        return self._update(employee_id, **fields)

    def delete_by_id(self, employee_id):
        return self._items.pop(int(employee_id), None) is not None

    def _update(self, employee_id, **changes):
        current = self._items.get(int(employee_id))
        if not current:
            return False
        self._items[current.employee_id] = replace(current, **changes)
        return True


class InMemoryAttendance:
    def __init__(self):
        self._items: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_by_id(self, record_id):
        return self._items.get(int(record_id))

    def get_for_employee_and_date(self, employee_id, work_date):
        return next(
            (r for r in self._items.values() if r.employee_id == int(employee_id) and r.work_date == work_date),
            None,
        )

    def get_open_for_employee(self, employee_id):
        return next((r for r in self._items.values() if r.employee_id == int(employee_id) and r.is_open), None)

    def list_open(self):
        return sorted((r for r in self._items.values() if r.is_open), key=lambda r: r.punch_in)

    def get_recent_for_employee(self, employee_id, limit):
        rows = [r for r in self._items.values() if r.employee_id == int(employee_id)]
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows[:limit]

    def list_for_date(self, work_date):
        return [r for r in self._items.values() if r.work_date == work_date]

    def list_all(self):
        return sorted(self._items.values(), key=lambda r: r.work_date, reverse=True)

    def create_punch_in(self, *, employee_id, work_date, punch_in, location, mood):
        self._id += 1
        self._items[self._id] = AttendanceRecord(
            record_id=self._id,
            employee_id=int(employee_id),
            work_date=work_date,
            punch_in=punch_in,
            punch_out=None,
            punch_in_location=location,
            mood=mood,
        )
        return self._id

    def update_punch_out(self, *, record_id, punch_out, working_minutes, location, work_log=None):
        current = self._items.get(int(record_id))
        if not current or current.punch_out is not None:
            return False
        self._items[current.record_id] = replace(
            current,
            punch_out=punch_out,
            working_minutes=working_minutes,
            punch_out_location=location,
            work_log=current.work_log if work_log is None else work_log,
        )
        return True

    def update_work_log(self, *, record_id, work_log):
        current = self._items.get(int(record_id))
        if not current:
            return False
        self._items[current.record_id] = replace(current, work_log=work_log)
        return True


class InMemoryBreaks:
    def __init__(self):
        self._items: dict[int, BreakRecord] = {}
        self._id = 0

    def get_by_id(self, break_id):
        return self._items.get(int(break_id))

    def list_for_employee_and_date(self, employee_id, work_date):
        return [b for b in self._items.values() if b.employee_id == int(employee_id) and b.work_date == work_date]

    def list_all(self):
        return list(self._items.values())

    def create_start(self, *, employee_id, work_date, break_type, break_start):
        self._id += 1
        self._items[self._id] = BreakRecord(
            break_id=self._id,
            employee_id=int(employee_id),
            work_date=work_date,
            break_type=break_type,
            break_start=break_start,
        )
        return self._id

    def update_end(self, *, break_id, break_end, duration_minutes):
        current = self._items.get(int(break_id))
        if not current:
            return False
        self._items[current.break_id] = replace(current, break_end=break_end, duration_minutes=duration_minutes)
        return True


class InMemoryLeaves:
    def __init__(self):
        self._items: dict[int, LeaveRecord] = {}
        self._id = 0

    def create(self, *, employee_id, date_from, date_to, reason, approver_name, approver_id, applied_on, is_half_day, half_day_type):
        self._id += 1
        self._items[self._id] = LeaveRecord(
            leave_id=self._id,
            employee_id=int(employee_id),
            date_from=date_from,
            date_to=date_to,
            reason=reason,
            approver_name=approver_name,
            approver_id=approver_id,
            status=LeaveStatus.PENDING,
            applied_on=applied_on,
            is_half_day=is_half_day,
            half_day_type=half_day_type,
        )
        return self._id

    def get_by_id(self, leave_id):
        return self._items.get(int(leave_id))

    def list_all(self):
        return sorted(self._items.values(), key=lambda lv: lv.applied_on, reverse=True)

    def list_for_employee(self, employee_id):
        return [lv for lv in self.list_all() if lv.employee_id == int(employee_id)]

    def update_status(self, *, leave_id, status, expected_status, approver_response=None, cancel_from_status=None):
        current = self._items.get(int(leave_id))
        if not current or current.status != expected_status:
            return False
        self._items[current.leave_id] = replace(
            current,
            status=status,
            approver_response=current.approver_response if approver_response is None else approver_response,
            cancel_from_status=cancel_from_status,
        )
        return True


class InMemoryTasks:
    def __init__(self):
        self._items: dict[int, Task] = {}
        self._comments: dict[int, TaskComment] = {}
        self._id = 0
        self._comment_id = 0

    def create(self, *, title, description, assigned_by_id, assigned_by_name, assigned_to_id, assigned_to_name, priority, due_date, assigned_date):
        self._id += 1
        self._items[self._id] = Task(
            task_id=self._id,
            title=title,
            description=description,
            assigned_by_id=assigned_by_id,
            assigned_by_name=assigned_by_name,
            assigned_to_id=assigned_to_id,
            assigned_to_name=assigned_to_name,
            assigned_date=assigned_date,
            priority=priority,
            status=TaskStatus.PENDING,
            due_date=due_date,
            updated_at=assigned_date,
        )
        return self._id

    def get_by_id(self, task_id):
        return self._items.get(int(task_id))

    def list_all(self):
        return sorted(self._items.values(), key=lambda t: t.assigned_date, reverse=True)

    def update_fields(self, task_id, *, fields, updated_at):
        current = self._items.get(int(task_id))
        if not current:
            return False
        self._items[current.task_id] = replace(current, updated_at=updated_at, **fields)
        return True

    def update_status(self, task_id, *, status, completed_at, updated_at):
        current = self._items.get(int(task_id))
        if not current:
            return False
        self._items[current.task_id] = replace(current, status=status, completed_at=completed_at, updated_at=updated_at)
        return True

    def delete(self, task_id):
        self._comments = {k: c for k, c in self._comments.items() if c.task_id != int(task_id)}
        return self._items.pop(int(task_id), None) is not None

    def add_comment(self, *, task_id, user_id, user_name, content, created_at):
        self._comment_id += 1
        self._comments[self._comment_id] = TaskComment(
            comment_id=self._comment_id,
            task_id=int(task_id),
            user_id=int(user_id),
            user_name=user_name,
            content=content,
            created_at=created_at,
        )
        return self._comment_id

    def list_comments(self, task_id):
        return sorted(
            (c for c in self._comments.values() if c.task_id == int(task_id)),
            key=lambda c: (c.created_at, c.comment_id),
        )


class InMemoryNotifications:
    def __init__(self):
        self._items: dict[int, Notification] = {}
        self._id = 0
        self.writes = 0

    def create(self, *, recipient_id, message, type, created_at, link=None):
        self._id += 1
        self.writes += 1
        self._items[self._id] = Notification(
            notification_id=self._id,
            recipient_id=int(recipient_id),
            message=message,
            type=type,
            read=False,
            created_at=created_at,
            link=link,
        )
        return self._id

    def get_by_id(self, notification_id):
        return self._items.get(int(notification_id))

    def list_for_recipient(self, recipient_id):
        rows = [n for n in self._items.values() if n.recipient_id == int(recipient_id)]
        return sorted(rows, key=lambda n: (n.created_at, n.notification_id), reverse=True)

    def mark_read(self, notification_id):
        current = self._items.get(int(notification_id))
        if not current:
            return False
        self.writes += 1
        self._items[current.notification_id] = replace(current, read=True)
        return True

    def delete_for_recipient(self, recipient_id):
        doomed = [k for k, n in self._items.items() if n.recipient_id == int(recipient_id)]
        for k in doomed:
            del self._items[k]
        return len(doomed)


class InMemoryAnnouncements:
    def __init__(self):
        self._items: dict[int, Announcement] = {}
        self._id = 0

    def create(self, *, message, type, created_by, created_at):
        self._id += 1
        self._items[self._id] = Announcement(
            announcement_id=self._id,
            message=message,
            type=type,
            created_by=created_by,
            created_at=created_at,
        )
        return self._id

    def get_by_id(self, announcement_id):
        return self._items.get(int(announcement_id))

    def list_all(self):
        return sorted(self._items.values(), key=lambda a: (a.created_at, a.announcement_id), reverse=True)

    def delete(self, announcement_id):
        return self._items.pop(int(announcement_id), None) is not None


class InMemorySettings:
    def __init__(self, current=None):
        self.current = current

    def get(self):
        return self.current

    def save(self, settings):
        self.current = settings


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def container(employees) -> Container:
    return wire_container(
        employees_repo=employees,
        attendance_repo=InMemoryAttendance(),
        breaks_repo=InMemoryBreaks(),
        leaves_repo=InMemoryLeaves(),
        tasks_repo=InMemoryTasks(),
        notifications_repo=InMemoryNotifications(),
        announcements_repo=InMemoryAnnouncements(),
        settings_repo=InMemorySettings(),
    )
