from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .breaks.mysql_break_repository import MySQLBreakRepository
from .breaks.repository import BreakRepository
from .breaks.service import BreakService
from .core.constants import DEFAULT_ANNUAL_LEAVE_ALLOWANCE
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .notifications.feed import NotificationFeed
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .reports.service import TeamReportService
from .settings.model import CompanySettings
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository
from .users.service import AuthService, EmployeeService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    breaks_repo: BreakRepository
    leaves_repo: LeaveRepository
    tasks_repo: TaskRepository
    notifications_repo: NotificationRepository
    announcements_repo: AnnouncementRepository
    settings_repo: SettingsRepository

    notification_feed: NotificationFeed

    auth_service: AuthService
    employee_service: EmployeeService
    settings_service: SettingsService
    attendance_service: AttendanceService
    break_service: BreakService
    notification_service: NotificationService
    leave_service: LeaveService
    task_service: TaskService
    announcement_service: AnnouncementService
    report_service: TeamReportService


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    breaks_repo: BreakRepository,
    leaves_repo: LeaveRepository,
    tasks_repo: TaskRepository,
    notifications_repo: NotificationRepository,
    announcements_repo: AnnouncementRepository,
    settings_repo: SettingsRepository,
    conn: Optional[DatabaseConnection] = None,
    fallback_settings: Optional[CompanySettings] = None,
    annual_leave_allowance: float = DEFAULT_ANNUAL_LEAVE_ALLOWANCE,
) -> Container:
    """Build services on top of any set of repositories (MySQL in the app, in-memory in tests)."""
    notification_feed = NotificationFeed(notifications_repo)
    notification_service = NotificationService(notifications_repo, notification_feed)
    settings_service = SettingsService(settings_repo, fallback=fallback_settings)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        breaks_repo=breaks_repo,
        leaves_repo=leaves_repo,
        tasks_repo=tasks_repo,
        notifications_repo=notifications_repo,
        announcements_repo=announcements_repo,
        settings_repo=settings_repo,
        notification_feed=notification_feed,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo),
        settings_service=settings_service,
        attendance_service=AttendanceService(attendance_repo, employees_repo, settings_service),
        break_service=BreakService(breaks_repo),
        notification_service=notification_service,
        leave_service=LeaveService(
            leaves_repo,
            employees_repo,
            notification_service,
            annual_allowance=annual_leave_allowance,
        ),
        task_service=TaskService(tasks_repo, employees_repo, notification_service),
        announcement_service=AnnouncementService(announcements_repo),
        report_service=TeamReportService(attendance_repo, employees_repo),
    )


def build_container(
    *,
    db_config: dict,
    fallback_settings: Optional[CompanySettings] = None,
    annual_leave_allowance: float = DEFAULT_ANNUAL_LEAVE_ALLOWANCE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        breaks_repo=MySQLBreakRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        fallback_settings=fallback_settings,
        annual_leave_allowance=annual_leave_allowance,
    )
