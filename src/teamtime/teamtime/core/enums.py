from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles, ordered by authority."""

    EMPLOYEE = "Employee"
    MANAGER = "Manager"
    ADMIN = "Admin"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class LocationStatus(str, Enum):
    """Outcome of a location check at punch time."""

    IN_RANGE = "in-range"
    OUT_OF_RANGE = "out-of-range"
    DENIED = "denied"
    ERROR = "error"
    UNAVAILABLE = "unavailable"


class Mood(str, Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    TIRED = "tired"
    STRESSED = "stressed"


class BreakType(str, Enum):
    LUNCH = "lunch"
    SHORT1 = "short1"
    SHORT2 = "short2"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCEL_REQUESTED = "cancel_requested"
    CANCELLED = "cancelled"


class HalfDayType(str, Enum):
    """Morning (first) or afternoon (second) session of a half-day leave."""

    FIRST = "first"
    SECOND = "second"


class TaskPriority(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class AnnouncementType(str, Enum):
    INFO = "info"
    URGENT = "urgent"
    SUCCESS = "success"
