from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    task_id: int
    title: str
    description: str
    assigned_by_id: int
    assigned_by_name: str
    assigned_to_id: int
    assigned_to_name: str
    assigned_date: datetime
    priority: TaskPriority = TaskPriority.NORMAL
    status: TaskStatus = TaskStatus.PENDING
    due_date: Optional[date] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class TaskComment:
    comment_id: int
    task_id: int
    user_id: int
    user_name: str
    content: str
    created_at: datetime
