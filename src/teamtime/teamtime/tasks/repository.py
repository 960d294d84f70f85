from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskPriority, TaskStatus
from .model import Task, TaskComment


class TaskRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        description: str,
        assigned_by_id: int,
        assigned_by_name: str,
        assigned_to_id: int,
        assigned_to_name: str,
        priority: TaskPriority,
        due_date: Optional[date],
        assigned_date: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Task]:
        """Newest assignment first."""

        raise NotImplementedError

    def update_fields(self, task_id: int, *, fields: dict, updated_at: datetime) -> bool:
        raise NotImplementedError

    def update_status(
        self,
        task_id: int,
        *,
        status: TaskStatus,
        completed_at: Optional[datetime],
        updated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete(self, task_id: int) -> bool:
        raise NotImplementedError

    def add_comment(self, *, task_id: int, user_id: int, user_name: str, content: str, created_at: datetime) -> int:
        raise NotImplementedError

    def list_comments(self, task_id: int) -> Sequence[TaskComment]:
        """Oldest first."""

        raise NotImplementedError
