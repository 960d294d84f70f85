from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Task, TaskComment
from .repository import TaskRepository

_COLUMNS = """
    task_id, title, description, assigned_by_id, assigned_by_name, assigned_to_id, assigned_to_name,
    assigned_date, priority, status, due_date, updated_at, completed_at
"""

_UPDATABLE = {"title", "description", "priority", "due_date", "assigned_to_id", "assigned_to_name"}


def _row_to_task(r: dict) -> Task:
    return Task(
        task_id=int(r["task_id"]),
        title=r["title"],
        description=r.get("description") or "",
        assigned_by_id=int(r["assigned_by_id"]),
        assigned_by_name=r["assigned_by_name"],
        assigned_to_id=int(r["assigned_to_id"]),
        assigned_to_name=r["assigned_to_name"],
        assigned_date=r["assigned_date"],
        priority=TaskPriority(r["priority"]),
        status=TaskStatus(r["status"]),
        due_date=r.get("due_date"),
        updated_at=r.get("updated_at"),
        completed_at=r.get("completed_at"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(
                    title, description, assigned_by_id, assigned_by_name, assigned_to_id, assigned_to_name,
                    assigned_date, priority, status, due_date, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    int(assigned_by_id),
                    assigned_by_name,
                    int(assigned_to_id),
                    assigned_to_name,
                    assigned_date,
                    priority.value,
                    TaskStatus.PENDING.value,
                    due_date,
                    assigned_date,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_id=%s", (int(task_id),))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def list_all(self) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks ORDER BY assigned_date DESC")
            return [_row_to_task(r) for r in fetchall(cur)]

    def update_fields(self, task_id: int, *, fields: dict, updated_at: datetime) -> bool:
        fields = {k: v for k, v in fields.items() if k in _UPDATABLE}
        if isinstance(fields.get("priority"), TaskPriority):
            fields["priority"] = fields["priority"].value
        fields["updated_at"] = updated_at

        assignments = ", ".join(f"{k}=%s" for k in fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE tasks SET {assignments} WHERE task_id=%s",
                tuple(fields.values()) + (int(task_id),),
            )
            return cur.rowcount > 0

    def update_status(
        self,
        task_id: int,
        *,
        status: TaskStatus,
        completed_at: Optional[datetime],
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET status=%s, completed_at=%s, updated_at=%s WHERE task_id=%s",
                (status.value, completed_at, updated_at, int(task_id)),
            )
            return cur.rowcount > 0

    def delete(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM task_comments WHERE task_id=%s", (int(task_id),))
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (int(task_id),))
            return cur.rowcount > 0

    def add_comment(self, *, task_id: int, user_id: int, user_name: str, content: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_comments(task_id, user_id, user_name, content, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(task_id), int(user_id), user_name, content, created_at),
            )
            return int(cur.lastrowid)

    def list_comments(self, task_id: int) -> Sequence[TaskComment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT comment_id, task_id, user_id, user_name, content, created_at
                FROM task_comments
                WHERE task_id=%s
                ORDER BY created_at, comment_id
                """,
                (int(task_id),),
            )
            return [
                TaskComment(
                    comment_id=int(r["comment_id"]),
                    task_id=int(r["task_id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    content=r["content"],
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]
