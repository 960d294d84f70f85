from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import NotificationType, Role, TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.model import Employee
from ..users.policy import can_assign
from ..users.repository import EmployeeRepository
from .model import Task, TaskComment
from .repository import TaskRepository

logger = logging.getLogger(__name__)

SORT_NEWEST = "newest"
SORT_DUE_DATE = "due"


def _sort_tasks(tasks: Sequence[Task], sort: str) -> list[Task]:
    if sort == SORT_DUE_DATE:
        # undated tasks go last
        return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or date.max))
    return sorted(tasks, key=lambda t: t.assigned_date, reverse=True)


def _matches(task: Task, term: str) -> bool:
    term = term.lower()
    return any(
        term in (value or "").lower()
        for value in (task.title, task.description, task.assigned_to_name, task.assigned_by_name)
    )


class TaskService:
    """Task board: assignment, arbitrary status moves, comments."""

    def __init__(
        self,
        tasks: TaskRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
    ):
        self._tasks = tasks
        self._employees = employees
        self._notifications = notifications

    def _employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _task(self, task_id: int) -> Task:
        task = self._tasks.get_by_id(int(task_id))
        if not task:
            raise NotFoundError("Task not found")
        return task

    @staticmethod
    def _can_manage(actor: Employee, task: Task) -> bool:
        return actor.role == Role.ADMIN or actor.employee_id == task.assigned_by_id

    @staticmethod
    def _can_see(viewer: Employee, task: Task) -> bool:
        """Employees only see tasks they gave or received; Managers and Admins see the whole board."""
        return viewer.role != Role.EMPLOYEE or viewer.employee_id in (task.assigned_to_id, task.assigned_by_id)

    def _visible_task(self, viewer_id: int, task_id: int) -> tuple[Employee, Task]:
        task = self._task(task_id)
        viewer = self._employee(viewer_id)
        if not self._can_see(viewer, task):
            raise AuthorizationError("This task is not assigned to you")
        return viewer, task

    def _require_manager_of(self, actor_id: int, task: Task) -> Employee:
        actor = self._employee(actor_id)
        if not self._can_manage(actor, task):
            raise AuthorizationError("Only the assigner or an Admin can change this task")
        return actor

    def _require_assignable(self, assigner: Employee, assignee_id: int) -> Employee:
        assignee = self._employee(assignee_id)
        if not can_assign(assigner, assignee):
            raise AuthorizationError(f"You cannot assign tasks to a {assignee.role.value}")
        return assignee

    def create(
        self,
        *,
        actor_id: int,
        title: str,
        description: str = "",
        assignee_id: int,
        priority: str = TaskPriority.NORMAL.value,
        due_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Task:
        title = require_non_empty(title, "Title")
        priority = parse_enum(TaskPriority, priority, "Priority")
        assigner = self._employee(actor_id)
        assignee = self._require_assignable(assigner, assignee_id)

        task_id = self._tasks.create(
            title=title,
            description=(description or "").strip(),
            assigned_by_id=assigner.employee_id,
            assigned_by_name=assigner.name,
            assigned_to_id=assignee.employee_id,
            assigned_to_name=assignee.name,
            priority=priority,
            due_date=due_date,
            assigned_date=now or now_local(),
        )
        logger.info("Task %s assigned by %s to %s", task_id, assigner.employee_id, assignee.employee_id)

        message = f'New Task Assigned: "{title}" by {assigner.name}. Priority: {priority.value.upper()}.'
        if due_date:
            message += f" Due: {due_date.isoformat()}."
        self._notifications.notify_safely(
            assignee.employee_id,
            message,
            type=NotificationType.WARNING if priority == TaskPriority.URGENT else NotificationType.INFO,
            link="/tasks",
        )
        return self._tasks.get_by_id(task_id)

    def update(self, *, actor_id: int, task_id: int, changes: dict, now: Optional[datetime] = None) -> Task:
        task = self._task(task_id)
        actor = self._require_manager_of(actor_id, task)

        fields: dict = {}
        if "title" in changes:
            fields["title"] = require_non_empty(changes["title"], "Title")
        if "description" in changes:
            fields["description"] = (changes["description"] or "").strip()
        if "priority" in changes:
            fields["priority"] = parse_enum(TaskPriority, changes["priority"], "Priority")
        if "due_date" in changes:
            fields["due_date"] = changes["due_date"]
        if changes.get("assignee_id") is not None and int(changes["assignee_id"]) != task.assigned_to_id:
            assignee = self._require_assignable(actor, changes["assignee_id"])
            fields["assigned_to_id"] = assignee.employee_id
            fields["assigned_to_name"] = assignee.name

        if not fields:
            raise ValidationError("Nothing to update")

        self._tasks.update_fields(task.task_id, fields=fields, updated_at=now or now_local())
        return self._tasks.get_by_id(task.task_id)

    def set_status(self, *, actor_id: int, task_id: int, status: str, now: Optional[datetime] = None) -> Task:
        """Any status may be written at any time, including moving back from completed."""
        task = self._task(task_id)
        actor = self._employee(actor_id)
        if actor.employee_id != task.assigned_to_id and not self._can_manage(actor, task):
            raise AuthorizationError("You can only update tasks assigned to or by you")

        status = parse_enum(TaskStatus, status, "Status")
        now = now or now_local()
        if status == TaskStatus.COMPLETED:
            completed_at = task.completed_at if task.status == TaskStatus.COMPLETED else now
        else:
            completed_at = None

        if not self._tasks.update_status(task.task_id, status=status, completed_at=completed_at, updated_at=now):
            raise ConflictError("Task could not be updated")
        logger.info("Task %s: %s -> %s by %s", task.task_id, task.status.value, status.value, actor.employee_id)

        if (
            status == TaskStatus.COMPLETED
            and task.status != TaskStatus.COMPLETED
            and actor.employee_id != task.assigned_by_id
        ):
            self._notifications.notify_safely(
                task.assigned_by_id,
                f'Task "{task.title}" marked as completed by {task.assigned_to_name}',
                type=NotificationType.SUCCESS,
                link="/tasks",
            )
        return self._tasks.get_by_id(task.task_id)

    def delete(self, *, actor_id: int, task_id: int) -> None:
        task = self._task(task_id)
        self._require_manager_of(actor_id, task)
        self._tasks.delete(task.task_id)
        logger.info("Task %s deleted by %s", task.task_id, actor_id)

    def list_tasks(
        self,
        *,
        viewer_id: int,
        mine_only: bool = False,
        priority: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = SORT_NEWEST,
    ) -> list[Task]:
        viewer = self._employee(viewer_id)
        tasks = list(self._tasks.list_all())

        if mine_only:
            tasks = [t for t in tasks if viewer.employee_id in (t.assigned_to_id, t.assigned_by_id)]
        else:
            tasks = [t for t in tasks if self._can_see(viewer, t)]
        if priority:
            wanted = parse_enum(TaskPriority, priority, "Priority")
            tasks = [t for t in tasks if t.priority == wanted]
        if search and search.strip():
            tasks = [t for t in tasks if _matches(t, search.strip())]
        return _sort_tasks(tasks, sort)

    def add_comment(self, *, actor_id: int, task_id: int, content: str, now: Optional[datetime] = None) -> TaskComment:
        actor, task = self._visible_task(actor_id, task_id)
        content = require_non_empty(content, "Comment")
        comment_id = self._tasks.add_comment(
            task_id=task.task_id,
            user_id=actor.employee_id,
            user_name=actor.name,
            content=content,
            created_at=now or now_local(),
        )
        return next(c for c in self._tasks.list_comments(task.task_id) if c.comment_id == comment_id)

    def comments(self, *, viewer_id: int, task_id: int) -> Sequence[TaskComment]:
        _, task = self._visible_task(viewer_id, task_id)
        return self._tasks.list_comments(task.task_id)

    @staticmethod
    def to_ui(t: Task) -> dict:
        return {
            "task_id": t.task_id,
            "title": t.title,
            "description": t.description,
            "assigned_by_id": t.assigned_by_id,
            "assigned_by_name": t.assigned_by_name,
            "assigned_to_id": t.assigned_to_id,
            "assigned_to_name": t.assigned_to_name,
            "assigned_date": t.assigned_date.isoformat(),
            "priority": t.priority.value,
            "status": t.status.value,
            "due_date": t.due_date.isoformat() if t.due_date else None,
            "completed_at": t.completed_at.isoformat() if t.completed_at else None,
        }

    @staticmethod
    def comment_to_ui(c: TaskComment) -> dict:
        return {
            "comment_id": c.comment_id,
            "task_id": c.task_id,
            "user_id": c.user_id,
            "user_name": c.user_name,
            "content": c.content,
            "created_at": c.created_at.isoformat(),
        }
