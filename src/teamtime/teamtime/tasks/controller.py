from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    current_user,
    json_body,
    login_required,
    ok,
    optional_date,
    optional_int,
    required_int,
    roles_required,
)
from ..container import Container
from ..core.enums import Role
from .service import SORT_NEWEST, TaskService


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @login_required
    def list_tasks():
        tasks = container.task_service.list_tasks(
            viewer_id=current_user().employee_id,
            mine_only=request.args.get("view") == "my",
            priority=request.args.get("priority") or None,
            search=request.args.get("q"),
            sort=request.args.get("sort", SORT_NEWEST),
        )
        return jsonify([TaskService.to_ui(t) for t in tasks])

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def create_task():
        data = json_body()
        task = container.task_service.create(
            actor_id=current_user().employee_id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            assignee_id=required_int(data.get("assignee_id"), "Assignee"),
            priority=data.get("priority", "normal"),
            due_date=optional_date(data.get("due_date")),
        )
        return ok({"task": TaskService.to_ui(task)}, 201)

    @app.route("/api/tasks/<int:task_id>", methods=["PATCH"], endpoint="update_task")
    @login_required
    def update_task(task_id: int):
        changes = dict(json_body())
        if "due_date" in changes:
            changes["due_date"] = optional_date(changes["due_date"])
        if "assignee_id" in changes:
            changes["assignee_id"] = optional_int(changes["assignee_id"], "Assignee")
        task = container.task_service.update(actor_id=current_user().employee_id, task_id=task_id, changes=changes)
        return ok({"task": TaskService.to_ui(task)})

    @app.route("/api/tasks/<int:task_id>/status", methods=["POST"], endpoint="set_task_status")
    @login_required
    def set_task_status(task_id: int):
        task = container.task_service.set_status(
            actor_id=current_user().employee_id,
            task_id=task_id,
            status=json_body().get("status", ""),
        )
        return ok({"task": TaskService.to_ui(task)})

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    @login_required
    def delete_task(task_id: int):
        container.task_service.delete(actor_id=current_user().employee_id, task_id=task_id)
        return ok({"task_id": task_id})

    @app.route("/api/tasks/<int:task_id>/comments", methods=["GET"], endpoint="task_comments")
    @login_required
    def task_comments(task_id: int):
        comments = container.task_service.comments(viewer_id=current_user().employee_id, task_id=task_id)
        return jsonify([TaskService.comment_to_ui(c) for c in comments])

    @app.route("/api/tasks/<int:task_id>/comments", methods=["POST"], endpoint="add_task_comment")
    @login_required
    def add_task_comment(task_id: int):
        comment = container.task_service.add_comment(
            actor_id=current_user().employee_id,
            task_id=task_id,
            content=json_body().get("content", ""),
        )
        return ok({"comment": TaskService.comment_to_ui(comment)}, 201)
