from __future__ import annotations

from datetime import timedelta

import pytest

from src.teamtime.teamtime.core.enums import AnnouncementType, Role
from src.teamtime.teamtime.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_managers_post_and_list_newest_first(container, fixed_now):
    svc = container.announcement_service
    svc.create(current_role=Role.MANAGER, author_name="Max", message="Standup moved to 10:00", now=fixed_now)
    latest = svc.create(
        current_role=Role.ADMIN,
        author_name="Ada",
        message="Office closed Friday",
        type="urgent",
        now=fixed_now + timedelta(hours=1),
    )

    assert latest.type == AnnouncementType.URGENT
    assert [a.message for a in svc.list_all()] == ["Office closed Friday", "Standup moved to 10:00"]


def test_employees_cannot_post(container):
    with pytest.raises(AuthorizationError):
        container.announcement_service.create(current_role=Role.EMPLOYEE, author_name="Eve", message="Hi all")


def test_invalid_type_and_empty_message(container):
    svc = container.announcement_service
    with pytest.raises(ValidationError):
        svc.create(current_role=Role.ADMIN, author_name="Ada", message="x", type="party")
    with pytest.raises(ValidationError):
        svc.create(current_role=Role.ADMIN, author_name="Ada", message="   ")


def test_delete(container, fixed_now):
    svc = container.announcement_service
    announcement = svc.create(current_role=Role.ADMIN, author_name="Ada", message="Bye", now=fixed_now)

    svc.delete(current_role=Role.ADMIN, announcement_id=announcement.announcement_id)
    assert svc.list_all() == []
    with pytest.raises(NotFoundError):
        svc.delete(current_role=Role.ADMIN, announcement_id=announcement.announcement_id)
