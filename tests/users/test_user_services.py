from __future__ import annotations

import pytest

from src.teamtime.teamtime.core.enums import EmployeeStatus, Role
from src.teamtime.teamtime.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def test_first_signup_becomes_admin(container):
    auth = container.auth_service
    first_id = auth.signup(name="Founder", email="Founder@Example.com", password="pass1234")
    second_id = auth.signup(name="Member", email="member@example.com", password="pass1234")

    founder = container.employee_service.get(first_id)
    member = container.employee_service.get(second_id)
    assert founder.role == Role.ADMIN
    assert founder.designation == "System Admin"
    assert founder.email == "founder@example.com"
    assert member.role == Role.EMPLOYEE
    assert member.designation == "Member"


def test_password_is_stored_hashed(container):
    employee_id = container.auth_service.signup(name="Sam", email="sam@example.com", password="pass1234")
    stored = container.employee_service.get(employee_id)
    assert stored.password_hash != "pass1234"

    user = container.auth_service.authenticate("SAM@example.com", "pass1234")
    assert user.employee_id == employee_id


def test_duplicate_email_is_rejected(container):
    container.auth_service.signup(name="Sam", email="sam@example.com", password="pass1234")
    with pytest.raises(ConflictError):
        container.auth_service.signup(name="Sammy", email="sam@example.com", password="other123")


def test_self_registration_cannot_claim_admin(container, employees):
    employees.add("Existing")
    with pytest.raises(AuthorizationError):
        container.auth_service.signup(name="Mallory", email="m@example.com", password="pass1234", role=Role.ADMIN)


def test_wrong_password_and_inactive_account(container, employees):
    employees.add("Ina", email="ina@example.com", password="secret", status=EmployeeStatus.INACTIVE)
    employees.add("Otto", email="otto@example.com", password="secret")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("otto@example.com", "wrong")
    with pytest.raises(AuthenticationError, match="inactive"):
        container.auth_service.authenticate("ina@example.com", "secret")


def test_reset_password_by_phone(container, employees):
    employees.add("Pat", email="pat@example.com", phone="+15550001", password="old-pass")
    auth = container.auth_service

    assert auth.find_for_reset("+15550001").name == "Pat"
    with pytest.raises(ValidationError):
        auth.reset_password(phone="+15550001", new_password="abcd", confirm_password="abce")
    with pytest.raises(ValidationError):
        auth.reset_password(phone="+15550001", new_password="abc", confirm_password="abc")
    with pytest.raises(NotFoundError):
        auth.find_for_reset("+19999999")

    auth.reset_password(phone="+15550001", new_password="abcd", confirm_password="abcd")
    assert auth.authenticate("pat@example.com", "abcd").name == "Pat"


def test_only_admin_provisions_and_deletes(container, employees):
    admin = employees.add("Ada", Role.ADMIN)
    svc = container.employee_service

    with pytest.raises(AuthorizationError):
        svc.provision(current_role=Role.MANAGER, name="X", email="x@example.com", password="pass", role=Role.EMPLOYEE)

    new_id = svc.provision(
        current_role=Role.ADMIN,
        name="Nia",
        email="nia@example.com",
        password="pass",
        role=Role.MANAGER,
        designation="Team Lead",
    )
    assert svc.get(new_id).designation == "Team Lead"

    with pytest.raises(ValidationError):
        svc.delete(current_role=Role.ADMIN, current_user_id=admin.employee_id, employee_id=admin.employee_id)

    svc.delete(current_role=Role.ADMIN, current_user_id=admin.employee_id, employee_id=new_id)
    with pytest.raises(NotFoundError):
        svc.get(new_id)


def test_status_toggle(container, employees):
    eve = employees.add("Eve")
    container.employee_service.set_status(current_role=Role.ADMIN, employee_id=eve.employee_id, status=EmployeeStatus.INACTIVE)
    assert container.employee_service.get(eve.employee_id).is_active is False


def test_profile_edit_rules(container, employees):
    eve = employees.add("Eve")
    carl = employees.add("Carl")
    svc = container.employee_service

    updated = svc.update_profile(
        current_user_id=eve.employee_id,
        current_role=Role.EMPLOYEE,
        employee_id=eve.employee_id,
        changes={"bio": " Loves maps ", "current_status": "Focusing", "current_status_emoji": "🎯", "email": "ignored@x"},
    )
    assert updated.bio == "Loves maps"
    assert updated.current_status_emoji == "🎯"
    assert updated.email == eve.email

    with pytest.raises(AuthorizationError):
        svc.update_profile(current_user_id=eve.employee_id, current_role=Role.EMPLOYEE, employee_id=carl.employee_id, changes={"bio": "x"})
    with pytest.raises(AuthorizationError):
        svc.update_profile(current_user_id=eve.employee_id, current_role=Role.EMPLOYEE, employee_id=eve.employee_id, changes={"role": "Admin"})


def test_change_password_requires_current(container, employees):
    eve = employees.add("Eve", password="first")
    svc = container.employee_service

    with pytest.raises(AuthenticationError):
        svc.change_password(employee_id=eve.employee_id, current_password="nope", new_password="second")

    svc.change_password(employee_id=eve.employee_id, current_password="first", new_password="second")
    assert container.auth_service.authenticate(eve.email, "second").employee_id == eve.employee_id


def test_assignable_employees_follow_hierarchy(container, employees):
    admin = employees.add("Ada", Role.ADMIN)
    manager = employees.add("Max", Role.MANAGER)
    employees.add("Eve")

    assert {e.name for e in container.employee_service.assignable_employees(admin.employee_id)} == {"Max", "Eve"}
    assert [e.name for e in container.employee_service.assignable_employees(manager.employee_id)] == ["Eve"]


def test_corrupted_hash_is_a_failed_login_not_a_crash(container, employees):
    eve = employees.add("Eve", email="eve@example.com")
    employees.update_password(eve.employee_id, password_hash="legacy$nosalt$secret")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("eve@example.com", "secret")
    with pytest.raises(AuthenticationError):
        container.employee_service.change_password(
            employee_id=eve.employee_id,
            current_password="secret",
            new_password="fresh-pass",
        )


def test_refresh_follows_stored_account(container, employees):
    max_ = employees.add("Max", Role.MANAGER, email="max@example.com")
    cached = container.auth_service.authenticate("max@example.com", "secret")

    employees.update_profile(max_.employee_id, fields={"role": Role.EMPLOYEE})
    assert container.auth_service.refresh(cached).role == Role.EMPLOYEE

    employees.update_status(max_.employee_id, status=EmployeeStatus.INACTIVE)
    assert container.auth_service.refresh(cached) is None
