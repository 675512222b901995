from dataclasses import replace

import pytest

from src.personnel_hub.personnel_hub.core.enums import Role
from src.personnel_hub.personnel_hub.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.personnel_hub.personnel_hub.security.tenancy import Caller
from tests.fakes import add_employee, in_memory_container


def _registered():
    c = in_memory_container()
    result = c.auth_service.register_owner(name="Olivia Owner", email="Olivia@Example.com", password="secret1")
    return c, result


def test_register_owner_creates_business_and_links_it():
    c, result = _registered()

    assert result.account.email == "olivia@example.com"
    assert result.account.role == Role.OWNER
    assert result.account.owner_account_id == result.account.id
    assert result.business.owner_id == result.account.id
    assert result.business.name == "New Business"
    assert c.repos.businesses.get_by_id(result.account.business_id).owner_id == result.account.id
    assert "password_hash" not in result.account.sanitize()


def test_register_duplicate_email_conflicts():
    c, _ = _registered()
    with pytest.raises(ConflictError):
        c.auth_service.register_owner(name="Other", email="olivia@example.com", password="secret1")


def test_register_short_password_rejected():
    c = in_memory_container()
    with pytest.raises(ValidationError):
        c.auth_service.register_owner(name="Olivia", email="o@example.com", password="123")


def test_login_success_and_token_authenticates():
    c, _ = _registered()
    result = c.auth_service.login(email="OLIVIA@example.com", password="secret1")

    caller = c.auth_service.authenticate_token(result.token)

    assert caller.account_id == result.account.id
    assert result.account.last_login_at is not None


@pytest.mark.parametrize("email,password", [("olivia@example.com", "wrong-pass"), ("nobody@example.com", "secret1")])
def test_login_failures_share_one_message(email, password):
    c, _ = _registered()
    with pytest.raises(AuthenticationError, match="Email or password is incorrect"):
        c.auth_service.login(email=email, password=password)


def test_deactivated_account_token_rejected():
    c, result = _registered()
    c.repos.accounts.update(replace(result.account, is_active=False))
    with pytest.raises(AuthenticationError):
        c.auth_service.authenticate_token(result.token)


def test_register_employee_account_links_employee():
    c, result = _registered()
    caller = Caller.from_account(result.account)
    add_employee(c.repos.employees, "emp-1", owner_id=result.account.id)

    account = c.auth_service.register_employee_account(
        caller, employee_id="emp-1", email="ada@example.com", password="secret1"
    )

    assert account.role == Role.EMPLOYEE
    assert account.employee_id == "emp-1"
    assert account.owner_account_id == result.account.id
    assert c.repos.employees.get(owner_id=result.account.id, employee_id="emp-1").user_id == account.id

    with pytest.raises(ConflictError):
        c.auth_service.register_employee_account(caller, employee_id="emp-1", email="b@example.com", password="secret1")


def test_register_employee_account_unknown_employee():
    c, result = _registered()
    with pytest.raises(NotFoundError):
        c.auth_service.register_employee_account(
            Caller.from_account(result.account), employee_id="missing", email="x@example.com", password="secret1"
        )


def test_account_delete_and_restore_rules():
    c, result = _registered()
    caller = Caller.from_account(result.account)
    add_employee(c.repos.employees, "emp-1", owner_id=result.account.id)
    linked = c.auth_service.register_employee_account(caller, employee_id="emp-1", email="ada@example.com", password="secret1")

    with pytest.raises(ValidationError):
        c.account_service.delete_account(caller, result.account.id)

    deleted = c.account_service.delete_account(caller, linked.id)
    assert deleted.is_active is False
    assert [a.id for a in c.account_service.list_accounts(caller, deleted=True)] == [linked.id]
    with pytest.raises(ConflictError):
        c.account_service.delete_account(caller, linked.id)

    restored = c.account_service.restore_account(caller, linked.id)
    assert restored.is_active is True
    with pytest.raises(ConflictError):
        c.account_service.restore_account(caller, linked.id)


def test_only_owner_manages_accounts():
    c, result = _registered()
    employee = Caller(account_id="e", email="e@example.com", role=Role.EMPLOYEE, business_id=result.account.business_id)
    with pytest.raises(AuthorizationError):
        c.account_service.list_accounts(employee)
