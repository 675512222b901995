import pytest

from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError, NotFoundError
from src.personnel_hub.personnel_hub.security.tenancy import TenancyResolver
from tests.fakes import InMemoryEmployees, add_employee, employee_caller, manager, owner


def _resolver():
    employees = InMemoryEmployees()
    add_employee(employees, "emp-1", owner_id="owner-1")
    add_employee(employees, "emp-2", owner_id="owner-1")
    add_employee(employees, "emp-x", owner_id="owner-2")
    return TenancyResolver(employees)


def test_owner_resolves_own_employee():
    scope = _resolver().resolve(owner("owner-1"), "emp-1")
    assert scope.owner_id == "owner-1"
    assert scope.employee.id == "emp-1"


def test_other_namespace_is_not_found():
    with pytest.raises(NotFoundError):
        _resolver().resolve(owner("owner-1"), "emp-x")


def test_manager_namespace_is_own_account():
    # a manager's employees live under the manager's own account id
    with pytest.raises(NotFoundError):
        _resolver().resolve(manager("manager-1"), "emp-1")


def test_employee_resolves_only_self():
    resolver = _resolver()
    assert resolver.resolve(employee_caller("emp-1"), "emp-1").employee_id == "emp-1"
    with pytest.raises(AuthorizationError):
        resolver.resolve(employee_caller("emp-1"), "emp-2")


def test_resolve_self_requires_employee_role():
    with pytest.raises(AuthorizationError):
        _resolver().resolve_self(owner("owner-1"))
