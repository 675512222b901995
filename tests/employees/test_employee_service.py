import pytest

from src.personnel_hub.personnel_hub.common.pagination import PageRequest
from src.personnel_hub.personnel_hub.core.enums import Currency
from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from src.personnel_hub.personnel_hub.employees.schema import parse_employee, parse_profile
from src.personnel_hub.personnel_hub.employees.service import EmployeeService
from src.personnel_hub.personnel_hub.security.tenancy import TenancyResolver
from tests.fakes import InMemoryEmployees, employee_caller, owner


def _service():
    employees = InMemoryEmployees()
    return EmployeeService(employees, TenancyResolver(employees)), employees


def _create(service, **data):
    body = {"first_name": "Ada", "last_name": "Lovelace", **data}
    return service.create(owner(), parse_employee(body))


def test_create_places_employee_in_owner_namespace():
    service, _ = _service()
    employee = _create(service, salary={"gross_amount": 10000, "currency": "USD"})

    assert employee.owner_id == "owner-1"
    assert employee.salary.gross_amount == 10000
    assert employee.salary.currency == Currency.USD
    assert employee.is_active is True


def test_duplicate_national_id_conflicts():
    service, _ = _service()
    _create(service, national_id="12345678901")
    with pytest.raises(ConflictError):
        _create(service, first_name="Grace", national_id="12345678901")


def test_salary_patch_merges_keys():
    service, _ = _service()
    employee = _create(service, salary={"gross_amount": 10000, "bank_name": "First Bank"})

    updated = service.update(owner(), employee.id, parse_employee({"salary": {"gross_amount": 12000}}, partial=True))

    assert updated.salary.gross_amount == 12000
    assert updated.salary.bank_name == "First Bank"


def test_soft_delete_and_restore():
    service, _ = _service()
    employee = _create(service)

    deleted = service.delete(owner(), employee.id)
    assert deleted.is_active is False
    assert deleted.termination_date is not None
    assert service.list_employees(owner())["total"] == 0
    assert service.list_employees(owner(), deleted=True)["total"] == 1
    with pytest.raises(NotFoundError):
        service.get(owner(), employee.id)
    with pytest.raises(ConflictError):
        service.delete(owner(), employee.id)

    restored = service.restore(owner(), employee.id)
    assert restored.is_active is True
    assert restored.termination_date is None
    with pytest.raises(ConflictError):
        service.restore(owner(), employee.id)


def test_list_search_and_paging():
    service, _ = _service()
    _create(service, first_name="Ada", department="Engineering")
    _create(service, first_name="Grace", department="Engineering")
    _create(service, first_name="Linus", department="Sales")

    assert service.list_employees(owner(), search="grace")["total"] == 1
    assert service.list_employees(owner(), department="engineering")["total"] == 2

    page = service.list_employees(owner(), paging=PageRequest(page=2, limit=2))
    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert len(page["employees"]) == 1


def test_statistics_counts_active_and_inactive():
    service, _ = _service()
    a = _create(service, department="Engineering", salary={"gross_amount": 1000})
    _create(service, first_name="Grace", department="Engineering", salary={"gross_amount": 3000})
    service.delete(owner(), a.id)

    stats = service.statistics(owner())

    assert stats["total"] == 2
    assert stats["active"] == 1
    assert stats["inactive"] == 1
    assert stats["by_department"] == {"Engineering": 1}
    assert stats["average_salary"] == 3000


def test_employee_self_service_updates_contact_fields_only():
    service, _ = _service()
    employee = _create(service)
    me = employee_caller(employee.id)

    updated = service.update_me(me, parse_profile({"phone_number": "+90 555 000 1122", "first_name": "Hacker"}))

    assert updated.phone_number == "+90 555 000 1122"
    assert updated.first_name == "Ada"


def test_profile_without_allowed_fields_rejected():
    with pytest.raises(ValidationError) as exc:
        parse_profile({"position": "CEO"})
    assert exc.value.details


def test_employee_cannot_manage_employees():
    service, _ = _service()
    with pytest.raises(AuthorizationError):
        service.create(employee_caller("emp-1"), parse_employee({"first_name": "Ada", "last_name": "Lovelace"}))


def test_employee_view_hides_salary_amounts():
    service, _ = _service()
    employee = _create(service, salary={"gross_amount": 10000}, insurance_info={"policy": "A1"})

    view = employee.sanitize(mode="employee")

    assert view["salary"] == {"currency": "TL"}
    assert "insurance_info" not in view
    assert employee.sanitize()["salary"]["gross_amount"] == 10000
