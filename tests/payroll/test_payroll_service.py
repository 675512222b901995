import pytest

from src.personnel_hub.personnel_hub.core.enums import PayrollStatus
from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError, ConflictError, ValidationError
from src.personnel_hub.personnel_hub.payroll.model import PayrollPatch
from src.personnel_hub.personnel_hub.payroll.schema import parse_payroll
from src.personnel_hub.personnel_hub.payroll.service import PayrollService
from src.personnel_hub.personnel_hub.security.tenancy import TenancyResolver
from tests.fakes import InMemoryEmployees, InMemoryPayrolls, add_employee, employee_caller, owner


def _service():
    employees = InMemoryEmployees()
    add_employee(employees, "emp-1")
    return PayrollService(InMemoryPayrolls(), TenancyResolver(employees))


def _patch(month="01", **kwargs):
    return PayrollPatch(period_month=month, period_year="2025", gross_salary=10000, **kwargs)


def test_create_computes_net_salary():
    service = _service()
    payroll = service.create(owner(), "emp-1", _patch(total_deductions=1500, other_additions=200))
    assert payroll.net_salary == 8700.0
    assert payroll.status == PayrollStatus.PENDING


def test_supplied_net_salary_kept():
    service = _service()
    payroll = service.create(owner(), "emp-1", _patch(net_salary=9000))
    assert payroll.net_salary == 9000


def test_duplicate_period_conflicts():
    service = _service()
    service.create(owner(), "emp-1", _patch())
    with pytest.raises(ConflictError, match="already exists"):
        service.create(owner(), "emp-1", _patch())


def test_update_into_taken_period_conflicts():
    service = _service()
    service.create(owner(), "emp-1", _patch("01"))
    feb = service.create(owner(), "emp-1", _patch("02"))
    with pytest.raises(ConflictError):
        service.update(owner(), "emp-1", feb.id, PayrollPatch(period_month="01"))


def test_update_recomputes_net_when_inputs_change():
    service = _service()
    payroll = service.create(owner(), "emp-1", _patch())

    updated = service.update(owner(), "emp-1", payroll.id, PayrollPatch(total_deductions=1000))

    assert updated.net_salary == 9000.0


def test_mark_paid_once():
    service = _service()
    payroll = service.create(owner(), "emp-1", _patch())

    paid = service.mark_paid(owner(), "emp-1", payroll.id)

    assert paid.status == PayrollStatus.PAID
    assert paid.payment_date is not None
    with pytest.raises(ConflictError, match="already marked as paid"):
        service.mark_paid(owner(), "emp-1", payroll.id)


def test_employee_reads_but_cannot_manage():
    service = _service()
    payroll = service.create(owner(), "emp-1", _patch())
    me = employee_caller("emp-1")

    assert service.get(me, "emp-1", payroll.id).id == payroll.id
    with pytest.raises(AuthorizationError):
        service.create(me, "emp-1", _patch("03"))


def test_statistics_for_year():
    service = _service()
    jan = service.create(owner(), "emp-1", _patch("01", total_deductions=1500, other_additions=200))
    service.create(owner(), "emp-1", _patch("02"))
    service.mark_paid(owner(), "emp-1", jan.id)

    stats = service.statistics(owner(), "emp-1", year=2025)

    assert stats["total_payrolls"] == 2
    assert stats["paid_payrolls"] == 1
    assert stats["total_gross_salary"] == 20000.0
    assert stats["total_net_salary"] == 18700.0
    assert stats["by_month"]["2025-01"]["status"] == "paid"


def test_parse_payroll_validates_period():
    with pytest.raises(ValidationError):
        parse_payroll({"period_month": "13", "period_year": "2025", "gross_salary": 1})
    with pytest.raises(ValidationError):
        parse_payroll({"period_month": "01", "period_year": "25", "gross_salary": 1})
    with pytest.raises(ValidationError):
        parse_payroll({"period_month": "01", "period_year": "2025", "gross_salary": 0})
