from datetime import date, datetime, timezone

import pytest

from src.personnel_hub.personnel_hub.core.enums import PaymentMethod
from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError, NotFoundError
from src.personnel_hub.personnel_hub.payments.model import PaymentPatch
from src.personnel_hub.personnel_hub.payments.service import SalaryPaymentService
from src.personnel_hub.personnel_hub.payroll.model import PayrollPatch
from src.personnel_hub.personnel_hub.payroll.service import PayrollService
from src.personnel_hub.personnel_hub.security.tenancy import TenancyResolver
from tests.fakes import InMemoryEmployees, InMemoryPayments, InMemoryPayrolls, add_employee, employee_caller, owner


def _services():
    employees = InMemoryEmployees()
    add_employee(employees, "emp-1")
    add_employee(employees, "emp-2")
    tenancy = TenancyResolver(employees)
    payrolls = InMemoryPayrolls()
    payroll_service = PayrollService(payrolls, tenancy)
    return SalaryPaymentService(InMemoryPayments(), payrolls, tenancy), payroll_service


def _paid_on(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def test_payment_linked_to_payroll_in_scope():
    payments, payrolls = _services()
    payroll = payrolls.create(owner(), "emp-1", PayrollPatch(period_month="01", period_year="2025", gross_salary=1000))

    first = payments.create(owner(), "emp-1", PaymentPatch(amount=600, payroll_id=payroll.id))
    payments.create(owner(), "emp-1", PaymentPatch(amount=400, payroll_id=payroll.id))

    assert first.payroll_id == payroll.id
    assert len(payments.list_by_payroll(owner(), "emp-1", payroll.id)) == 2


def test_payroll_of_other_employee_not_found():
    payments, payrolls = _services()
    payroll = payrolls.create(owner(), "emp-2", PayrollPatch(period_month="01", period_year="2025", gross_salary=1000))
    with pytest.raises(NotFoundError):
        payments.create(owner(), "emp-1", PaymentPatch(amount=100, payroll_id=payroll.id))


def test_list_filters_by_method_and_date_range():
    payments, _ = _services()
    payments.create(owner(), "emp-1", PaymentPatch(amount=100, payment_date=_paid_on(date(2025, 1, 15))))
    payments.create(
        owner(),
        "emp-1",
        PaymentPatch(amount=200, payment_date=_paid_on(date(2025, 2, 15)), payment_method=PaymentMethod.CASH),
    )
    payments.create(owner(), "emp-1", PaymentPatch(amount=300, payment_date=_paid_on(date(2024, 12, 15))))

    assert payments.list_payments(owner(), "emp-1", payment_method=PaymentMethod.CASH)["total"] == 1
    assert payments.list_payments(owner(), "emp-1", year=2025)["total"] == 2
    window = payments.list_payments(owner(), "emp-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 31))
    assert [p.amount for p in window["payments"]] == [100]


def test_statistics_total_for_year():
    payments, _ = _services()
    payments.create(owner(), "emp-1", PaymentPatch(amount=100, payment_date=_paid_on(date(2025, 1, 15))))
    payments.create(owner(), "emp-1", PaymentPatch(amount=250.5, payment_date=_paid_on(date(2025, 3, 1))))

    stats = payments.statistics(owner(), "emp-1", year=2025)

    assert stats["total_payments"] == 2
    assert stats["total_amount"] == 350.5


def test_employee_cannot_record_payment():
    payments, _ = _services()
    with pytest.raises(AuthorizationError):
        payments.create(employee_caller("emp-1"), "emp-1", PaymentPatch(amount=100))
