"""In-memory repositories mirroring the MySQL implementations (used by service and API tests)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from src.personnel_hub.personnel_hub.accounts.model import Account
from src.personnel_hub.personnel_hub.advances.model import AdvanceRequest
from src.personnel_hub.personnel_hub.business.model import Business
from src.personnel_hub.personnel_hub.container import Container, Repositories, wire_services
from src.personnel_hub.personnel_hub.core.enums import PayrollStatus, RequestStatus, Role
from src.personnel_hub.personnel_hub.core.exceptions import ConflictError
from src.personnel_hub.personnel_hub.employees.model import Employee
from src.personnel_hub.personnel_hub.leaves.model import Leave
from src.personnel_hub.personnel_hub.payments.model import SalaryPayment
from src.personnel_hub.personnel_hub.payroll.model import Payroll
from src.personnel_hub.personnel_hub.security.tenancy import Caller
from src.personnel_hub.personnel_hub.timesheets.model import Timesheet

TEST_SECRET = "unit-test-secret"


class InMemoryAccounts:
    def __init__(self):
        self.rows: Dict[str, Account] = {}

    def create(self, account):
        self.rows[account.id] = account
        return account

    def get_by_id(self, account_id):
        return self.rows.get(account_id)

    def get_active_by_email(self, email):
        for a in self.rows.values():
            if a.is_active and a.email == email:
                return a
        return None

    def list_by_business(self, business_id, *, is_active=True):
        rows = [a for a in self.rows.values() if a.business_id == business_id and a.is_active == is_active]
        return list(reversed(rows))

    def update(self, account):
        self.rows[account.id] = account
        return account

    def touch_last_login(self, account_id, *, at):
        self.rows[account_id] = replace(self.rows[account_id], last_login_at=at)


class InMemoryBusinesses:
    def __init__(self):
        self.rows: Dict[str, Business] = {}

    def create(self, business):
        self.rows[business.id] = business
        return business

    def get_by_id(self, business_id):
        return self.rows.get(business_id)

    def update(self, business):
        self.rows[business.id] = business
        return business


class InMemoryEmployees:
    def __init__(self):
        self.rows: Dict[str, Employee] = {}

    def create(self, employee):
        self.rows[employee.id] = employee
        return employee

    def get(self, *, owner_id, employee_id, include_inactive=False):
        e = self.rows.get(employee_id)
        if not e or e.owner_id != owner_id:
            return None
        if not include_inactive and not e.is_active:
            return None
        return e

    def list(self, *, owner_id, is_active=True):
        rows = [e for e in self.rows.values() if e.owner_id == owner_id and e.is_active == is_active]
        return list(reversed(rows))

    def find_active_by_national_id(self, *, owner_id, national_id):
        for e in self.rows.values():
            if e.owner_id == owner_id and e.is_active and e.national_id == national_id:
                return e
        return None

    def update(self, employee):
        self.rows[employee.id] = employee
        return employee


class _ScopedRows:
    """Rows keyed by id, always filtered on (owner_id, employee_id)."""

    def __init__(self):
        self.rows: Dict[str, object] = {}

    def create(self, row):
        self.rows[row.id] = row
        return row

    def _get(self, owner_id, employee_id, row_id):
        row = self.rows.get(row_id)
        if not row or row.owner_id != owner_id or row.employee_id != employee_id:
            return None
        return row

    def _list(self, owner_id, employee_id) -> List:
        rows = [r for r in self.rows.values() if r.owner_id == owner_id and r.employee_id == employee_id]
        return list(reversed(rows))

    def update(self, row):
        self.rows[row.id] = row
        return row

    def _delete(self, owner_id, employee_id, row_id) -> bool:
        if not self._get(owner_id, employee_id, row_id):
            return False
        del self.rows[row_id]
        return True


class InMemoryLeaves(_ScopedRows):
    def get(self, *, owner_id, employee_id, leave_id) -> Optional[Leave]:
        return self._get(owner_id, employee_id, leave_id)

    def list(self, *, owner_id, employee_id):
        return self._list(owner_id, employee_id)

    def decide(self, *, owner_id, employee_id, leave_id, status, approved_by, approved_at, approval_note=None):
        leave = self._get(owner_id, employee_id, leave_id)
        if not leave or leave.status != RequestStatus.PENDING:
            return False
        self.rows[leave_id] = replace(
            leave, status=status, approved_by=approved_by, approved_at=approved_at, approval_note=approval_note
        )
        return True

    def delete(self, *, owner_id, employee_id, leave_id):
        return self._delete(owner_id, employee_id, leave_id)


class InMemoryAdvances(_ScopedRows):
    def get(self, *, owner_id, employee_id, advance_id) -> Optional[AdvanceRequest]:
        return self._get(owner_id, employee_id, advance_id)

    def list(self, *, owner_id, employee_id):
        return self._list(owner_id, employee_id)

    def decide(self, *, owner_id, employee_id, advance_id, status, approved_by, response_date, approval_note=None):
        advance = self._get(owner_id, employee_id, advance_id)
        if not advance or advance.status != RequestStatus.PENDING:
            return False
        self.rows[advance_id] = replace(
            advance, status=status, approved_by=approved_by, response_date=response_date, approval_note=approval_note
        )
        return True

    def delete(self, *, owner_id, employee_id, advance_id):
        return self._delete(owner_id, employee_id, advance_id)


class InMemoryTimesheets(_ScopedRows):
    def get(self, *, owner_id, employee_id, timesheet_id) -> Optional[Timesheet]:
        return self._get(owner_id, employee_id, timesheet_id)

    def list(self, *, owner_id, employee_id):
        return sorted(self._list(owner_id, employee_id), key=lambda t: t.date, reverse=True)

    def delete(self, *, owner_id, employee_id, timesheet_id):
        return self._delete(owner_id, employee_id, timesheet_id)


class InMemoryPayrolls(_ScopedRows):
    def create(self, payroll):
        if self.find_by_period(
            owner_id=payroll.owner_id,
            employee_id=payroll.employee_id,
            period_month=payroll.period_month,
            period_year=payroll.period_year,
        ):
            raise ConflictError("Payroll for this period already exists")
        return super().create(payroll)

    def get(self, *, owner_id, employee_id, payroll_id) -> Optional[Payroll]:
        return self._get(owner_id, employee_id, payroll_id)

    def find_by_period(self, *, owner_id, employee_id, period_month, period_year):
        for p in self._list(owner_id, employee_id):
            if p.period_month == period_month and p.period_year == period_year:
                return p
        return None

    def list(self, *, owner_id, employee_id):
        return sorted(self._list(owner_id, employee_id), key=lambda p: p.period_key, reverse=True)

    def mark_paid(self, *, owner_id, employee_id, payroll_id, payment_date: datetime):
        payroll = self._get(owner_id, employee_id, payroll_id)
        if not payroll or payroll.status != PayrollStatus.PENDING:
            return False
        self.rows[payroll_id] = replace(payroll, status=PayrollStatus.PAID, payment_date=payment_date)
        return True

    def delete(self, *, owner_id, employee_id, payroll_id):
        return self._delete(owner_id, employee_id, payroll_id)


class InMemoryPayments(_ScopedRows):
    def get(self, *, owner_id, employee_id, payment_id) -> Optional[SalaryPayment]:
        return self._get(owner_id, employee_id, payment_id)

    def list(self, *, owner_id, employee_id):
        return sorted(self._list(owner_id, employee_id), key=lambda p: p.payment_date, reverse=True)

    def list_by_payroll(self, *, owner_id, employee_id, payroll_id):
        return [p for p in self.list(owner_id=owner_id, employee_id=employee_id) if p.payroll_id == payroll_id]

    def delete(self, *, owner_id, employee_id, payment_id):
        return self._delete(owner_id, employee_id, payment_id)


def in_memory_repositories() -> Repositories:
    return Repositories(
        accounts=InMemoryAccounts(),
        businesses=InMemoryBusinesses(),
        employees=InMemoryEmployees(),
        leaves=InMemoryLeaves(),
        advances=InMemoryAdvances(),
        timesheets=InMemoryTimesheets(),
        payrolls=InMemoryPayrolls(),
        payments=InMemoryPayments(),
    )


def in_memory_container() -> Container:
    return wire_services(in_memory_repositories(), token_secret=TEST_SECRET, token_ttl_seconds=3600)


def owner(account_id: str = "owner-1") -> Caller:
    return Caller(account_id=account_id, email=f"{account_id}@example.com", role=Role.OWNER, business_id="biz-1")


def manager(account_id: str = "manager-1") -> Caller:
    return Caller(account_id=account_id, email=f"{account_id}@example.com", role=Role.MANAGER, business_id="biz-1")


def employee_caller(employee_id: str, owner_id: str = "owner-1") -> Caller:
    return Caller(
        account_id=f"acc-{employee_id}",
        email=f"{employee_id}@example.com",
        role=Role.EMPLOYEE,
        business_id="biz-1",
        employee_id=employee_id,
        owner_account_id=owner_id,
    )


def add_employee(employees: InMemoryEmployees, employee_id: str, *, owner_id: str = "owner-1", **kwargs) -> Employee:
    kwargs.setdefault("first_name", "Ada")
    kwargs.setdefault("last_name", "Lovelace")
    return employees.create(Employee(id=employee_id, owner_id=owner_id, **kwargs))
