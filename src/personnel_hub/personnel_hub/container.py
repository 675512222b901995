from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AccountService, AuthService
from .advances.mysql_advance_repository import MySQLAdvanceRepository
from .advances.repository import AdvanceRepository
from .advances.service import AdvanceService
from .business.mysql_business_repository import MySQLBusinessRepository
from .business.repository import BusinessRepository
from .business.service import BusinessService
from .core.constants import DEFAULT_TOKEN_TTL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payments.mysql_payment_repository import MySQLSalaryPaymentRepository
from .payments.repository import SalaryPaymentRepository
from .payments.service import SalaryPaymentService
from .payroll.calculator.standard_calculator import StandardNetSalaryCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .security.tenancy import TenancyResolver
from .security.tokens import TokenService
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Repositories:
    accounts: AccountRepository
    businesses: BusinessRepository
    employees: EmployeeRepository
    leaves: LeaveRepository
    advances: AdvanceRepository
    timesheets: TimesheetRepository
    payrolls: PayrollRepository
    payments: SalaryPaymentRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection | None
    repos: Repositories
    tokens: TokenService

    auth_service: AuthService
    account_service: AccountService
    business_service: BusinessService
    employee_service: EmployeeService
    leave_service: LeaveService
    advance_service: AdvanceService
    timesheet_service: TimesheetService
    payroll_service: PayrollService
    payment_service: SalaryPaymentService


def mysql_repositories(conn: DatabaseConnection) -> Repositories:
    return Repositories(
        accounts=MySQLAccountRepository(conn),
        businesses=MySQLBusinessRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        advances=MySQLAdvanceRepository(conn),
        timesheets=MySQLTimesheetRepository(conn),
        payrolls=MySQLPayrollRepository(conn),
        payments=MySQLSalaryPaymentRepository(conn),
    )


def wire_services(
    repos: Repositories,
    *,
    token_secret: str,
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    conn: DatabaseConnection | None = None,
) -> Container:
    """Build every service on top of an already constructed set of repositories."""

    tokens = TokenService(token_secret, ttl_seconds=token_ttl_seconds)
    tenancy = TenancyResolver(repos.employees)

    return Container(
        conn=conn,
        repos=repos,
        tokens=tokens,
        auth_service=AuthService(repos.accounts, repos.businesses, repos.employees, tokens),
        account_service=AccountService(repos.accounts),
        business_service=BusinessService(repos.businesses),
        employee_service=EmployeeService(repos.employees, tenancy),
        leave_service=LeaveService(repos.leaves, tenancy),
        advance_service=AdvanceService(repos.advances, repos.employees, tenancy),
        timesheet_service=TimesheetService(repos.timesheets, tenancy),
        payroll_service=PayrollService(repos.payrolls, tenancy, calculator=StandardNetSalaryCalculator()),
        payment_service=SalaryPaymentService(repos.payments, repos.payrolls, tenancy),
    )


def build_container(
    *,
    db_config: Mapping,
    token_secret: str,
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire_services(
        mysql_repositories(conn),
        token_secret=token_secret,
        token_ttl_seconds=token_ttl_seconds,
        conn=conn,
    )
