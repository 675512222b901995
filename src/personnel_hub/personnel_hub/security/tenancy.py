from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..accounts.model import Account
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class Caller:
    """Authenticated identity attached to a request."""

    account_id: str
    email: str
    role: Role
    business_id: Optional[str] = None
    employee_id: Optional[str] = None
    owner_account_id: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "Caller":
        return cls(
            account_id=account.id,
            email=account.email,
            role=account.role,
            business_id=account.business_id,
            employee_id=account.employee_id,
            owner_account_id=account.owner_account_id,
        )

    @property
    def is_employee(self) -> bool:
        return self.role == Role.EMPLOYEE

    @property
    def namespace(self) -> Optional[str]:
        if self.is_employee:
            return self.owner_account_id
        return self.account_id


@dataclass(frozen=True)
class EmployeeScope:
    owner_id: str
    employee_id: str
    employee: Employee


class TenancyResolver:
    """Turns (caller, employee id from the path) into a verified scope."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def resolve(self, caller: Caller, employee_id: str, *, include_inactive: bool = False) -> EmployeeScope:
        if caller.is_employee and employee_id != caller.employee_id:
            raise AuthorizationError("You can only access your own records")

        owner_id = caller.namespace
        if not owner_id or not employee_id:
            raise NotFoundError("Employee not found")

        employee = self._employees.get(owner_id=owner_id, employee_id=employee_id, include_inactive=include_inactive)
        if not employee:
            raise NotFoundError("Employee not found")
        return EmployeeScope(owner_id=owner_id, employee_id=employee.id, employee=employee)

    def resolve_self(self, caller: Caller) -> EmployeeScope:
        if not caller.is_employee:
            raise AuthorizationError("This endpoint is only available to employee accounts")
        if not caller.employee_id:
            raise NotFoundError("Employee record not found for this account")
        return self.resolve(caller, caller.employee_id)
