from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.pagination import PageRequest, paginate
from ..common.patching import apply_patch
from ..core.enums import ContractType, WorkMode
from ..core.exceptions import ConflictError, ValidationError
from ..database.mysql_base import new_id
from ..security.policy import Action, authorize
from ..security.tenancy import Caller, TenancyResolver
from .model import Employee, EmployeePatch, Salary
from .repository import EmployeeRepository
from .statistics import employee_statistics

logger = logging.getLogger(__name__)


def _matches(employee: Employee, term: str) -> bool:
    needle = term.lower()
    for text in (employee.first_name, employee.last_name, employee.email, employee.position, employee.department):
        if text and needle in text.lower():
            return True
    return bool(employee.national_id and term in employee.national_id)


class EmployeeService:
    def __init__(self, employees: EmployeeRepository, tenancy: TenancyResolver):
        self._employees = employees
        self._tenancy = tenancy

    @staticmethod
    def contract_types() -> list[str]:
        return [c.value for c in ContractType]

    @staticmethod
    def work_modes() -> list[str]:
        return [m.value for m in WorkMode]

    def list_employees(
        self,
        caller: Caller,
        *,
        search: Optional[str] = None,
        department: Optional[str] = None,
        paging: Optional[PageRequest] = None,
        deleted: bool = False,
    ) -> dict:
        authorize(caller, Action.MANAGE_EMPLOYEES)
        rows: Sequence[Employee] = self._employees.list(owner_id=caller.namespace, is_active=not deleted)

        term = (search or "").strip()
        dept = (department or "").strip().lower()
        if term:
            rows = [e for e in rows if _matches(e, term)]
        elif dept:
            rows = [e for e in rows if e.department and e.department.lower() == dept]

        return paginate(rows, paging, key="employees")

    def statistics(self, caller: Caller) -> dict:
        authorize(caller, Action.MANAGE_EMPLOYEES)
        owner_id = caller.namespace
        everyone = list(self._employees.list(owner_id=owner_id, is_active=True))
        everyone += list(self._employees.list(owner_id=owner_id, is_active=False))
        return employee_statistics(everyone)

    def _ensure_national_id_free(self, owner_id: str, national_id: Optional[str], *, exclude_id: Optional[str] = None) -> None:
        if not national_id:
            return
        other = self._employees.find_active_by_national_id(owner_id=owner_id, national_id=national_id)
        if other and other.id != exclude_id:
            raise ConflictError("An employee with this national ID already exists")

    def create(self, caller: Caller, patch: EmployeePatch) -> Employee:
        authorize(caller, Action.MANAGE_EMPLOYEES)
        if not patch.first_name or not patch.last_name:
            raise ValidationError("First name and last name are required")

        owner_id = caller.namespace
        self._ensure_national_id_free(owner_id, patch.national_id)

        now = now_utc()
        salary = replace(Salary(), **(patch.salary or {}))
        base = Employee(id=new_id(), owner_id=owner_id, first_name=patch.first_name, last_name=patch.last_name)
        employee = apply_patch(base, replace(patch, salary=None), salary=salary, created_at=now, updated_at=now)

        employee = self._employees.create(employee)
        logger.info("Created employee %s in namespace %s", employee.id, owner_id)
        return employee

    def get(self, caller: Caller, employee_id: str) -> Employee:
        authorize(caller, Action.VIEW_RECORDS, employee_id=employee_id)
        return self._tenancy.resolve(caller, employee_id).employee

    def update(self, caller: Caller, employee_id: str, patch: EmployeePatch) -> Employee:
        authorize(caller, Action.MANAGE_EMPLOYEES)
        scope = self._tenancy.resolve(caller, employee_id)
        return self._save_patch(scope.employee, patch)

    def _save_patch(self, employee: Employee, patch: EmployeePatch) -> Employee:
        if patch.national_id and patch.national_id != employee.national_id:
            self._ensure_national_id_free(employee.owner_id, patch.national_id, exclude_id=employee.id)

        extra = {"updated_at": now_utc()}
        if patch.salary:
            extra["salary"] = replace(employee.salary, **patch.salary)
        return self._employees.update(apply_patch(employee, replace(patch, salary=None), **extra))

    def delete(self, caller: Caller, employee_id: str) -> Employee:
        """Soft delete: the record stays, flagged inactive with a termination date."""

        authorize(caller, Action.MANAGE_EMPLOYEES)
        employee = self._tenancy.resolve(caller, employee_id, include_inactive=True).employee
        if not employee.is_active:
            raise ConflictError("Employee is already deleted")
        now = now_utc()
        employee = self._employees.update(replace(employee, is_active=False, termination_date=now, updated_at=now))
        logger.info("Soft deleted employee %s", employee.id)
        return employee

    def restore(self, caller: Caller, employee_id: str) -> Employee:
        authorize(caller, Action.MANAGE_EMPLOYEES)
        employee = self._tenancy.resolve(caller, employee_id, include_inactive=True).employee
        if employee.is_active:
            raise ConflictError("Employee is already active")
        self._ensure_national_id_free(employee.owner_id, employee.national_id, exclude_id=employee.id)
        return self._employees.update(replace(employee, is_active=True, termination_date=None, updated_at=now_utc()))

    # Self-service
    def get_me(self, caller: Caller) -> Employee:
        authorize(caller, Action.SELF_SERVICE)
        return self._tenancy.resolve_self(caller).employee

    def update_me(self, caller: Caller, patch: EmployeePatch) -> Employee:
        authorize(caller, Action.SELF_SERVICE)
        employee = self._tenancy.resolve_self(caller).employee
        profile_only = EmployeePatch(
            phone_number=patch.phone_number,
            address=patch.address,
            profile_picture_url=patch.profile_picture_url,
        )
        return self._save_patch(employee, profile_only)
