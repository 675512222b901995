from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.pagination import PageRequest, paginate
from ..common.patching import apply_patch, changes
from ..core.enums import Currency, PayrollStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..security.policy import Action, authorize
from ..security.tenancy import Caller, EmployeeScope, TenancyResolver
from .calculator.base import NetSalaryCalculator
from .calculator.standard_calculator import StandardNetSalaryCalculator
from .model import Payroll, PayrollPatch
from .repository import PayrollRepository
from .statistics import payroll_statistics

logger = logging.getLogger(__name__)

_NET_INPUTS = ("gross_salary", "total_deductions", "other_additions")


class PayrollService:
    def __init__(
        self,
        payrolls: PayrollRepository,
        tenancy: TenancyResolver,
        calculator: Optional[NetSalaryCalculator] = None,
    ):
        self._payrolls = payrolls
        self._tenancy = tenancy
        self._calculator = calculator or StandardNetSalaryCalculator()

    def _scope(self, caller: Caller, employee_id: str, action: Action) -> EmployeeScope:
        scope = self._tenancy.resolve(caller, employee_id)
        authorize(caller, action, employee_id=scope.employee_id)
        return scope

    def _get(self, scope: EmployeeScope, payroll_id: str) -> Payroll:
        payroll = self._payrolls.get(owner_id=scope.owner_id, employee_id=scope.employee_id, payroll_id=payroll_id)
        if not payroll:
            raise NotFoundError("Payroll not found")
        return payroll

    def _ensure_period_free(self, scope: EmployeeScope, month: str, year: str, *, exclude_id: Optional[str] = None) -> None:
        existing = self._payrolls.find_by_period(
            owner_id=scope.owner_id, employee_id=scope.employee_id, period_month=month, period_year=year
        )
        if existing and existing.id != exclude_id:
            raise ConflictError("Payroll for this period already exists")

    def list_payrolls(
        self,
        caller: Caller,
        employee_id: str,
        *,
        year: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        paging: Optional[PageRequest] = None,
    ) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._payrolls.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        if year is not None:
            rows = [p for p in rows if p.period_year == str(year)]
        if status is not None:
            rows = [p for p in rows if p.status == status]
        return paginate(rows, paging, key="payrolls")

    def create(self, caller: Caller, employee_id: str, patch: PayrollPatch) -> Payroll:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYROLL)
        if not patch.period_month or not patch.period_year or patch.gross_salary is None:
            raise ValidationError("period_month, period_year and gross_salary are required")
        self._ensure_period_free(scope, patch.period_month, patch.period_year)

        net = patch.net_salary
        if net is None:
            net = self._calculator.net_salary(patch.gross_salary, patch.total_deductions, patch.other_additions)

        now = now_utc()
        base = Payroll(
            id=new_id(),
            owner_id=scope.owner_id,
            employee_id=scope.employee_id,
            period_month=patch.period_month,
            period_year=patch.period_year,
            gross_salary=patch.gross_salary,
            net_salary=net,
            currency=Currency.TL,
            status=PayrollStatus.PENDING,
            payroll_date=now,
            created_at=now,
            updated_at=now,
        )
        payroll = self._payrolls.create(apply_patch(base, patch, net_salary=net))
        logger.info("Payroll %s created for %s period %s", payroll.id, scope.employee_id, payroll.period_key)
        return payroll

    def statistics(self, caller: Caller, employee_id: str, *, year: int) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._payrolls.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        return payroll_statistics(rows, year=year)

    def get(self, caller: Caller, employee_id: str, payroll_id: str) -> Payroll:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        return self._get(scope, payroll_id)

    def update(self, caller: Caller, employee_id: str, payroll_id: str, patch: PayrollPatch) -> Payroll:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYROLL)
        payroll = self._get(scope, payroll_id)
        supplied = changes(patch)
        if not supplied:
            raise ValidationError("No valid fields to update")

        updated = apply_patch(payroll, patch, updated_at=now_utc())
        if (updated.period_month, updated.period_year) != (payroll.period_month, payroll.period_year):
            self._ensure_period_free(scope, updated.period_month, updated.period_year, exclude_id=payroll.id)
        if "net_salary" not in supplied and any(k in supplied for k in _NET_INPUTS):
            net = self._calculator.net_salary(updated.gross_salary, updated.total_deductions, updated.other_additions)
            updated = replace(updated, net_salary=net)
        return self._payrolls.update(updated)

    def mark_paid(self, caller: Caller, employee_id: str, payroll_id: str) -> Payroll:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYROLL)
        payroll = self._get(scope, payroll_id)
        if payroll.status == PayrollStatus.PAID:
            raise ConflictError("Payroll is already marked as paid")

        ok = self._payrolls.mark_paid(
            owner_id=scope.owner_id, employee_id=scope.employee_id, payroll_id=payroll_id, payment_date=now_utc()
        )
        if not ok:
            raise ConflictError("Payroll is already marked as paid")
        logger.info("Payroll %s marked as paid", payroll_id)
        return self._get(scope, payroll_id)

    def delete(self, caller: Caller, employee_id: str, payroll_id: str) -> None:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYROLL)
        self._get(scope, payroll_id)
        self._payrolls.delete(owner_id=scope.owner_id, employee_id=scope.employee_id, payroll_id=payroll_id)
