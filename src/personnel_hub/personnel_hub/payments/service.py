from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.pagination import PageRequest, paginate
from ..common.patching import apply_patch, changes
from ..core.enums import PaymentMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..payroll.repository import PayrollRepository
from ..security.policy import Action, authorize
from ..security.tenancy import Caller, EmployeeScope, TenancyResolver
from .model import PaymentPatch, SalaryPayment
from .repository import SalaryPaymentRepository
from .statistics import payment_statistics

logger = logging.getLogger(__name__)


class SalaryPaymentService:
    def __init__(self, payments: SalaryPaymentRepository, payrolls: PayrollRepository, tenancy: TenancyResolver):
        self._payments = payments
        self._payrolls = payrolls
        self._tenancy = tenancy

    def _scope(self, caller: Caller, employee_id: str, action: Action) -> EmployeeScope:
        scope = self._tenancy.resolve(caller, employee_id)
        authorize(caller, action, employee_id=scope.employee_id)
        return scope

    def _get(self, scope: EmployeeScope, payment_id: str) -> SalaryPayment:
        payment = self._payments.get(owner_id=scope.owner_id, employee_id=scope.employee_id, payment_id=payment_id)
        if not payment:
            raise NotFoundError("Salary payment not found")
        return payment

    def _ensure_payroll(self, scope: EmployeeScope, payroll_id: Optional[str]) -> None:
        if payroll_id and not self._payrolls.get(
            owner_id=scope.owner_id, employee_id=scope.employee_id, payroll_id=payroll_id
        ):
            raise NotFoundError("Payroll not found")

    def list_payments(
        self,
        caller: Caller,
        employee_id: str,
        *,
        payment_method: Optional[PaymentMethod] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        year: Optional[int] = None,
        paging: Optional[PageRequest] = None,
    ) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._payments.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        if payment_method is not None:
            rows = [p for p in rows if p.payment_method == payment_method]
        if start_date is not None:
            rows = [p for p in rows if p.payment_date.date() >= start_date]
        if end_date is not None:
            rows = [p for p in rows if p.payment_date.date() <= end_date]
        if year is not None:
            rows = [p for p in rows if p.payment_date.year == year]
        return paginate(rows, paging, key="payments")

    def create(self, caller: Caller, employee_id: str, patch: PaymentPatch) -> SalaryPayment:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYMENTS)
        if patch.amount is None:
            raise ValidationError("amount is required")
        self._ensure_payroll(scope, patch.payroll_id)

        now = now_utc()
        base = SalaryPayment(
            id=new_id(),
            owner_id=scope.owner_id,
            employee_id=scope.employee_id,
            amount=patch.amount,
            payment_date=now,
            created_at=now,
            updated_at=now,
        )
        payment = self._payments.create(apply_patch(base, patch))
        logger.info("Salary payment %s recorded for %s", payment.id, scope.employee_id)
        return payment

    def statistics(self, caller: Caller, employee_id: str, *, year: int) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._payments.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        return payment_statistics(rows, year=year)

    def list_by_payroll(self, caller: Caller, employee_id: str, payroll_id: str) -> list:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        self._ensure_payroll(scope, payroll_id)
        return list(self._payments.list_by_payroll(owner_id=scope.owner_id, employee_id=scope.employee_id, payroll_id=payroll_id))

    def get(self, caller: Caller, employee_id: str, payment_id: str) -> SalaryPayment:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        return self._get(scope, payment_id)

    def update(self, caller: Caller, employee_id: str, payment_id: str, patch: PaymentPatch) -> SalaryPayment:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYMENTS)
        payment = self._get(scope, payment_id)
        if not changes(patch):
            raise ValidationError("No valid fields to update")
        self._ensure_payroll(scope, patch.payroll_id)
        return self._payments.update(apply_patch(payment, patch, updated_at=now_utc()))

    def delete(self, caller: Caller, employee_id: str, payment_id: str) -> None:
        scope = self._scope(caller, employee_id, Action.MANAGE_PAYMENTS)
        self._get(scope, payment_id)
        self._payments.delete(owner_id=scope.owner_id, employee_id=scope.employee_id, payment_id=payment_id)
