from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Payroll


class PayrollRepository(Protocol):
    def create(self, payroll: Payroll) -> Payroll:
        """Raises ConflictError when the period already has a payroll."""

        raise NotImplementedError

    def get(self, *, owner_id: str, employee_id: str, payroll_id: str) -> Optional[Payroll]:
        raise NotImplementedError

    def find_by_period(self, *, owner_id: str, employee_id: str, period_month: str, period_year: str) -> Optional[Payroll]:
        raise NotImplementedError

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[Payroll]:
        """Latest period first."""

        raise NotImplementedError

    def update(self, payroll: Payroll) -> Payroll:
        raise NotImplementedError

    def mark_paid(self, *, owner_id: str, employee_id: str, payroll_id: str, payment_date: datetime) -> bool:
        """pending -> paid; False when the payroll was not pending."""

        raise NotImplementedError

    def delete(self, *, owner_id: str, employee_id: str, payroll_id: str) -> bool:
        raise NotImplementedError
