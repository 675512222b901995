from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalaryPayment


class SalaryPaymentRepository(Protocol):
    def create(self, payment: SalaryPayment) -> SalaryPayment:
        raise NotImplementedError

    def get(self, *, owner_id: str, employee_id: str, payment_id: str) -> Optional[SalaryPayment]:
        raise NotImplementedError

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[SalaryPayment]:
        """Latest payment_date first."""

        raise NotImplementedError

    def list_by_payroll(self, *, owner_id: str, employee_id: str, payroll_id: str) -> Sequence[SalaryPayment]:
        raise NotImplementedError

    def update(self, payment: SalaryPayment) -> SalaryPayment:
        raise NotImplementedError

    def delete(self, *, owner_id: str, employee_id: str, payment_id: str) -> bool:
        raise NotImplementedError
