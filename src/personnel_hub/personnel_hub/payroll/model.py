from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Currency, PayrollStatus


@dataclass(frozen=True)
class Payroll:
    """One salary slip per employee and period (``period_month`` "01".."12", ``period_year`` "YYYY")."""

    id: str
    owner_id: str
    employee_id: str
    period_month: str
    period_year: str
    gross_salary: float
    net_salary: float
    total_deductions: float = 0.0
    insurance_employee_share: float = 0.0
    insurance_employer_share: float = 0.0
    tax_deduction: float = 0.0
    other_additions: float = 0.0
    currency: Currency = Currency.TL
    status: PayrollStatus = PayrollStatus.PENDING
    payroll_date: Optional[datetime] = None
    payment_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def period_key(self) -> str:
        return f"{self.period_year}-{self.period_month}"


@dataclass(frozen=True)
class PayrollPatch:
    period_month: Optional[str] = None
    period_year: Optional[str] = None
    gross_salary: Optional[float] = None
    net_salary: Optional[float] = None
    total_deductions: Optional[float] = None
    insurance_employee_share: Optional[float] = None
    insurance_employer_share: Optional[float] = None
    tax_deduction: Optional[float] = None
    other_additions: Optional[float] = None
    currency: Optional[Currency] = None
    notes: Optional[str] = None
