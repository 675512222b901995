from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Currency, PaymentMethod


@dataclass(frozen=True)
class SalaryPayment:
    """Money actually paid out; may reference a payroll (installments allowed)."""

    id: str
    owner_id: str
    employee_id: str
    amount: float
    payment_date: datetime
    payroll_id: Optional[str] = None
    currency: Currency = Currency.TL
    payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentPatch:
    amount: Optional[float] = None
    payroll_id: Optional[str] = None
    currency: Optional[Currency] = None
    payment_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    description: Optional[str] = None
