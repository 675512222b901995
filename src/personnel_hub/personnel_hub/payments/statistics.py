from __future__ import annotations

from typing import Iterable

from ..common.numbers import as_number, round2
from ..core.enums import PaymentMethod
from .model import SalaryPayment


def payment_statistics(payments: Iterable[SalaryPayment], *, year: int) -> dict:
    by_method = {m.value: {"count": 0, "amount": 0.0} for m in PaymentMethod}
    by_month: dict = {}
    count = 0
    total = 0.0

    for p in payments:
        if p.payment_date.year != year:
            continue
        amount = as_number(p.amount)
        count += 1
        total += amount
        by_method[p.payment_method.value]["count"] += 1
        by_method[p.payment_method.value]["amount"] += amount
        month = by_month.setdefault(p.payment_date.strftime("%Y-%m"), {"count": 0, "amount": 0.0})
        month["count"] += 1
        month["amount"] += amount

    for bucket in list(by_method.values()) + list(by_month.values()):
        bucket["amount"] = round2(bucket["amount"])

    return {
        "year": year,
        "total_payments": count,
        "total_amount": round2(total),
        "by_payment_method": by_method,
        "by_month": by_month,
        "average_payment": round2(total / count) if count else 0,
    }
