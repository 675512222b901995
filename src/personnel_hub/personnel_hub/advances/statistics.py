from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from ..common.numbers import as_number, round2
from ..core.enums import RequestStatus
from ..employees.model import Employee
from .model import AdvanceRequest


def advance_statistics(advances: Iterable[AdvanceRequest], *, year: int) -> dict:
    """Counts and amounts per status for requests made in ``year``."""

    by_status = {s.value: 0 for s in RequestStatus}
    amounts = {s.value: 0.0 for s in RequestStatus}
    total = 0
    total_amount = 0.0

    for advance in advances:
        if advance.request_date is None or advance.request_date.year != year:
            continue
        amount = as_number(advance.amount)
        total += 1
        by_status[advance.status.value] += 1
        amounts[advance.status.value] += amount
        total_amount += amount

    return {
        "year": year,
        "total": total,
        "approved": by_status["approved"],
        "pending": by_status["pending"],
        "rejected": by_status["rejected"],
        "by_status": by_status,
        "total_amount": round2(total_amount),
        "approved_amount": round2(amounts["approved"]),
        "pending_amount": round2(amounts["pending"]),
        "rejected_amount": round2(amounts["rejected"]),
    }


_SUMMED = ("total", "approved", "pending", "rejected", "total_amount", "approved_amount", "pending_amount", "rejected_amount")


def combine_advance_statistics(per_employee: Sequence[Tuple[Employee, dict]], *, year: int) -> dict:
    combined = advance_statistics([], year=year)
    employee_stats = []
    for employee, stats in per_employee:
        for key in _SUMMED:
            combined[key] += stats[key]
        for status, count in stats["by_status"].items():
            combined["by_status"][status] += count
        employee_stats.append({"employee": employee.summary(), **stats})

    for key in ("total_amount", "approved_amount", "pending_amount", "rejected_amount"):
        combined[key] = round2(combined[key])
    combined["employee_stats"] = employee_stats
    return combined
