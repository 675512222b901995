from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..common.numbers import as_number
from .model import Employee


def employee_statistics(employees: Iterable[Employee]) -> dict:
    """Headcount breakdown; groupings and the salary average cover active employees only."""

    employees = list(employees)
    active = [e for e in employees if e.is_active]

    by_department = Counter(e.department for e in active if e.department)
    by_position = Counter(e.position for e in active if e.position)
    by_gender = Counter(e.gender for e in active if e.gender)

    salaries = [as_number(e.salary.gross_amount) for e in active]
    salaries = [s for s in salaries if s > 0]

    return {
        "total": len(employees),
        "active": len(active),
        "inactive": len(employees) - len(active),
        "by_department": dict(by_department),
        "by_position": dict(by_position),
        "by_gender": dict(by_gender),
        "average_salary": round(sum(salaries) / len(salaries)) if salaries else 0,
    }
