from __future__ import annotations

from typing import Iterable

from ..common.numbers import as_number, round2
from ..core.enums import PayrollStatus
from .model import Payroll


def payroll_statistics(payrolls: Iterable[Payroll], *, year: int) -> dict:
    by_status = {s.value: 0 for s in PayrollStatus}
    by_month: dict = {}
    totals = {
        "total_gross_salary": 0.0,
        "total_net_salary": 0.0,
        "total_deductions": 0.0,
        "total_tax_deductions": 0.0,
        "total_insurance_premiums": 0.0,
    }
    count = 0

    for p in payrolls:
        if p.period_year != str(year):
            continue
        count += 1
        by_status[p.status.value] += 1
        gross = as_number(p.gross_salary)
        net = as_number(p.net_salary)
        totals["total_gross_salary"] += gross
        totals["total_net_salary"] += net
        totals["total_deductions"] += as_number(p.total_deductions)
        totals["total_tax_deductions"] += as_number(p.tax_deduction)
        totals["total_insurance_premiums"] += as_number(p.insurance_employee_share)

        month = by_month.setdefault(p.period_key, {"gross_salary": 0.0, "net_salary": 0.0, "status": p.status.value})
        month["gross_salary"] = round2(month["gross_salary"] + gross)
        month["net_salary"] = round2(month["net_salary"] + net)

    return {
        "year": year,
        "total_payrolls": count,
        "paid_payrolls": by_status[PayrollStatus.PAID.value],
        "pending_payrolls": by_status[PayrollStatus.PENDING.value],
        **{k: round2(v) for k, v in totals.items()},
        "by_status": by_status,
        "by_month": by_month,
    }
