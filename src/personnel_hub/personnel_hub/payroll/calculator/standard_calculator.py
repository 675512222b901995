from __future__ import annotations

from ...common.numbers import as_number, round2
from .base import NetSalaryCalculator


class StandardNetSalaryCalculator(NetSalaryCalculator):
    """Standard rule: gross - deductions + additions, rounded to cents. Non-numeric inputs count as 0."""

    def net_salary(self, gross_salary: object, total_deductions: object = 0, other_additions: object = 0) -> float:
        return round2(as_number(gross_salary) - as_number(total_deductions) + as_number(other_additions))


def calculate_net_salary(gross_salary: object, total_deductions: object = 0, other_additions: object = 0) -> float:
    return StandardNetSalaryCalculator().net_salary(gross_salary, total_deductions, other_additions)
