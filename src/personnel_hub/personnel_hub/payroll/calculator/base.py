from __future__ import annotations

from abc import ABC, abstractmethod


class NetSalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def net_salary(self, gross_salary: object, total_deductions: object = 0, other_additions: object = 0) -> float:
        raise NotImplementedError
