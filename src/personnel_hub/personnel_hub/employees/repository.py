from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def create(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def get(self, *, owner_id: str, employee_id: str, include_inactive: bool = False) -> Optional[Employee]:
        raise NotImplementedError

    def list(self, *, owner_id: str, is_active: bool = True) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

    def find_active_by_national_id(self, *, owner_id: str, national_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def update(self, employee: Employee) -> Employee:
        raise NotImplementedError
