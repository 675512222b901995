from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Timesheet


class TimesheetRepository(Protocol):
    def create(self, timesheet: Timesheet) -> Timesheet:
        raise NotImplementedError

    def get(self, *, owner_id: str, employee_id: str, timesheet_id: str) -> Optional[Timesheet]:
        raise NotImplementedError

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[Timesheet]:
        """Ordered by date, latest first."""

        raise NotImplementedError

    def update(self, timesheet: Timesheet) -> Timesheet:
        raise NotImplementedError

    def delete(self, *, owner_id: str, employee_id: str, timesheet_id: str) -> bool:
        raise NotImplementedError
