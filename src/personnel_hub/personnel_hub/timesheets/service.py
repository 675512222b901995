from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.pagination import PageRequest, paginate
from ..common.patching import apply_patch, changes
from ..core.enums import TimesheetStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..security.policy import Action, authorize
from ..security.tenancy import Caller, EmployeeScope, TenancyResolver
from .hours import calculate_hours_worked
from .model import Timesheet, TimesheetPatch
from .repository import TimesheetRepository
from .statistics import in_period, timesheet_statistics


def _with_derived_hours(ts: Timesheet) -> Timesheet:
    if ts.check_in_time and ts.check_out_time:
        return replace(ts, total_hours_worked=calculate_hours_worked(ts.check_in_time, ts.check_out_time))
    return ts


class TimesheetService:
    """Timesheet entries; every role may log time within its own scope."""

    def __init__(self, timesheets: TimesheetRepository, tenancy: TenancyResolver):
        self._timesheets = timesheets
        self._tenancy = tenancy

    def _scope(self, caller: Caller, employee_id: str, action: Action) -> EmployeeScope:
        scope = self._tenancy.resolve(caller, employee_id)
        authorize(caller, action, employee_id=scope.employee_id)
        return scope

    def _get(self, scope: EmployeeScope, timesheet_id: str) -> Timesheet:
        ts = self._timesheets.get(owner_id=scope.owner_id, employee_id=scope.employee_id, timesheet_id=timesheet_id)
        if not ts:
            raise NotFoundError("Timesheet not found")
        return ts

    def list_timesheets(
        self,
        caller: Caller,
        employee_id: str,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[TimesheetStatus] = None,
        paging: Optional[PageRequest] = None,
    ) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._timesheets.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        if year is not None:
            rows = [r for r in rows if in_period(r, year=year, month=month)]
        if status is not None:
            rows = [r for r in rows if r.status == status]
        return paginate(rows, paging, key="timesheets")

    def create(self, caller: Caller, employee_id: str, patch: TimesheetPatch) -> Timesheet:
        scope = self._scope(caller, employee_id, Action.LOG_TIME)
        if patch.date is None:
            raise ValidationError("date is required")

        now = now_utc()
        base = Timesheet(
            id=new_id(),
            owner_id=scope.owner_id,
            employee_id=scope.employee_id,
            date=patch.date,
            created_at=now,
            updated_at=now,
        )
        return self._timesheets.create(_with_derived_hours(apply_patch(base, patch)))

    def statistics(self, caller: Caller, employee_id: str, *, year: int, month: Optional[int] = None) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._timesheets.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        return timesheet_statistics(rows, year=year, month=month)

    def get(self, caller: Caller, employee_id: str, timesheet_id: str) -> Timesheet:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        return self._get(scope, timesheet_id)

    def update(self, caller: Caller, employee_id: str, timesheet_id: str, patch: TimesheetPatch) -> Timesheet:
        scope = self._scope(caller, employee_id, Action.LOG_TIME)
        ts = self._get(scope, timesheet_id)
        if not changes(patch):
            raise ValidationError("No valid fields to update")
        updated = apply_patch(ts, patch, updated_at=now_utc())
        if patch.check_in_time or patch.check_out_time:
            updated = _with_derived_hours(updated)
        return self._timesheets.update(updated)

    def delete(self, caller: Caller, employee_id: str, timesheet_id: str) -> None:
        scope = self._scope(caller, employee_id, Action.LOG_TIME)
        self._get(scope, timesheet_id)
        self._timesheets.delete(owner_id=scope.owner_id, employee_id=scope.employee_id, timesheet_id=timesheet_id)
