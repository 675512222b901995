from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import now_utc, today
from ..common.pagination import PageRequest, paginate
from ..common.patching import apply_patch, changes
from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..security.policy import Action, authorize, ensure_request_editable
from ..security.tenancy import Caller, EmployeeScope, TenancyResolver
from .model import Leave, LeavePatch
from .repository import LeaveRepository
from .statistics import leave_statistics

logger = logging.getLogger(__name__)


def validate_leave_dates(start_date, end_date, *, check_past: bool = True) -> None:
    if check_past and start_date < today():
        raise ValidationError("Start date cannot be in the past")
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")


class LeaveService:
    def __init__(self, leaves: LeaveRepository, tenancy: TenancyResolver):
        self._leaves = leaves
        self._tenancy = tenancy

    def _scope(self, caller: Caller, employee_id: str, action: Action) -> EmployeeScope:
        scope = self._tenancy.resolve(caller, employee_id)
        authorize(caller, action, employee_id=scope.employee_id)
        return scope

    def _get(self, scope: EmployeeScope, leave_id: str) -> Leave:
        leave = self._leaves.get(owner_id=scope.owner_id, employee_id=scope.employee_id, leave_id=leave_id)
        if not leave:
            raise NotFoundError("Leave not found")
        return leave

    def list_leaves(
        self,
        caller: Caller,
        employee_id: str,
        *,
        status: Optional[RequestStatus] = None,
        leave_type: Optional[LeaveType] = None,
        paging: Optional[PageRequest] = None,
    ) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._leaves.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if leave_type is not None:
            rows = [r for r in rows if r.type == leave_type]
        return paginate(rows, paging, key="leaves")

    def create(self, caller: Caller, employee_id: str, patch: LeavePatch) -> Leave:
        scope = self._scope(caller, employee_id, Action.SUBMIT_REQUEST)
        if patch.type is None or patch.start_date is None or patch.end_date is None:
            raise ValidationError("type, start_date and end_date are required")
        validate_leave_dates(patch.start_date, patch.end_date)

        now = now_utc()
        leave = self._leaves.create(
            Leave(
                id=new_id(),
                owner_id=scope.owner_id,
                employee_id=scope.employee_id,
                type=patch.type,
                start_date=patch.start_date,
                end_date=patch.end_date,
                reason=patch.reason,
                status=RequestStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Leave %s requested for employee %s", leave.id, scope.employee_id)
        return leave

    def statistics(self, caller: Caller, employee_id: str, *, year: int) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._leaves.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        return leave_statistics(rows, year=year)

    def get(self, caller: Caller, employee_id: str, leave_id: str) -> Leave:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        return self._get(scope, leave_id)

    def update(self, caller: Caller, employee_id: str, leave_id: str, patch: LeavePatch) -> Leave:
        scope = self._scope(caller, employee_id, Action.EDIT_REQUEST)
        leave = self._get(scope, leave_id)
        ensure_request_editable(caller, leave.status)
        if not changes(patch):
            raise ValidationError("No valid fields to update")

        updated = apply_patch(leave, patch, updated_at=now_utc())
        start_changed = patch.start_date is not None and patch.start_date != leave.start_date
        validate_leave_dates(updated.start_date, updated.end_date, check_past=start_changed)
        return self._leaves.update(updated)

    def approve(self, caller: Caller, employee_id: str, leave_id: str, *, note: Optional[str] = None) -> Leave:
        return self._decide(caller, employee_id, leave_id, RequestStatus.APPROVED, note)

    def reject(self, caller: Caller, employee_id: str, leave_id: str, *, note: Optional[str] = None) -> Leave:
        return self._decide(caller, employee_id, leave_id, RequestStatus.REJECTED, note)

    def _decide(self, caller: Caller, employee_id: str, leave_id: str, status: RequestStatus, note: Optional[str]) -> Leave:
        authorize(caller, Action.DECIDE_REQUEST)
        scope = self._scope(caller, employee_id, Action.DECIDE_REQUEST)
        leave = self._get(scope, leave_id)
        if leave.status != RequestStatus.PENDING:
            raise ConflictError(f"Leave request has already been {leave.status.value}")

        decided = self._leaves.decide(
            owner_id=scope.owner_id,
            employee_id=scope.employee_id,
            leave_id=leave_id,
            status=status,
            approved_by=caller.account_id,
            approved_at=now_utc(),
            approval_note=note,
        )
        if not decided:
            raise ConflictError("Leave request has already been processed")
        logger.info("Leave %s %s by %s", leave_id, status.value, caller.account_id)
        return self._get(scope, leave_id)

    def delete(self, caller: Caller, employee_id: str, leave_id: str) -> None:
        scope = self._scope(caller, employee_id, Action.EDIT_REQUEST)
        leave = self._get(scope, leave_id)
        ensure_request_editable(caller, leave.status)
        self._leaves.delete(owner_id=scope.owner_id, employee_id=scope.employee_id, leave_id=leave_id)
