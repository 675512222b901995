from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.pagination import PageRequest, paginate
from ..common.patching import apply_patch, changes
from ..common.serialization import to_json
from ..core.enums import RequestStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..employees.repository import EmployeeRepository
from ..security.policy import Action, authorize, ensure_request_editable
from ..security.tenancy import Caller, EmployeeScope, TenancyResolver
from .model import AdvancePatch, AdvanceRequest
from .repository import AdvanceRepository
from .statistics import advance_statistics, combine_advance_statistics

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class AdvanceService:
    def __init__(self, advances: AdvanceRepository, employees: EmployeeRepository, tenancy: TenancyResolver):
        self._advances = advances
        self._employees = employees
        self._tenancy = tenancy

    def _scope(self, caller: Caller, employee_id: str, action: Action) -> EmployeeScope:
        scope = self._tenancy.resolve(caller, employee_id)
        authorize(caller, action, employee_id=scope.employee_id)
        return scope

    def _get(self, scope: EmployeeScope, advance_id: str) -> AdvanceRequest:
        advance = self._advances.get(owner_id=scope.owner_id, employee_id=scope.employee_id, advance_id=advance_id)
        if not advance:
            raise NotFoundError("Advance request not found")
        return advance

    def list_advances(
        self,
        caller: Caller,
        employee_id: str,
        *,
        status: Optional[RequestStatus] = None,
        paging: Optional[PageRequest] = None,
    ) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._advances.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        if status is not None:
            rows = [r for r in rows if r.status == status]
        return paginate(rows, paging, key="advances")

    def list_all(
        self,
        caller: Caller,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        paging: Optional[PageRequest] = None,
    ) -> dict:
        """Flat listing: one employee, or every active employee of the namespace merged."""

        if caller.is_employee:
            employee_id = caller.employee_id
        if employee_id:
            scopes = [self._scope(caller, employee_id, Action.VIEW_RECORDS)]
        else:
            authorize(caller, Action.DECIDE_REQUEST)
            owner_id = caller.namespace
            scopes = [
                EmployeeScope(owner_id=owner_id, employee_id=e.id, employee=e)
                for e in self._employees.list(owner_id=owner_id, is_active=True)
            ]

        rows = []
        for scope in scopes:
            for advance in self._advances.list(owner_id=scope.owner_id, employee_id=scope.employee_id):
                if status is None or advance.status == status:
                    rows.append((advance, scope.employee))
        rows.sort(key=lambda pair: pair[0].created_at or _EPOCH, reverse=True)

        return paginate(
            rows,
            paging,
            key="advances",
            render=lambda pair: {**to_json(pair[0]), "employee": pair[1].summary()},
        )

    def create(self, caller: Caller, employee_id: Optional[str], patch: AdvancePatch) -> AdvanceRequest:
        if not employee_id:
            if not caller.is_employee:
                raise ValidationError("employee_id is required")
            employee_id = caller.employee_id
        scope = self._scope(caller, employee_id, Action.SUBMIT_REQUEST)
        if patch.amount is None or not patch.reason:
            raise ValidationError("amount and reason are required")

        now = now_utc()
        advance = self._advances.create(
            AdvanceRequest(
                id=new_id(),
                owner_id=scope.owner_id,
                employee_id=scope.employee_id,
                amount=float(patch.amount),
                reason=patch.reason,
                status=RequestStatus.PENDING,
                request_date=now,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Advance %s requested for employee %s", advance.id, scope.employee_id)
        return advance

    def statistics(self, caller: Caller, employee_id: str, *, year: int) -> dict:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        rows = self._advances.list(owner_id=scope.owner_id, employee_id=scope.employee_id)
        return {**advance_statistics(rows, year=year), "employee": scope.employee.summary()}

    def statistics_all(self, caller: Caller, *, year: int) -> dict:
        if caller.is_employee:
            return self.statistics(caller, caller.employee_id, year=year)
        authorize(caller, Action.DECIDE_REQUEST)
        owner_id = caller.namespace
        per_employee = []
        for employee in self._employees.list(owner_id=owner_id, is_active=True):
            rows = self._advances.list(owner_id=owner_id, employee_id=employee.id)
            per_employee.append((employee, advance_statistics(rows, year=year)))
        return combine_advance_statistics(per_employee, year=year)

    def get(self, caller: Caller, employee_id: str, advance_id: str) -> AdvanceRequest:
        scope = self._scope(caller, employee_id, Action.VIEW_RECORDS)
        return self._get(scope, advance_id)

    def update(self, caller: Caller, employee_id: str, advance_id: str, patch: AdvancePatch) -> AdvanceRequest:
        scope = self._scope(caller, employee_id, Action.EDIT_REQUEST)
        advance = self._get(scope, advance_id)
        ensure_request_editable(caller, advance.status)
        if not changes(patch):
            raise ValidationError("No valid fields to update")
        return self._advances.update(apply_patch(advance, patch, updated_at=now_utc()))

    def approve(self, caller: Caller, employee_id: str, advance_id: str, *, note: Optional[str] = None) -> AdvanceRequest:
        return self._decide(caller, employee_id, advance_id, RequestStatus.APPROVED, note)

    def reject(self, caller: Caller, employee_id: str, advance_id: str, *, note: Optional[str] = None) -> AdvanceRequest:
        return self._decide(caller, employee_id, advance_id, RequestStatus.REJECTED, note)

    def _decide(
        self, caller: Caller, employee_id: str, advance_id: str, status: RequestStatus, note: Optional[str]
    ) -> AdvanceRequest:
        authorize(caller, Action.DECIDE_REQUEST)
        scope = self._scope(caller, employee_id, Action.DECIDE_REQUEST)
        advance = self._get(scope, advance_id)
        if advance.status != RequestStatus.PENDING:
            raise ConflictError(f"Advance request has already been {advance.status.value}")

        decided = self._advances.decide(
            owner_id=scope.owner_id,
            employee_id=scope.employee_id,
            advance_id=advance_id,
            status=status,
            approved_by=caller.account_id,
            response_date=now_utc(),
            approval_note=note,
        )
        if not decided:
            raise ConflictError("Advance request has already been processed")
        logger.info("Advance %s %s by %s", advance_id, status.value, caller.account_id)
        return self._get(scope, advance_id)

    def delete(self, caller: Caller, employee_id: str, advance_id: str) -> None:
        scope = self._scope(caller, employee_id, Action.EDIT_REQUEST)
        advance = self._get(scope, advance_id)
        ensure_request_editable(caller, advance.status)
        self._advances.delete(owner_id=scope.owner_id, employee_id=scope.employee_id, advance_id=advance_id)
