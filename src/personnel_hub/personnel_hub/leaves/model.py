from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class Leave:
    id: str
    owner_id: str
    employee_id: str
    type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str] = None
    status: RequestStatus = RequestStatus.PENDING
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    approval_note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        """Inclusive day count."""
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class LeavePatch:
    type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
