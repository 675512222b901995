from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class AdvanceRequest:
    id: str
    owner_id: str
    employee_id: str
    amount: float
    reason: str
    status: RequestStatus = RequestStatus.PENDING
    request_date: Optional[datetime] = None
    response_date: Optional[datetime] = None
    approved_by: Optional[str] = None
    approval_note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AdvancePatch:
    amount: Optional[float] = None
    reason: Optional[str] = None
