from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import AdvanceRequest


class AdvanceRepository(Protocol):
    def create(self, advance: AdvanceRequest) -> AdvanceRequest:
        raise NotImplementedError

    def get(self, *, owner_id: str, employee_id: str, advance_id: str) -> Optional[AdvanceRequest]:
        raise NotImplementedError

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[AdvanceRequest]:
        """Newest first."""

        raise NotImplementedError

    def update(self, advance: AdvanceRequest) -> AdvanceRequest:
        raise NotImplementedError

    def decide(
        self,
        *,
        owner_id: str,
        employee_id: str,
        advance_id: str,
        status: RequestStatus,
        approved_by: str,
        response_date: datetime,
        approval_note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, owner_id: str, employee_id: str, advance_id: str) -> bool:
        raise NotImplementedError
