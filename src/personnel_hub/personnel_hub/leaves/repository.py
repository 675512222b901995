from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import Leave


class LeaveRepository(Protocol):
    def create(self, leave: Leave) -> Leave:
        raise NotImplementedError

    def get(self, *, owner_id: str, employee_id: str, leave_id: str) -> Optional[Leave]:
        raise NotImplementedError

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[Leave]:
        """Newest first."""

        raise NotImplementedError

    def update(self, leave: Leave) -> Leave:
        raise NotImplementedError

    def decide(
        self,
        *,
        owner_id: str,
        employee_id: str,
        leave_id: str,
        status: RequestStatus,
        approved_by: str,
        approved_at: datetime,
        approval_note: Optional[str] = None,
    ) -> bool:
        """Move a pending leave to ``status``; False when it was no longer pending."""

        raise NotImplementedError

    def delete(self, *, owner_id: str, employee_id: str, leave_id: str) -> bool:
        raise NotImplementedError
