from __future__ import annotations

from typing import Iterable

from ..core.enums import LeaveType, RequestStatus
from .model import Leave


def leave_statistics(leaves: Iterable[Leave], *, year: int) -> dict:
    """Fold the leaves that start in ``year``."""

    by_type = {t.value: 0 for t in LeaveType}
    by_status = {s.value: 0 for s in RequestStatus}
    total = total_days = approved_days = 0

    for leave in leaves:
        if leave.start_date.year != year:
            continue
        total += 1
        by_type[leave.type.value] += 1
        by_status[leave.status.value] += 1
        total_days += leave.days
        if leave.status == RequestStatus.APPROVED:
            approved_days += leave.days

    return {
        "year": year,
        "total": total,
        "approved": by_status[RequestStatus.APPROVED.value],
        "pending": by_status[RequestStatus.PENDING.value],
        "rejected": by_status[RequestStatus.REJECTED.value],
        "by_type": by_type,
        "by_status": by_status,
        "total_days": total_days,
        "approved_days": approved_days,
    }
