from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from ..core.enums import TimesheetStatus


@dataclass(frozen=True)
class Timesheet:
    id: str
    owner_id: str
    employee_id: str
    date: dt.date
    status: TimesheetStatus = TimesheetStatus.WORKED
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    total_hours_worked: float = 0.0
    overtime_hours: float = 0.0
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


@dataclass(frozen=True)
class TimesheetPatch:
    date: Optional[dt.date] = None
    status: Optional[TimesheetStatus] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    total_hours_worked: Optional[float] = None
    overtime_hours: Optional[float] = None
    notes: Optional[str] = None
