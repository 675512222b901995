from __future__ import annotations

from typing import Iterable, Optional

from ..common.numbers import as_number, round2
from ..core.enums import TimesheetStatus
from .model import Timesheet

_DAY_COUNTERS = {
    TimesheetStatus.WORKED: "work_days",
    TimesheetStatus.ON_LEAVE: "leave_days",
    TimesheetStatus.ABSENT: "absent_days",
    TimesheetStatus.HALF_DAY: "half_days",
    TimesheetStatus.HOLIDAY: "holiday_days",
}


def in_period(timesheet: Timesheet, *, year: int, month: Optional[int] = None) -> bool:
    if timesheet.date.year != year:
        return False
    return month is None or timesheet.date.month == month


def timesheet_statistics(timesheets: Iterable[Timesheet], *, year: int, month: Optional[int] = None) -> dict:
    stats = {
        "year": year,
        "month": month,
        "total_days": 0,
        **{name: 0 for name in _DAY_COUNTERS.values()},
        "total_hours_worked": 0.0,
        "total_overtime_hours": 0.0,
        "by_status": {s.value: 0 for s in TimesheetStatus},
    }

    for ts in timesheets:
        if not in_period(ts, year=year, month=month):
            continue
        stats["total_days"] += 1
        stats["by_status"][ts.status.value] += 1
        stats[_DAY_COUNTERS[ts.status]] += 1
        stats["total_hours_worked"] += as_number(ts.total_hours_worked)
        stats["total_overtime_hours"] += as_number(ts.overtime_hours)

    stats["total_hours_worked"] = round2(stats["total_hours_worked"])
    stats["total_overtime_hours"] = round2(stats["total_overtime_hours"])
    return stats
