from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.validators import optional_text, require_choice, require_date, require_hhmm, require_non_negative
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import TimesheetStatus
from ..core.exceptions import ValidationError
from .model import TimesheetPatch


def parse_timesheet(data: Mapping[str, Any], *, partial: bool = False) -> TimesheetPatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: Dict[str, Any] = {}
    if data.get("date") is not None or not partial:
        values["date"] = require_date(data.get("date"), "Date")
    if data.get("status") is not None:
        values["status"] = require_choice(data["status"], TimesheetStatus, "Status")
    for key, label in (("check_in_time", "Check-in time"), ("check_out_time", "Check-out time")):
        if data.get(key) is not None:
            values[key] = require_hhmm(data[key], label)
    for key, label in (("total_hours_worked", "Total hours worked"), ("overtime_hours", "Overtime hours")):
        if data.get(key) is not None:
            values[key] = require_non_negative(data[key], label)
    if data.get("notes") is not None:
        values["notes"] = optional_text(data["notes"], "Notes", max_len=MAX_REASON_LENGTH)
    return TimesheetPatch(**values)
