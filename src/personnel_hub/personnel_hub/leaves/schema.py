from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.validators import optional_text, require_choice, require_date
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from .model import LeavePatch


def parse_leave(data: Mapping[str, Any], *, partial: bool = False) -> LeavePatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: Dict[str, Any] = {}
    if data.get("type") is not None or not partial:
        values["type"] = require_choice(data.get("type"), LeaveType, "Leave type")
    if data.get("start_date") is not None or not partial:
        values["start_date"] = require_date(data.get("start_date"), "Start date")
    if data.get("end_date") is not None or not partial:
        values["end_date"] = require_date(data.get("end_date"), "End date")
    if data.get("reason") is not None:
        values["reason"] = optional_text(data["reason"], "Reason", max_len=MAX_REASON_LENGTH)
    return LeavePatch(**values)
