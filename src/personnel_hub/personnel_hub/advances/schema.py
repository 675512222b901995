from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.validators import require_length, require_positive
from ..core.constants import MAX_REASON_LENGTH
from ..core.exceptions import ValidationError
from .model import AdvancePatch


def parse_advance(data: Mapping[str, Any], *, partial: bool = False) -> AdvancePatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: Dict[str, Any] = {}
    if data.get("amount") is not None or not partial:
        values["amount"] = require_positive(data.get("amount"), "Amount")
    if data.get("reason") is not None or not partial:
        values["reason"] = require_length(data.get("reason"), "Reason", 1, MAX_REASON_LENGTH)
    return AdvancePatch(**values)
