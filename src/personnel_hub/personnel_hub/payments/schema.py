from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.validators import optional_text, require_choice, require_datetime, require_non_empty, require_positive
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import Currency, PaymentMethod
from ..core.exceptions import ValidationError
from .model import PaymentPatch


def parse_payment(data: Mapping[str, Any], *, partial: bool = False) -> PaymentPatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: Dict[str, Any] = {}
    if data.get("amount") is not None or not partial:
        values["amount"] = require_positive(data.get("amount"), "Amount")
    if data.get("payroll_id") is not None:
        values["payroll_id"] = require_non_empty(data["payroll_id"], "Payroll ID")
    if data.get("currency") is not None:
        values["currency"] = require_choice(data["currency"], Currency, "Currency")
    if data.get("payment_date") is not None:
        values["payment_date"] = require_datetime(data["payment_date"], "Payment date")
    if data.get("payment_method") is not None:
        values["payment_method"] = require_choice(data["payment_method"], PaymentMethod, "Payment method")
    if data.get("description") is not None:
        values["description"] = optional_text(data["description"], "Description", max_len=MAX_REASON_LENGTH)
    return PaymentPatch(**values)
