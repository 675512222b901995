from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.validators import optional_text, require_choice, require_non_negative, require_pattern, require_positive
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import Currency
from ..core.exceptions import ValidationError
from .model import PayrollPatch

MONTH_PATTERN = r"0[1-9]|1[0-2]"
YEAR_PATTERN = r"\d{4}"

_AMOUNT_FIELDS = (
    ("net_salary", "Net salary"),
    ("total_deductions", "Total deductions"),
    ("insurance_employee_share", "Insurance premium employee share"),
    ("insurance_employer_share", "Insurance premium employer share"),
    ("tax_deduction", "Tax deduction"),
    ("other_additions", "Other additions"),
)


def parse_payroll(data: Mapping[str, Any], *, partial: bool = False) -> PayrollPatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: Dict[str, Any] = {}
    if data.get("period_month") is not None or not partial:
        values["period_month"] = require_pattern(
            data.get("period_month"), "Period month", MONTH_PATTERN, "must be in MM format (01-12)"
        )
    if data.get("period_year") is not None or not partial:
        values["period_year"] = require_pattern(
            data.get("period_year"), "Period year", YEAR_PATTERN, "must be in YYYY format"
        )
    if data.get("gross_salary") is not None or not partial:
        values["gross_salary"] = require_positive(data.get("gross_salary"), "Gross salary")
    for key, label in _AMOUNT_FIELDS:
        if data.get(key) is not None:
            values[key] = require_non_negative(data[key], label)
    if data.get("currency") is not None:
        values["currency"] = require_choice(data["currency"], Currency, "Currency")
    if data.get("notes") is not None:
        values["notes"] = optional_text(data["notes"], "Notes", max_len=MAX_REASON_LENGTH)
    return PayrollPatch(**values)
