from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.validators import (
    optional_text,
    require_choice,
    require_date,
    require_email,
    require_length,
    require_non_negative,
    require_pattern,
    require_range,
)
from ..core.constants import MAX_ADDRESS_LENGTH
from ..core.enums import ContractType, Currency, WorkMode
from ..core.exceptions import ValidationError
from .model import EmployeePatch

PHONE_PATTERN = r"\+?[0-9 ()\-]{7,20}"
NATIONAL_ID_PATTERN = r"\d{11}"
URL_PATTERN = r"https?://\S+"

PROFILE_FIELDS = ("phone_number", "address", "profile_picture_url")


def _present(data: Mapping[str, Any], key: str) -> bool:
    return key in data and data[key] is not None


def parse_salary(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError("salary must be an object")
    out: Dict[str, Any] = {}
    if _present(raw, "gross_amount"):
        out["gross_amount"] = require_non_negative(raw["gross_amount"], "Gross amount")
    if _present(raw, "net_amount"):
        out["net_amount"] = require_non_negative(raw["net_amount"], "Net amount")
    if _present(raw, "currency"):
        out["currency"] = require_choice(raw["currency"], Currency, "Currency")
    if "bank_name" in raw:
        out["bank_name"] = optional_text(raw["bank_name"], "Bank name", max_len=100)
    if "iban" in raw:
        out["iban"] = optional_text(raw["iban"], "IBAN", max_len=34)
    return out


def parse_employee(data: Mapping[str, Any], *, partial: bool = False) -> EmployeePatch:
    """Validate an employee body; ``partial`` relaxes the required name fields."""

    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    values: Dict[str, Any] = {}
    for key, label in (("first_name", "First name"), ("last_name", "Last name")):
        if _present(data, key) or not partial:
            values[key] = require_length(data.get(key), label, 2, 50)

    if _present(data, "email"):
        values["email"] = require_email(data["email"])
    if _present(data, "phone_number"):
        values["phone_number"] = require_pattern(
            data["phone_number"], "Phone number", PHONE_PATTERN, "must be a valid phone number"
        )
    if _present(data, "national_id"):
        values["national_id"] = require_pattern(
            data["national_id"], "National ID", NATIONAL_ID_PATTERN, "must be exactly 11 digits"
        )
    for key, label in (("position", "Position"), ("department", "Department")):
        if _present(data, key):
            values[key] = require_length(data[key], label, 2, 100)
    if _present(data, "contract_type"):
        values["contract_type"] = require_choice(data["contract_type"], ContractType, "Contract type")
    if _present(data, "work_mode"):
        values["work_mode"] = require_choice(data["work_mode"], WorkMode, "Work mode")
    if _present(data, "working_hours_per_day"):
        values["working_hours_per_day"] = require_range(data["working_hours_per_day"], "Working hours per day", 1, 24)
    for key, label in (("start_date", "Start date"), ("date_of_birth", "Date of birth")):
        if _present(data, key):
            values[key] = require_date(data[key], label)
    if _present(data, "salary"):
        values["salary"] = parse_salary(data["salary"])
    if _present(data, "insurance_info"):
        if not isinstance(data["insurance_info"], Mapping):
            raise ValidationError("insurance_info must be an object")
        values["insurance_info"] = dict(data["insurance_info"])
    for key, label, max_len in (
        ("employee_code", "Employee code", 50),
        ("gender", "Gender", 20),
        ("address", "Address", MAX_ADDRESS_LENGTH),
    ):
        if _present(data, key):
            values[key] = optional_text(data[key], label, max_len=max_len)
    if _present(data, "profile_picture_url"):
        values["profile_picture_url"] = require_pattern(
            data["profile_picture_url"], "Profile picture URL", URL_PATTERN, "must be a valid URL"
        )

    return EmployeePatch(**values)


def parse_profile(data: Mapping[str, Any]) -> EmployeePatch:
    """Self-service update: only contact fields, everything else is ignored."""

    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    allowed = {k: data[k] for k in PROFILE_FIELDS if _present(data, k)}
    if not allowed:
        raise ValidationError(
            "No valid fields to update",
            details=[{"field": k, "message": "allowed field"} for k in PROFILE_FIELDS],
        )
    return parse_employee(allowed, partial=True)
