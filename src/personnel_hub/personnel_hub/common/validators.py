from __future__ import annotations

import math
import re
from datetime import date
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_length(value: Any, field_name: str, min_len: int, max_len: int) -> str:
    text = require_non_empty(value, field_name)
    if not min_len <= len(text) <= max_len:
        raise ValidationError(f"{field_name} must be between {min_len} and {max_len} characters")
    return text


def optional_text(value: Any, field_name: str, *, max_len: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    text = value.strip()
    if max_len is not None and len(text) > max_len:
        raise ValidationError(f"{field_name} must not exceed {max_len} characters")
    return text or None


def require_email(value: Any, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} must be a valid email address")
    return email


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def require_positive(value: Any, field_name: str) -> float:
    number = require_number(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return number


def require_non_negative(value: Any, field_name: str) -> float:
    number = require_number(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_range(value: Any, field_name: str, low: float, high: float) -> float:
    number = require_number(value, field_name)
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    return number


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid date (YYYY-MM-DD)")


def require_datetime(value: Any, field_name: str):
    try:
        return parse_iso_datetime(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid ISO 8601 date")


def require_hhmm(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not _HHMM_RE.match(value):
        raise ValidationError(f"{field_name} must be in HH:MM format")
    return value


def require_pattern(value: Any, field_name: str, pattern: str, message: str) -> str:
    text = value if isinstance(value, str) else ("" if value is None else str(value))
    if not re.fullmatch(pattern, text):
        raise ValidationError(f"{field_name} {message}")
    return text


def parse_approval_note(data: Any, *, max_len: int = 500) -> Optional[str]:
    """``approval_note`` from an approve/reject body; the body itself is optional."""
    if not isinstance(data, dict):
        return None
    return optional_text(data.get("approval_note"), "Approval note", max_len=max_len)
