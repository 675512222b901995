from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import today
from .validators import require_choice, require_date

E = TypeVar("E", bound=Enum)

MIN_YEAR = 2000
MAX_YEAR = 3000


def year_arg(args: Mapping[str, Any], *, required: bool = False, default_current: bool = True) -> Optional[int]:
    raw = args.get("year")
    if raw in (None, ""):
        if required:
            raise ValidationError("year is required")
        return today().year if default_current else None
    try:
        year = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Year must be valid")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError("Year must be valid")
    return year


def month_arg(args: Mapping[str, Any]) -> Optional[int]:
    raw = args.get("month")
    if raw in (None, ""):
        return None
    try:
        month = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    return month


def enum_arg(args: Mapping[str, Any], name: str, enum_cls: Type[E]) -> Optional[E]:
    raw = args.get(name)
    if raw in (None, ""):
        return None
    return require_choice(raw, enum_cls, name)


def date_arg(args: Mapping[str, Any], name: str):
    raw = args.get(name)
    if raw in (None, ""):
        return None
    return require_date(raw, name)
