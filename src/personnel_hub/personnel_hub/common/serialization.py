from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional

from .datetime_utils import to_iso


def to_json(value: Any, *, exclude: Optional[Iterable[str]] = None) -> Any:
    """Convert dataclasses, enums and dates into JSON-ready primitives."""

    if is_dataclass(value) and not isinstance(value, type):
        skip = set(exclude or ())
        return {f.name: to_json(getattr(value, f.name)) for f in fields(value) if f.name not in skip}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return to_iso(value)
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value
