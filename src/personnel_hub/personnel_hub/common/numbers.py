from __future__ import annotations

import math
from typing import Any


def as_number(value: Any) -> float:
    """Lenient float conversion for aggregates: missing or non-numeric values count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round2(value: float) -> float:
    return round(float(value), 2)
