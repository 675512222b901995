from __future__ import annotations

from ..core.constants import MINUTES_PER_DAY


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def calculate_hours_worked(check_in: str, check_out: str) -> float:
    """Hours between two HH:MM times; a check-out before check-in wraps past midnight."""

    total = (_minutes(check_out) - _minutes(check_in)) % MINUTES_PER_DAY
    return round(total / 60, 2)
