from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    OWNER = "owner"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class RequestStatus(str, Enum):
    """Approval workflow state shared by leaves and advance requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    DAILY = "daily"
    ANNUAL = "annual"
    EXCUSE = "excuse"


class TimesheetStatus(str, Enum):
    WORKED = "worked"
    ON_LEAVE = "on-leave"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    HOLIDAY = "holiday"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank transfer"
    CASH = "cash"


class Currency(str, Enum):
    TL = "TL"
    USD = "USD"
    EUR = "EUR"


class ContractType(str, Enum):
    INDEFINITE = "indefinite"
    FIXED_TERM = "fixed-term"
    PART_TIME = "part-time"
    ON_CALL = "on-call"
    PROBATION = "probation"


class WorkMode(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    HYBRID = "hybrid"
    REMOTE = "remote"
