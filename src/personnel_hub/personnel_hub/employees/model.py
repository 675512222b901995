from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..common.serialization import to_json
from ..core.constants import DEFAULT_WORKING_HOURS_PER_DAY
from ..core.enums import ContractType, Currency, WorkMode


@dataclass(frozen=True)
class Salary:
    gross_amount: float = 0.0
    net_amount: float = 0.0
    currency: Currency = Currency.TL
    bank_name: Optional[str] = None
    iban: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "Salary":
        raw = raw or {}
        return cls(
            gross_amount=float(raw.get("gross_amount") or 0),
            net_amount=float(raw.get("net_amount") or 0),
            currency=Currency(raw.get("currency") or Currency.TL.value),
            bank_name=raw.get("bank_name"),
            iban=raw.get("iban"),
        )


@dataclass(frozen=True)
class Employee:
    """Personnel record living in an owner's namespace (``owner_id``).

    ``user_id`` stays empty until the employee is given a login account.
    """

    id: str
    owner_id: str
    first_name: str
    last_name: str
    user_id: Optional[str] = None
    employee_code: Optional[str] = None
    profile_picture_url: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    national_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    contract_type: ContractType = ContractType.INDEFINITE
    work_mode: WorkMode = WorkMode.FULL_TIME
    working_hours_per_day: float = DEFAULT_WORKING_HOURS_PER_DAY
    start_date: Optional[date] = None
    termination_date: Optional[datetime] = None
    salary: Salary = field(default_factory=Salary)
    insurance_info: Optional[Dict[str, Any]] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def summary(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "position": self.position,
            "department": self.department,
        }

    def sanitize(self, *, mode: str = "full") -> dict:
        """JSON view; ``mode="employee"`` hides insurance data and salary amounts."""

        data = to_json(self)
        if mode == "employee":
            data.pop("insurance_info", None)
            data["salary"] = {"currency": self.salary.currency.value}
        return data


@dataclass(frozen=True)
class EmployeePatch:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    employee_code: Optional[str] = None
    profile_picture_url: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    national_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    contract_type: Optional[ContractType] = None
    work_mode: Optional[WorkMode] = None
    working_hours_per_day: Optional[float] = None
    start_date: Optional[date] = None
    salary: Optional[Dict[str, Any]] = None  # only the keys supplied; merged onto the current Salary
    insurance_info: Optional[Dict[str, Any]] = None
