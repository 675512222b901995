from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Login identity.

    Note: ``owner_account_id`` is the namespace the account works in. Owners and
    managers point at themselves, employee accounts at the owner that created
    their employee record.
    """

    id: str
    name: str
    email: str
    password_hash: str
    role: Role
    business_id: Optional[str]
    employee_id: Optional[str] = None
    owner_account_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def sanitize(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "business_id": self.business_id,
            "employee_id": self.employee_id,
            "owner_account_id": self.owner_account_id,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "last_login_at": self.last_login_at,
            "deleted_at": self.deleted_at,
        }
