from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Account


class AccountRepository(Protocol):
    def create(self, account: Account) -> Account:
        raise NotImplementedError

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_active_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def list_by_business(self, business_id: str, *, is_active: bool = True) -> Sequence[Account]:
        raise NotImplementedError

    def update(self, account: Account) -> Account:
        raise NotImplementedError

    def touch_last_login(self, account_id: str, *, at: datetime) -> None:
        raise NotImplementedError
