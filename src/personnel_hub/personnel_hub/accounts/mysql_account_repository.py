from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Account
from .repository import AccountRepository

_COLUMNS = """
    id, name, email, password_hash, role, business_id, employee_id,
    owner_account_id, is_active, created_at, updated_at, last_login_at, deleted_at
"""


def _row_to_account(r: dict) -> Account:
    return Account(
        id=r["id"],
        name=r["name"],
        email=r["email"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        business_id=r.get("business_id"),
        employee_id=r.get("employee_id"),
        owner_account_id=r.get("owner_account_id"),
        is_active=bool(r.get("is_active", 1)),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
        last_login_at=from_db_datetime(r.get("last_login_at")),
        deleted_at=from_db_datetime(r.get("deleted_at")),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, account: Account) -> Account:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO accounts({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    account.id,
                    account.name,
                    account.email,
                    account.password_hash,
                    account.role.value,
                    account.business_id,
                    account.employee_id,
                    account.owner_account_id,
                    1 if account.is_active else 0,
                    to_db_datetime(account.created_at),
                    to_db_datetime(account.updated_at),
                    to_db_datetime(account.last_login_at),
                    to_db_datetime(account.deleted_at),
                ),
            )
        return account

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE id=%s", (account_id,))
            r = fetchone(cur)
            return _row_to_account(r) if r else None

    def get_active_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM accounts WHERE email=%s AND is_active=1 LIMIT 1",
                (email.lower(),),
            )
            r = fetchone(cur)
            return _row_to_account(r) if r else None

    def list_by_business(self, business_id: str, *, is_active: bool = True) -> Sequence[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM accounts
                WHERE business_id=%s AND is_active=%s
                ORDER BY created_at DESC
                """,
                (business_id, 1 if is_active else 0),
            )
            return [_row_to_account(r) for r in fetchall(cur)]

    def update(self, account: Account) -> Account:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE accounts
                SET name=%s, email=%s, password_hash=%s, role=%s, business_id=%s,
                    employee_id=%s, owner_account_id=%s, is_active=%s,
                    updated_at=%s, last_login_at=%s, deleted_at=%s
                WHERE id=%s
                """,
                (
                    account.name,
                    account.email,
                    account.password_hash,
                    account.role.value,
                    account.business_id,
                    account.employee_id,
                    account.owner_account_id,
                    1 if account.is_active else 0,
                    to_db_datetime(account.updated_at),
                    to_db_datetime(account.last_login_at),
                    to_db_datetime(account.deleted_at),
                    account.id,
                ),
            )
        return account

    def touch_last_login(self, account_id: str, *, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET last_login_at=%s WHERE id=%s",
                (to_db_datetime(at), account_id),
            )
