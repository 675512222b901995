from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import AdvanceRequest
from .repository import AdvanceRepository

_COLUMNS = """
    id, owner_id, employee_id, amount, reason, status, request_date,
    response_date, approved_by, approval_note, created_at, updated_at
"""


def _row_to_advance(r: dict) -> AdvanceRequest:
    return AdvanceRequest(
        id=r["id"],
        owner_id=r["owner_id"],
        employee_id=r["employee_id"],
        amount=float(r["amount"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        request_date=from_db_datetime(r.get("request_date")),
        response_date=from_db_datetime(r.get("response_date")),
        approved_by=r.get("approved_by"),
        approval_note=r.get("approval_note"),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, advance: AdvanceRequest) -> AdvanceRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO advances({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    advance.id,
                    advance.owner_id,
                    advance.employee_id,
                    advance.amount,
                    advance.reason,
                    advance.status.value,
                    to_db_datetime(advance.request_date),
                    to_db_datetime(advance.response_date),
                    advance.approved_by,
                    advance.approval_note,
                    to_db_datetime(advance.created_at),
                    to_db_datetime(advance.updated_at),
                ),
            )
        return advance

    def get(self, *, owner_id: str, employee_id: str, advance_id: str) -> Optional[AdvanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM advances WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, advance_id),
            )
            r = fetchone(cur)
            return _row_to_advance(r) if r else None

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[AdvanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM advances
                WHERE owner_id=%s AND employee_id=%s
                ORDER BY created_at DESC
                """,
                (owner_id, employee_id),
            )
            return [_row_to_advance(r) for r in fetchall(cur)]

    def update(self, advance: AdvanceRequest) -> AdvanceRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE advances
                SET amount=%s, reason=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s
                """,
                (
                    advance.amount,
                    advance.reason,
                    to_db_datetime(advance.updated_at),
                    advance.owner_id,
                    advance.employee_id,
                    advance.id,
                ),
            )
        return advance

    def decide(
        self,
        *,
        owner_id: str,
        employee_id: str,
        advance_id: str,
        status: RequestStatus,
        approved_by: str,
        response_date: datetime,
        approval_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE advances
                SET status=%s, approved_by=%s, response_date=%s, approval_note=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s AND status=%s
                """,
                (
                    status.value,
                    approved_by,
                    to_db_datetime(response_date),
                    approval_note,
                    to_db_datetime(response_date),
                    owner_id,
                    employee_id,
                    advance_id,
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, owner_id: str, employee_id: str, advance_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM advances WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, advance_id),
            )
            return cur.rowcount > 0
