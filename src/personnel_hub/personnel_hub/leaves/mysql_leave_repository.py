from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Leave
from .repository import LeaveRepository

_COLUMNS = """
    id, owner_id, employee_id, type, start_date, end_date, reason, status,
    approved_by, approved_at, approval_note, created_at, updated_at
"""


def _row_to_leave(r: dict) -> Leave:
    return Leave(
        id=r["id"],
        owner_id=r["owner_id"],
        employee_id=r["employee_id"],
        type=LeaveType(r["type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=RequestStatus(r["status"]),
        approved_by=r.get("approved_by"),
        approved_at=from_db_datetime(r.get("approved_at")),
        approval_note=r.get("approval_note"),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, leave: Leave) -> Leave:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO leaves({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    leave.id,
                    leave.owner_id,
                    leave.employee_id,
                    leave.type.value,
                    leave.start_date,
                    leave.end_date,
                    leave.reason,
                    leave.status.value,
                    leave.approved_by,
                    to_db_datetime(leave.approved_at),
                    leave.approval_note,
                    to_db_datetime(leave.created_at),
                    to_db_datetime(leave.updated_at),
                ),
            )
        return leave

    def get(self, *, owner_id: str, employee_id: str, leave_id: str) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, leave_id),
            )
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM leaves
                WHERE owner_id=%s AND employee_id=%s
                ORDER BY created_at DESC
                """,
                (owner_id, employee_id),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def update(self, leave: Leave) -> Leave:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET type=%s, start_date=%s, end_date=%s, reason=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s
                """,
                (
                    leave.type.value,
                    leave.start_date,
                    leave.end_date,
                    leave.reason,
                    to_db_datetime(leave.updated_at),
                    leave.owner_id,
                    leave.employee_id,
                    leave.id,
                ),
            )
        return leave

    def decide(
        self,
        *,
        owner_id: str,
        employee_id: str,
        leave_id: str,
        status: RequestStatus,
        approved_by: str,
        approved_at: datetime,
        approval_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s, approved_at=%s, approval_note=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s AND status=%s
                """,
                (
                    status.value,
                    approved_by,
                    to_db_datetime(approved_at),
                    approval_note,
                    to_db_datetime(approved_at),
                    owner_id,
                    employee_id,
                    leave_id,
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, owner_id: str, employee_id: str, leave_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leaves WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, leave_id),
            )
            return cur.rowcount > 0
