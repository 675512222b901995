from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TimesheetStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Timesheet
from .repository import TimesheetRepository

_COLUMNS = """
    id, owner_id, employee_id, work_date, status, check_in_time, check_out_time,
    total_hours_worked, overtime_hours, notes, created_at, updated_at
"""


def _row_to_timesheet(r: dict) -> Timesheet:
    return Timesheet(
        id=r["id"],
        owner_id=r["owner_id"],
        employee_id=r["employee_id"],
        date=r["work_date"],
        status=TimesheetStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        total_hours_worked=float(r.get("total_hours_worked") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        notes=r.get("notes"),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, timesheet: Timesheet) -> Timesheet:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO timesheets({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    timesheet.id,
                    timesheet.owner_id,
                    timesheet.employee_id,
                    timesheet.date,
                    timesheet.status.value,
                    timesheet.check_in_time,
                    timesheet.check_out_time,
                    timesheet.total_hours_worked,
                    timesheet.overtime_hours,
                    timesheet.notes,
                    to_db_datetime(timesheet.created_at),
                    to_db_datetime(timesheet.updated_at),
                ),
            )
        return timesheet

    def get(self, *, owner_id: str, employee_id: str, timesheet_id: str) -> Optional[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM timesheets WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, timesheet_id),
            )
            r = fetchone(cur)
            return _row_to_timesheet(r) if r else None

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM timesheets
                WHERE owner_id=%s AND employee_id=%s
                ORDER BY work_date DESC, created_at DESC
                """,
                (owner_id, employee_id),
            )
            return [_row_to_timesheet(r) for r in fetchall(cur)]

    def update(self, timesheet: Timesheet) -> Timesheet:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timesheets
                SET work_date=%s, status=%s, check_in_time=%s, check_out_time=%s,
                    total_hours_worked=%s, overtime_hours=%s, notes=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s
                """,
                (
                    timesheet.date,
                    timesheet.status.value,
                    timesheet.check_in_time,
                    timesheet.check_out_time,
                    timesheet.total_hours_worked,
                    timesheet.overtime_hours,
                    timesheet.notes,
                    to_db_datetime(timesheet.updated_at),
                    timesheet.owner_id,
                    timesheet.employee_id,
                    timesheet.id,
                ),
            )
        return timesheet

    def delete(self, *, owner_id: str, employee_id: str, timesheet_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM timesheets WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, timesheet_id),
            )
            return cur.rowcount > 0
