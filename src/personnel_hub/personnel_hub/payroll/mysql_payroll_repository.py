from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import Currency, PayrollStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Payroll
from .repository import PayrollRepository

_COLUMNS = """
    id, owner_id, employee_id, period_month, period_year, gross_salary, total_deductions,
    insurance_employee_share, insurance_employer_share, tax_deduction, other_additions,
    net_salary, currency, status, payroll_date, payment_date, notes, created_at, updated_at
"""

_DUPLICATE_PERIOD = "Payroll for this period already exists"


def _row_to_payroll(r: dict) -> Payroll:
    return Payroll(
        id=r["id"],
        owner_id=r["owner_id"],
        employee_id=r["employee_id"],
        period_month=r["period_month"],
        period_year=r["period_year"],
        gross_salary=float(r["gross_salary"]),
        total_deductions=float(r.get("total_deductions") or 0),
        insurance_employee_share=float(r.get("insurance_employee_share") or 0),
        insurance_employer_share=float(r.get("insurance_employer_share") or 0),
        tax_deduction=float(r.get("tax_deduction") or 0),
        other_additions=float(r.get("other_additions") or 0),
        net_salary=float(r["net_salary"]),
        currency=Currency(r["currency"]),
        status=PayrollStatus(r["status"]),
        payroll_date=from_db_datetime(r.get("payroll_date")),
        payment_date=from_db_datetime(r.get("payment_date")),
        notes=r.get("notes"),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


def _is_duplicate(exc: IntegrityError) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, payroll: Payroll) -> Payroll:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO payrolls({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        payroll.id,
                        payroll.owner_id,
                        payroll.employee_id,
                        payroll.period_month,
                        payroll.period_year,
                        payroll.gross_salary,
                        payroll.total_deductions,
                        payroll.insurance_employee_share,
                        payroll.insurance_employer_share,
                        payroll.tax_deduction,
                        payroll.other_additions,
                        payroll.net_salary,
                        payroll.currency.value,
                        payroll.status.value,
                        to_db_datetime(payroll.payroll_date),
                        to_db_datetime(payroll.payment_date),
                        payroll.notes,
                        to_db_datetime(payroll.created_at),
                        to_db_datetime(payroll.updated_at),
                    ),
                )
        except IntegrityError as exc:
            if _is_duplicate(exc):
                raise ConflictError(_DUPLICATE_PERIOD) from exc
            raise
        return payroll

    def get(self, *, owner_id: str, employee_id: str, payroll_id: str) -> Optional[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payrolls WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, payroll_id),
            )
            r = fetchone(cur)
            return _row_to_payroll(r) if r else None

    def find_by_period(self, *, owner_id: str, employee_id: str, period_month: str, period_year: str) -> Optional[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM payrolls
                WHERE owner_id=%s AND employee_id=%s AND period_month=%s AND period_year=%s
                LIMIT 1
                """,
                (owner_id, employee_id, period_month, period_year),
            )
            r = fetchone(cur)
            return _row_to_payroll(r) if r else None

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM payrolls
                WHERE owner_id=%s AND employee_id=%s
                ORDER BY period_year DESC, period_month DESC
                """,
                (owner_id, employee_id),
            )
            return [_row_to_payroll(r) for r in fetchall(cur)]

    def update(self, payroll: Payroll) -> Payroll:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE payrolls
                    SET period_month=%s, period_year=%s, gross_salary=%s, total_deductions=%s,
                        insurance_employee_share=%s, insurance_employer_share=%s, tax_deduction=%s,
                        other_additions=%s, net_salary=%s, currency=%s, notes=%s, updated_at=%s
                    WHERE owner_id=%s AND employee_id=%s AND id=%s
                    """,
                    (
                        payroll.period_month,
                        payroll.period_year,
                        payroll.gross_salary,
                        payroll.total_deductions,
                        payroll.insurance_employee_share,
                        payroll.insurance_employer_share,
                        payroll.tax_deduction,
                        payroll.other_additions,
                        payroll.net_salary,
                        payroll.currency.value,
                        payroll.notes,
                        to_db_datetime(payroll.updated_at),
                        payroll.owner_id,
                        payroll.employee_id,
                        payroll.id,
                    ),
                )
        except IntegrityError as exc:
            if _is_duplicate(exc):
                raise ConflictError(_DUPLICATE_PERIOD) from exc
            raise
        return payroll

    def mark_paid(self, *, owner_id: str, employee_id: str, payroll_id: str, payment_date: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET status=%s, payment_date=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s AND status=%s
                """,
                (
                    PayrollStatus.PAID.value,
                    to_db_datetime(payment_date),
                    to_db_datetime(payment_date),
                    owner_id,
                    employee_id,
                    payroll_id,
                    PayrollStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, owner_id: str, employee_id: str, payroll_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM payrolls WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, payroll_id),
            )
            return cur.rowcount > 0
