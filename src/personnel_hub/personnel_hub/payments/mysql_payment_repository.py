from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Currency, PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import SalaryPayment
from .repository import SalaryPaymentRepository

_COLUMNS = """
    id, owner_id, employee_id, payroll_id, amount, currency, payment_date,
    payment_method, description, created_at, updated_at
"""


def _row_to_payment(r: dict) -> SalaryPayment:
    return SalaryPayment(
        id=r["id"],
        owner_id=r["owner_id"],
        employee_id=r["employee_id"],
        payroll_id=r.get("payroll_id"),
        amount=float(r["amount"]),
        currency=Currency(r["currency"]),
        payment_date=from_db_datetime(r["payment_date"]),
        payment_method=PaymentMethod(r["payment_method"]),
        description=r.get("description"),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


class MySQLSalaryPaymentRepository(SalaryPaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, payment: SalaryPayment) -> SalaryPayment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO salary_payments({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payment.id,
                    payment.owner_id,
                    payment.employee_id,
                    payment.payroll_id,
                    payment.amount,
                    payment.currency.value,
                    to_db_datetime(payment.payment_date),
                    payment.payment_method.value,
                    payment.description,
                    to_db_datetime(payment.created_at),
                    to_db_datetime(payment.updated_at),
                ),
            )
        return payment

    def get(self, *, owner_id: str, employee_id: str, payment_id: str) -> Optional[SalaryPayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_payments WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, payment_id),
            )
            r = fetchone(cur)
            return _row_to_payment(r) if r else None

    def list(self, *, owner_id: str, employee_id: str) -> Sequence[SalaryPayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM salary_payments
                WHERE owner_id=%s AND employee_id=%s
                ORDER BY payment_date DESC
                """,
                (owner_id, employee_id),
            )
            return [_row_to_payment(r) for r in fetchall(cur)]

    def list_by_payroll(self, *, owner_id: str, employee_id: str, payroll_id: str) -> Sequence[SalaryPayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM salary_payments
                WHERE owner_id=%s AND employee_id=%s AND payroll_id=%s
                ORDER BY payment_date DESC
                """,
                (owner_id, employee_id, payroll_id),
            )
            return [_row_to_payment(r) for r in fetchall(cur)]

    def update(self, payment: SalaryPayment) -> SalaryPayment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_payments
                SET payroll_id=%s, amount=%s, currency=%s, payment_date=%s,
                    payment_method=%s, description=%s, updated_at=%s
                WHERE owner_id=%s AND employee_id=%s AND id=%s
                """,
                (
                    payment.payroll_id,
                    payment.amount,
                    payment.currency.value,
                    to_db_datetime(payment.payment_date),
                    payment.payment_method.value,
                    payment.description,
                    to_db_datetime(payment.updated_at),
                    payment.owner_id,
                    payment.employee_id,
                    payment.id,
                ),
            )
        return payment

    def delete(self, *, owner_id: str, employee_id: str, payment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM salary_payments WHERE owner_id=%s AND employee_id=%s AND id=%s",
                (owner_id, employee_id, payment_id),
            )
            return cur.rowcount > 0
