from __future__ import annotations

from typing import Optional, Sequence

from ..common.serialization import to_json
from ..core.enums import ContractType, WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    dump_json,
    fetchall,
    fetchone,
    from_db_datetime,
    load_json,
    to_db_datetime,
)
from .model import Employee, Salary
from .repository import EmployeeRepository

_COLUMNS = """
    id, owner_id, user_id, employee_code, first_name, last_name, profile_picture_url,
    email, phone_number, national_id, date_of_birth, gender, address, position,
    department, contract_type, work_mode, working_hours_per_day, start_date,
    termination_date, salary, insurance_info, is_active, created_at, updated_at
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        id=r["id"],
        owner_id=r["owner_id"],
        user_id=r.get("user_id"),
        employee_code=r.get("employee_code"),
        first_name=r["first_name"],
        last_name=r["last_name"],
        profile_picture_url=r.get("profile_picture_url"),
        email=r.get("email"),
        phone_number=r.get("phone_number"),
        national_id=r.get("national_id"),
        date_of_birth=r.get("date_of_birth"),
        gender=r.get("gender"),
        address=r.get("address"),
        position=r.get("position"),
        department=r.get("department"),
        contract_type=ContractType(r["contract_type"]),
        work_mode=WorkMode(r["work_mode"]),
        working_hours_per_day=float(r.get("working_hours_per_day") or 0),
        start_date=r.get("start_date"),
        termination_date=from_db_datetime(r.get("termination_date")),
        salary=Salary.from_dict(load_json(r.get("salary"))),
        insurance_info=load_json(r.get("insurance_info")),
        is_active=bool(r.get("is_active", 1)),
        created_at=from_db_datetime(r.get("created_at")),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


def _params(e: Employee) -> tuple:
    return (
        e.user_id,
        e.employee_code,
        e.first_name,
        e.last_name,
        e.profile_picture_url,
        e.email,
        e.phone_number,
        e.national_id,
        e.date_of_birth,
        e.gender,
        e.address,
        e.position,
        e.department,
        e.contract_type.value,
        e.work_mode.value,
        e.working_hours_per_day,
        e.start_date,
        to_db_datetime(e.termination_date),
        dump_json(to_json(e.salary)),
        dump_json(e.insurance_info),
        1 if e.is_active else 0,
        to_db_datetime(e.updated_at),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    user_id, employee_code, first_name, last_name, profile_picture_url,
                    email, phone_number, national_id, date_of_birth, gender, address, position,
                    department, contract_type, work_mode, working_hours_per_day, start_date,
                    termination_date, salary, insurance_info, is_active, updated_at,
                    id, owner_id, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(employee) + (employee.id, employee.owner_id, to_db_datetime(employee.created_at)),
            )
        return employee

    def get(self, *, owner_id: str, employee_id: str, include_inactive: bool = False) -> Optional[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees WHERE owner_id=%s AND id=%s"
        if not include_inactive:
            sql += " AND is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (owner_id, employee_id))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list(self, *, owner_id: str, is_active: bool = True) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM employees
                WHERE owner_id=%s AND is_active=%s
                ORDER BY created_at DESC
                """,
                (owner_id, 1 if is_active else 0),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def find_active_by_national_id(self, *, owner_id: str, national_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM employees
                WHERE owner_id=%s AND national_id=%s AND is_active=1
                LIMIT 1
                """,
                (owner_id, national_id),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def update(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET user_id=%s, employee_code=%s, first_name=%s, last_name=%s, profile_picture_url=%s,
                    email=%s, phone_number=%s, national_id=%s, date_of_birth=%s, gender=%s,
                    address=%s, position=%s, department=%s, contract_type=%s, work_mode=%s,
                    working_hours_per_day=%s, start_date=%s, termination_date=%s, salary=%s,
                    insurance_info=%s, is_active=%s, updated_at=%s
                WHERE owner_id=%s AND id=%s
                """,
                _params(employee) + (employee.owner_id, employee.id),
            )
        return employee
