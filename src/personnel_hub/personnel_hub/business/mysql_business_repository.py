from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_db_datetime, to_db_datetime
from .model import Business
from .repository import BusinessRepository


class MySQLBusinessRepository(BusinessRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, business: Business) -> Business:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO businesses(id, name, address, phone, email, logo_url, owner_id, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    business.id,
                    business.name,
                    business.address,
                    business.phone,
                    business.email,
                    business.logo_url,
                    business.owner_id,
                    to_db_datetime(business.created_at),
                    to_db_datetime(business.updated_at),
                ),
            )
        return business

    def get_by_id(self, business_id: str) -> Optional[Business]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, address, phone, email, logo_url, owner_id, created_at, updated_at
                FROM businesses
                WHERE id=%s
                """,
                (business_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Business(
                id=r["id"],
                name=r["name"],
                address=r.get("address"),
                phone=r.get("phone"),
                email=r.get("email"),
                logo_url=r.get("logo_url"),
                owner_id=r.get("owner_id"),
                created_at=from_db_datetime(r.get("created_at")),
                updated_at=from_db_datetime(r.get("updated_at")),
            )

    def update(self, business: Business) -> Business:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE businesses
                SET name=%s, address=%s, phone=%s, email=%s, logo_url=%s, owner_id=%s, updated_at=%s
                WHERE id=%s
                """,
                (
                    business.name,
                    business.address,
                    business.phone,
                    business.email,
                    business.logo_url,
                    business.owner_id,
                    to_db_datetime(business.updated_at),
                    business.id,
                ),
            )
        return business
