from __future__ import annotations

import uuid
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Identity, IdentityPage
from .repository import IdentityRepository


def _row_to_identity(r: dict) -> Identity:
    return Identity(
        identity_id=str(r["identity_id"]),
        email=str(r["email"]),
        name=str(r["name"]),
        password_hash=str(r["password_hash"]),
        created_at=r.get("created_at"),
    )


class MySQLIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_identity(self, *, email: str, password_hash: str, name: str) -> Identity:
        identity_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO identities(identity_id, email, name, password_hash)
                VALUES(%s,%s,%s,%s)
                """,
                (identity_id, email, name, password_hash),
            )
            cur.execute(
                "SELECT identity_id, email, name, password_hash, created_at FROM identities WHERE identity_id=%s",
                (identity_id,),
            )
            return _row_to_identity(fetchone(cur))

    def list_identities(self, *, cursor: Optional[str], limit: int) -> IdentityPage:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM identities")
            total = int(fetchone(cur)["total"])

            if cursor:
                cur.execute(
                    """
                    SELECT identity_id, email, name, password_hash, created_at
                    FROM identities
                    WHERE identity_id > %s
                    ORDER BY identity_id
                    LIMIT %s
                    """,
                    (cursor, int(limit)),
                )
            else:
                cur.execute(
                    """
                    SELECT identity_id, email, name, password_hash, created_at
                    FROM identities
                    ORDER BY identity_id
                    LIMIT %s
                    """,
                    (int(limit),),
                )
            return IdentityPage(items=tuple(_row_to_identity(r) for r in fetchall(cur)), total=total)
