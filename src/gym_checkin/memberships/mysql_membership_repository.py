from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..common.datetime_utils import ensure_aware
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Membership
from .repository import MembershipRepository


def _to_db(value: datetime) -> datetime:
    # DATETIME columns hold naive UTC.
    return ensure_aware(value).astimezone(timezone.utc).replace(tzinfo=None)


def _row_to_membership(r: dict) -> Membership:
    return Membership(
        membership_id=int(r["membership_id"]),
        member_id=str(r["member_id"]),
        status=str(r["status"]),
        start_at=ensure_aware(r["start_at"]),
        end_at=ensure_aware(r["end_at"]),
        location=str(r["location"]),
    )


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_latest_for_member(self, member_id: str) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT membership_id, member_id, status, start_at, end_at, location
                FROM memberships
                WHERE member_id=%s
                ORDER BY end_at DESC
                LIMIT 1
                """,
                (member_id,),
            )
            r = fetchone(cur)
            return _row_to_membership(r) if r else None

    def create(
        self,
        *,
        member_id: str,
        status: str,
        start_at: datetime,
        end_at: datetime,
        location: str,
    ) -> Membership:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO memberships(member_id, status, start_at, end_at, location)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (member_id, status, _to_db(start_at), _to_db(end_at), location),
            )
            membership_id = int(cur.lastrowid)

        return Membership(
            membership_id=membership_id,
            member_id=member_id,
            status=status,
            start_at=ensure_aware(start_at),
            end_at=ensure_aware(end_at),
            location=location,
        )
