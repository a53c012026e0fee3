from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AttendanceLog
from .repository import AttendanceRepository

_COLUMNS = "log_id, member_id, log_date, check_in_minutes, checkout_minutes, worked_minutes"


def _row_to_log(r: dict) -> AttendanceLog:
    return AttendanceLog(
        log_id=int(r["log_id"]),
        member_id=str(r["member_id"]),
        log_date=r["log_date"],
        check_in_minutes=int(r["check_in_minutes"]),
        checkout_minutes=None if r.get("checkout_minutes") is None else int(r["checkout_minutes"]),
        worked_minutes=None if r.get("worked_minutes") is None else int(r["worked_minutes"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open_for_day(self, member_id: str, log_date: date) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE member_id=%s AND log_date=%s AND checkout_minutes IS NULL
                ORDER BY log_id DESC
                LIMIT 1
                """,
                (member_id, log_date),
            )
            r = fetchone(cur)
            return _row_to_log(r) if r else None

    def get_by_id(self, log_id: int) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_logs WHERE log_id=%s", (int(log_id),))
            r = fetchone(cur)
            return _row_to_log(r) if r else None

    def create_log(self, *, member_id: str, log_date: date, check_in_minutes: int) -> AttendanceLog:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(member_id, log_date, check_in_minutes)
                VALUES(%s,%s,%s)
                """,
                (member_id, log_date, int(check_in_minutes)),
            )
            log_id = int(cur.lastrowid)

        return AttendanceLog(
            log_id=log_id,
            member_id=member_id,
            log_date=log_date,
            check_in_minutes=int(check_in_minutes),
        )

    def close_log(self, *, log_id: int, checkout_minutes: int, worked_minutes: int) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_logs
                SET checkout_minutes=%s, worked_minutes=%s
                WHERE log_id=%s AND checkout_minutes IS NULL
                """,
                (int(checkout_minutes), int(worked_minutes), int(log_id)),
            )
            if cur.rowcount <= 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_logs WHERE log_id=%s", (int(log_id),))
            r = fetchone(cur)
            return _row_to_log(r) if r else None
