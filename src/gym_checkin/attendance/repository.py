from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import AttendanceLog


class AttendanceRepository(Protocol):
    def find_open_for_day(self, member_id: str, log_date: date) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def get_by_id(self, log_id: int) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def create_log(self, *, member_id: str, log_date: date, check_in_minutes: int) -> AttendanceLog:
        """Insert an open log.

        Raises ConflictError when the member already has an open log that day.
        """

        raise NotImplementedError

    def close_log(self, *, log_id: int, checkout_minutes: int, worked_minutes: int) -> Optional[AttendanceLog]:
        """Close an open log; None when it was already closed."""

        raise NotImplementedError
