from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ScanAction


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one visit of a member on a calendar day.

    Open while checkout_minutes is None.
    """

    log_id: int
    member_id: str
    log_date: date
    check_in_minutes: int
    checkout_minutes: Optional[int] = None
    worked_minutes: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.checkout_minutes is None

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "user_id": self.member_id,
            "date": self.log_date.strftime("%Y-%m-%d"),
            "checkInTime": self.check_in_minutes,
            "checkoutTime": self.checkout_minutes,
            "workedMinutes": self.worked_minutes,
        }


@dataclass(frozen=True)
class LedgerResult:
    action: ScanAction
    log: AttendanceLog
