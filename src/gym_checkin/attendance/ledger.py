from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from ..common.datetime_utils import local_day, minutes_since_midnight, now_utc
from ..core.enums import ScanAction
from ..core.exceptions import ConflictError, UpstreamError
from .model import AttendanceLog, LedgerResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def worked_minutes(check_in_minutes: int, checkout_minutes: int) -> int:
    # Cross-midnight visits are not tracked; they floor at zero.
    return max(0, int(checkout_minutes) - int(check_in_minutes))


class AttendanceLedger:
    """Toggle a member between checked-in and checked-out for the current day.

    "Today" and the minute of day are taken in one fixed gym time zone so
    visit lengths do not depend on where the server runs. Each call does at
    most one write.
    """

    def __init__(self, logs: AttendanceRepository, *, tz: ZoneInfo):
        self._logs = logs
        self._tz = tz

    def record_scan(self, member_id: str, *, now: datetime | None = None) -> LedgerResult:
        now = now or now_utc()
        today = local_day(now, self._tz)
        minutes = minutes_since_midnight(now, self._tz)

        open_log = self._logs.find_open_for_day(member_id, today)
        if open_log is None:
            return self._check_in(member_id, today, minutes)
        return self._check_out(open_log, minutes)

    def _check_in(self, member_id: str, today, minutes: int) -> LedgerResult:
        try:
            log = self._logs.create_log(member_id=member_id, log_date=today, check_in_minutes=minutes)
        except ConflictError:
            # A concurrent scan opened the log first; report that one.
            log = self._logs.find_open_for_day(member_id, today)
            if log is None:
                raise UpstreamError(f"Open log for {member_id} vanished after conflict")
            logger.warning("Duplicate check-in for %s absorbed (log %s)", member_id, log.log_id)
            return LedgerResult(action=ScanAction.CHECKIN, log=log)

        logger.info("Check-in %s at minute %d (log %s)", member_id, minutes, log.log_id)
        return LedgerResult(action=ScanAction.CHECKIN, log=log)

    def _check_out(self, open_log: AttendanceLog, minutes: int) -> LedgerResult:
        worked = worked_minutes(open_log.check_in_minutes, minutes)
        closed = self._logs.close_log(log_id=open_log.log_id, checkout_minutes=minutes, worked_minutes=worked)
        if closed is None:
            # Closed by a concurrent scan in between; report the stored state.
            closed = self._logs.get_by_id(open_log.log_id)
            if closed is None:
                raise UpstreamError(f"Log {open_log.log_id} disappeared during checkout")
            logger.warning("Duplicate checkout for %s absorbed (log %s)", open_log.member_id, open_log.log_id)
            return LedgerResult(action=ScanAction.CHECKOUT, log=closed)

        logger.info("Checkout %s at minute %d, worked %d min (log %s)", open_log.member_id, minutes, worked, closed.log_id)
        return LedgerResult(action=ScanAction.CHECKOUT, log=closed)
