from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..common.datetime_utils import add_months, now_utc
from ..common.validators import require_member_id, require_positive_int
from ..core.constants import DAILY_PASS_HOURS, DEFAULT_LOCATION, DEFAULT_MONTHS, MAX_MONTHS
from ..core.enums import MembershipStatus
from .model import Membership
from .repository import MembershipRepository

logger = logging.getLogger(__name__)


class MembershipService:
    """Use case: admin creates monthly memberships and daily passes."""

    def __init__(self, memberships: MembershipRepository, *, location: str = DEFAULT_LOCATION):
        self._memberships = memberships
        self._location = location

    def create_monthly(self, user_id, months=None, *, now: datetime | None = None) -> Membership:
        member_id = require_member_id(user_id)
        months = require_positive_int(months, "months", default=DEFAULT_MONTHS, maximum=MAX_MONTHS)

        start = now or now_utc()
        end = add_months(start, months)
        membership = self._create(member_id, start, end)
        logger.info("Monthly membership created for %s (%d month(s), ends %s)", member_id, months, end.isoformat())
        return membership

    def create_daily_pass(self, user_id, *, now: datetime | None = None) -> Membership:
        member_id = require_member_id(user_id)

        start = now or now_utc()
        end = start + timedelta(hours=DAILY_PASS_HOURS)
        membership = self._create(member_id, start, end)
        logger.info("Daily pass created for %s (ends %s)", member_id, end.isoformat())
        return membership

    def _create(self, member_id: str, start: datetime, end: datetime) -> Membership:
        return self._memberships.create(
            member_id=member_id,
            status=MembershipStatus.ACTIVE.value,
            start_at=start,
            end_at=end,
            location=self._location,
        )
