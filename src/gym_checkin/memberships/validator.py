from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import ensure_aware, now_utc
from ..core.enums import MembershipState, MembershipStatus
from .model import MembershipResolution
from .repository import MembershipRepository


class MembershipValidator:
    """Decide whether a member's latest membership lets them in.

    Active means status == active AND end_at has not passed. Anything else
    with a record is expired; no record at all is absent.
    """

    def __init__(self, memberships: MembershipRepository):
        self._memberships = memberships

    def resolve(self, member_id: str, *, now: datetime | None = None) -> MembershipResolution:
        now = ensure_aware(now or now_utc())

        membership = self._memberships.find_latest_for_member(member_id)
        if membership is None:
            return MembershipResolution(state=MembershipState.ABSENT)

        if membership.status == MembershipStatus.ACTIVE.value and ensure_aware(membership.end_at) >= now:
            return MembershipResolution(state=MembershipState.ACTIVE, membership=membership)
        return MembershipResolution(state=MembershipState.EXPIRED, membership=membership)
