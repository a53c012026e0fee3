from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import MembershipState


@dataclass(frozen=True)
class Membership:
    """Domain entity: one membership period (monthly or daily pass)."""

    membership_id: int
    member_id: str
    # Raw stored value; only "active" admits a member.
    status: str
    start_at: datetime
    end_at: datetime
    location: str

    def to_dict(self) -> dict:
        return {
            "id": self.membership_id,
            "user_id": self.member_id,
            "status": self.status,
            "startAt": to_iso(self.start_at),
            "endAt": to_iso(self.end_at),
            "location": self.location,
        }


@dataclass(frozen=True)
class MembershipResolution:
    state: MembershipState
    membership: Optional[Membership] = None

    @property
    def is_active(self) -> bool:
        return self.state == MembershipState.ACTIVE
