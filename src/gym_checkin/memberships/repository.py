from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol
from .model import Membership


class MembershipRepository(Protocol):
    def find_latest_for_member(self, member_id: str) -> Optional[Membership]:
        """Most recent membership by end_at, or None."""

        raise NotImplementedError

    def create(
        self,
        *,
        member_id: str,
        status: str,
        start_at: datetime,
        end_at: datetime,
        location: str,
    ) -> Membership:
        raise NotImplementedError
