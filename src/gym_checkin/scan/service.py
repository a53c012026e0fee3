from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..attendance.ledger import AttendanceLedger
from ..common.datetime_utils import format_local, now_utc
from ..common.validators import is_member_id
from ..core.enums import MembershipState, ScanAction, ScanStatus
from ..core.exceptions import UpstreamError, ValidationError
from ..members.photo_store import PhotoStore
from ..memberships.validator import MembershipValidator
from .model import ScanOutcome

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """One kiosk scan: validate the code, check the membership, toggle attendance.

    Short-circuits on the first non-active case, so only the active path
    writes to the ledger. Store failures propagate as UpstreamError.
    """

    def __init__(
        self,
        validator: MembershipValidator,
        ledger: AttendanceLedger,
        photos: PhotoStore,
        *,
        tz: ZoneInfo,
    ):
        self._validator = validator
        self._ledger = ledger
        self._photos = photos
        self._tz = tz

    def handle_scan(self, raw_payload, *, now: datetime | None = None) -> ScanOutcome:
        now = now or now_utc()
        member_id = str(raw_payload if raw_payload is not None else "").strip()

        if not is_member_id(member_id):
            return ScanOutcome(status=ScanStatus.INVALID, message="QR must be a 6-digit code.")

        resolution = self._validator.resolve(member_id, now=now)
        if resolution.state == MembershipState.ABSENT:
            return ScanOutcome(status=ScanStatus.NO_MEMBERSHIP, message=f"No membership for {member_id}.")
        if resolution.state == MembershipState.EXPIRED:
            membership = resolution.membership
            return ScanOutcome(
                status=ScanStatus.EXPIRED,
                message=f"Membership expired on {format_local(membership.end_at, self._tz)}.",
                membership=membership,
            )

        photo_url = self._photo_reference(member_id)
        result = self._ledger.record_scan(member_id, now=now)

        if result.action == ScanAction.CHECKIN:
            message = f"Check-in recorded for {member_id}."
        else:
            message = f"Checked out. Worked {result.log.worked_minutes} min."

        return ScanOutcome(
            status=ScanStatus.ACTIVE,
            action=result.action,
            message=message,
            membership=resolution.membership,
            photo_url=photo_url,
            log=result.log,
        )

    def _photo_reference(self, member_id: str) -> Optional[str]:
        try:
            return self._photos.reference(member_id)
        except (UpstreamError, ValidationError, OSError) as e:
            logger.warning("Photo lookup failed for %s: %s", member_id, e)
            return None
