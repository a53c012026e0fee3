from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceLog
from ..core.enums import ScanAction, ScanStatus
from ..memberships.model import Membership


@dataclass(frozen=True)
class ScanOutcome:
    """Result of one kiosk scan, serialized as the check-in API response."""

    status: ScanStatus
    message: str
    action: Optional[ScanAction] = None
    membership: Optional[Membership] = None
    photo_url: Optional[str] = None
    log: Optional[AttendanceLog] = None

    @property
    def ok(self) -> bool:
        return self.status != ScanStatus.INVALID

    def to_dict(self) -> dict:
        body: dict = {"ok": self.ok, "status": self.status.value, "message": self.message}
        if self.membership is not None:
            body["membership"] = self.membership.to_dict()
        if self.status == ScanStatus.ACTIVE:
            body["action"] = self.action.value if self.action else None
            body["photoUrl"] = self.photo_url
            body["log"] = self.log.to_dict() if self.log else None
        return body
