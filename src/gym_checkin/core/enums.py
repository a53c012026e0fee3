from __future__ import annotations

from enum import Enum


class MembershipStatus(str, Enum):
    """Membership status as stored in the database."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


class MembershipState(str, Enum):
    """Outcome of checking a member's latest membership."""

    ABSENT = "absent"
    EXPIRED = "expired"
    ACTIVE = "active"


class ScanAction(str, Enum):
    CHECKIN = "checkin"
    CHECKOUT = "checkout"


class ScanStatus(str, Enum):
    """Status field returned to the kiosk for every scan."""

    INVALID = "invalid"
    NO_MEMBERSHIP = "no_membership"
    EXPIRED = "expired"
    ACTIVE = "active"


class Badge(str, Enum):
    OK = "ok"
    BAD = "bad"


class ScanState(str, Enum):
    """Lifecycle of the kiosk camera session."""

    IDLE = "idle"
    CAMERA_STARTING = "camera_starting"
    CAMERA_ACTIVE = "camera_active"
    PROCESSING = "processing"
    STOPPED = "stopped"
