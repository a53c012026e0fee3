from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from gym_checkin.attendance.ledger import AttendanceLedger
from gym_checkin.core.enums import ScanAction, ScanStatus
from gym_checkin.core.exceptions import UpstreamError
from gym_checkin.memberships.validator import MembershipValidator
from gym_checkin.scan.service import ScanOrchestrator
from tests.fakes import FailingMemberships, InMemoryAttendance, InMemoryMemberships, InMemoryPhotos

BEIRUT = ZoneInfo("Asia/Beirut")
AT_0900 = datetime(2026, 1, 15, 7, 0, tzinfo=timezone.utc)
AT_1000 = datetime(2026, 1, 15, 8, 0, tzinfo=timezone.utc)


def build(memberships=None, photos=None):
    memberships = memberships if memberships is not None else InMemoryMemberships()
    attendance = InMemoryAttendance()
    photos = photos if photos is not None else InMemoryPhotos()
    orchestrator = ScanOrchestrator(
        MembershipValidator(memberships),
        AttendanceLedger(attendance, tz=BEIRUT),
        photos,
        tz=BEIRUT,
    )
    return orchestrator, memberships, attendance, photos


def active_member(memberships, member_id="000123"):
    return memberships.add(member_id, start_at=AT_0900 - timedelta(days=2), end_at=AT_0900 + timedelta(days=28))


@pytest.mark.parametrize("payload", ["12345", "1234567", "abcdef", "", None, "12 456", "١٢٣٤٥٦", {"id": 1}])
def test_invalid_payload_never_touches_the_store(payload):
    orchestrator, memberships, attendance, _ = build()

    outcome = orchestrator.handle_scan(payload, now=AT_0900)

    assert outcome.status == ScanStatus.INVALID
    assert outcome.message == "QR must be a 6-digit code."
    assert outcome.ok is False
    assert memberships.lookups == 0
    assert attendance.writes == 0


def test_payload_whitespace_is_stripped():
    orchestrator, memberships, _, _ = build()
    active_member(memberships)

    outcome = orchestrator.handle_scan(" 000123\n", now=AT_0900)

    assert outcome.status == ScanStatus.ACTIVE


def test_member_without_membership():
    orchestrator, _, attendance, _ = build()

    outcome = orchestrator.handle_scan("000123", now=AT_0900)

    assert outcome.status == ScanStatus.NO_MEMBERSHIP
    assert outcome.message == "No membership for 000123."
    assert outcome.ok is True
    assert attendance.writes == 0


@pytest.mark.parametrize("status", ["active", "cancelled", "paused"])
def test_expired_membership_is_reported_with_membership(status):
    orchestrator, memberships, attendance, _ = build()
    m = memberships.add(
        "000123",
        start_at=datetime(2025, 12, 10, 10, 0, tzinfo=timezone.utc),
        end_at=datetime(2026, 1, 10, 10, 0, tzinfo=timezone.utc),
        status=status,
    )

    outcome = orchestrator.handle_scan("000123", now=AT_0900)

    assert outcome.status == ScanStatus.EXPIRED
    assert outcome.membership == m
    assert outcome.message == "Membership expired on 2026-01-10 12:00."
    assert attendance.writes == 0


def test_active_member_checks_in_with_photo():
    photos = InMemoryPhotos(photos={"000123": b"jpeg"})
    orchestrator, memberships, attendance, _ = build(photos=photos)
    m = active_member(memberships)

    outcome = orchestrator.handle_scan("000123", now=AT_0900)

    assert outcome.status == ScanStatus.ACTIVE
    assert outcome.action == ScanAction.CHECKIN
    assert outcome.message == "Check-in recorded for 000123."
    assert outcome.photo_url == "/photos/000123"
    assert outcome.membership == m
    assert outcome.log.checkout_minutes is None
    assert attendance.writes == 1


def test_active_member_checks_out_with_worked_minutes():
    orchestrator, memberships, attendance, _ = build()
    active_member(memberships)
    orchestrator.handle_scan("000123", now=AT_0900)

    outcome = orchestrator.handle_scan("000123", now=AT_1000)

    assert outcome.action == ScanAction.CHECKOUT
    assert outcome.message == "Checked out. Worked 60 min."
    assert outcome.log.worked_minutes == 60
    assert outcome.photo_url is None
    assert attendance.writes == 2


def test_photo_failure_does_not_block_check_in():
    orchestrator, memberships, attendance, _ = build(photos=InMemoryPhotos(fail=True))
    active_member(memberships)

    outcome = orchestrator.handle_scan("000123", now=AT_0900)

    assert outcome.status == ScanStatus.ACTIVE
    assert outcome.photo_url is None
    assert attendance.writes == 1


def test_store_failure_propagates():
    orchestrator, _, attendance, _ = build(memberships=FailingMemberships())

    with pytest.raises(UpstreamError):
        orchestrator.handle_scan("000123", now=AT_0900)
    assert attendance.writes == 0


def test_outcome_serialization_for_active_scan():
    orchestrator, memberships, _, _ = build()
    active_member(memberships)

    body = orchestrator.handle_scan("000123", now=AT_0900).to_dict()

    assert body["ok"] is True
    assert body["status"] == "active"
    assert body["action"] == "checkin"
    assert body["photoUrl"] is None
    assert body["log"]["checkInTime"] == 540
    assert body["membership"]["user_id"] == "000123"


def test_outcome_serialization_for_invalid_scan():
    orchestrator, _, _, _ = build()

    body = orchestrator.handle_scan("nope", now=AT_0900).to_dict()

    assert body == {"ok": False, "status": "invalid", "message": "QR must be a 6-digit code."}
