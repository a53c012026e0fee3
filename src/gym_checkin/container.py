from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from zoneinfo import ZoneInfo

from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .auth.service import AdminAuthService
from .core.constants import DEFAULT_EMAIL_DOMAIN, DEFAULT_LOCATION, DEFAULT_TIMEZONE
from .database.connection import DatabaseConnection, DBConfig
from .members.mysql_identity_repository import MySQLIdentityRepository
from .members.photo_store import FilesystemPhotoStore, PhotoStore
from .members.repository import IdentityRepository
from .members.service import MemberService
from .memberships.mysql_membership_repository import MySQLMembershipRepository
from .memberships.repository import MembershipRepository
from .memberships.service import MembershipService
from .memberships.validator import MembershipValidator
from .scan.service import ScanOrchestrator


@dataclass(frozen=True)
class Container:
    memberships_repo: MembershipRepository
    attendance_repo: AttendanceRepository
    identities_repo: IdentityRepository
    photo_store: PhotoStore

    auth_service: AdminAuthService
    membership_service: MembershipService
    member_service: MemberService
    scan_orchestrator: ScanOrchestrator


def wire_container(
    *,
    memberships_repo: MembershipRepository,
    attendance_repo: AttendanceRepository,
    identities_repo: IdentityRepository,
    photo_store: PhotoStore,
    admin_email: str,
    admin_password: str,
    tz: ZoneInfo,
    location: str = DEFAULT_LOCATION,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
) -> Container:
    """Compose services over any repository implementations (MySQL or in-memory)."""
    validator = MembershipValidator(memberships_repo)
    ledger = AttendanceLedger(attendance_repo, tz=tz)

    return Container(
        memberships_repo=memberships_repo,
        attendance_repo=attendance_repo,
        identities_repo=identities_repo,
        photo_store=photo_store,
        auth_service=AdminAuthService(admin_email=admin_email, admin_password=admin_password),
        membership_service=MembershipService(memberships_repo, location=location),
        member_service=MemberService(identities_repo, photo_store, email_domain=email_domain),
        scan_orchestrator=ScanOrchestrator(validator, ledger, photo_store, tz=tz),
    )


def build_container(settings: ModuleType) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    return wire_container(
        memberships_repo=MySQLMembershipRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        identities_repo=MySQLIdentityRepository(conn),
        photo_store=FilesystemPhotoStore(getattr(settings, "PHOTO_DIR")),
        admin_email=getattr(settings, "ADMIN_EMAIL", ""),
        admin_password=getattr(settings, "ADMIN_PASSWORD", ""),
        tz=ZoneInfo(getattr(settings, "GYM_TIMEZONE", DEFAULT_TIMEZONE)),
        location=getattr(settings, "GYM_LOCATION", DEFAULT_LOCATION),
        email_domain=getattr(settings, "MEMBER_EMAIL_DOMAIN", DEFAULT_EMAIL_DOMAIN),
    )
