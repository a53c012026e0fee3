from __future__ import annotations

import io
import logging
import re
from typing import Optional

import qrcode
from PIL import Image, UnidentifiedImageError
from werkzeug.security import generate_password_hash

from ..common.validators import pad_member_number, require_member_id, require_non_empty
from ..core.constants import DEFAULT_EMAIL_DOMAIN, IDENTITY_PAGE_SIZE, MAX_MEMBER_NUMBER
from ..core.exceptions import ValidationError
from .model import CreatedMember
from .photo_store import PhotoStore
from .repository import IdentityRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use case: admin registers a member (identity + photo) and prints badges."""

    def __init__(
        self,
        identities: IdentityRepository,
        photos: PhotoStore,
        *,
        email_domain: str = DEFAULT_EMAIL_DOMAIN,
        page_size: int = IDENTITY_PAGE_SIZE,
    ):
        self._identities = identities
        self._photos = photos
        self._email_domain = email_domain.lower()
        self._page_size = int(page_size)
        self._email_re = re.compile(rf"^(\d{{6}})@{re.escape(self._email_domain)}$", re.IGNORECASE)

    def email_for(self, member_id: str) -> str:
        return f"{member_id}@{self._email_domain}"

    def max_member_number(self) -> int:
        """Largest NNNNNN used in identity emails, scanning every page."""
        highest = 0
        cursor: Optional[str] = None
        while True:
            page = self._identities.list_identities(cursor=cursor, limit=self._page_size)
            for identity in page.items:
                m = self._email_re.match(identity.email or "")
                if m:
                    highest = max(highest, int(m.group(1)))
            if not page.total or len(page.items) < self._page_size:
                break
            cursor = page.items[-1].identity_id
        return highest

    def create_member(self, *, password: str, name: Optional[str], photo: Optional[bytes]) -> CreatedMember:
        password = require_non_empty(password, "password")
        if not photo:
            raise ValidationError("photo is required")
        jpeg = self._normalize_photo(photo)

        number = self.max_member_number() + 1
        if number > MAX_MEMBER_NUMBER:
            raise ValidationError("No member numbers left")
        member_id = pad_member_number(number)
        email = self.email_for(member_id)

        identity = self._identities.create_identity(
            email=email,
            password_hash=generate_password_hash(password),
            name=(name or "").strip() or email,
        )

        # A previous member with this number may have left a photo behind.
        if self._photos.delete(member_id):
            logger.info("Replaced stale photo for %s", member_id)
        self._photos.upload(member_id, jpeg)

        logger.info("Member %s created (identity %s)", member_id, identity.identity_id)
        return CreatedMember(identity=identity, number=number, member_id=member_id)

    def badge_png(self, member_id: str) -> bytes:
        """QR badge image encoding the member id."""
        member_id = require_member_id(member_id, "member_id")

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=2,
        )
        qr.add_data(member_id)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    @staticmethod
    def _normalize_photo(data: bytes) -> bytes:
        try:
            with Image.open(io.BytesIO(data)) as img:
                buf = io.BytesIO()
                img.convert("RGB").save(buf, format="JPEG", quality=90)
                return buf.getvalue()
        except (UnidentifiedImageError, OSError):
            raise ValidationError("photo must be an image")
