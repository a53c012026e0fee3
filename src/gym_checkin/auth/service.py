from __future__ import annotations

import hmac
from dataclasses import dataclass

from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class SessionAdmin:
    """What we store into Flask session after login."""

    email: str


class AdminAuthService:
    """Use case: the front-desk admin logs in with the configured credentials."""

    def __init__(self, *, admin_email: str, admin_password: str):
        self._admin_email = (admin_email or "").strip().lower()
        self._admin_password = admin_password or ""

    def authenticate(self, email: str, password: str) -> SessionAdmin:
        if not self._admin_email or not self._admin_password:
            raise AuthenticationError("Admin login is not configured")

        email_ok = hmac.compare_digest((email or "").strip().lower().encode(), self._admin_email.encode())
        password_ok = hmac.compare_digest((password or "").encode(), self._admin_password.encode())
        if not (email_ok and password_ok):
            raise AuthenticationError("Wrong email or password")

        return SessionAdmin(email=self._admin_email)
