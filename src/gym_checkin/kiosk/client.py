from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

import requests

from ..common.validators import is_member_id
from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import AuthenticationError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class CheckInClient:
    """Talks to the check-in API over one cookie session."""

    def __init__(self, base_url: str, *, timeout: float = DEFAULT_HTTP_TIMEOUT, session: Optional[requests.Session] = None):
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def absolute_url(self, path: str) -> str:
        return urljoin(self._base_url, path)

    def login(self, email: str, password: str) -> None:
        try:
            r = self._session.post(
                self.absolute_url("login"),
                json={"email": email, "password": password},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Could not reach server: {e}") from e

        if r.status_code == 401:
            raise AuthenticationError("Kiosk login rejected")
        if not r.ok:
            raise UpstreamError(f"Login failed with HTTP {r.status_code}")
        logger.info("Kiosk logged in as %s", email)

    def check_in(self, payload: str) -> dict:
        if not is_member_id(payload):
            raise ValidationError("QR must be a 6-digit code.")

        try:
            r = self._session.post(
                self.absolute_url("api/scan/check-in"),
                json={"payload": payload},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(str(e)) from e

        try:
            data = r.json()
        except ValueError as e:
            raise UpstreamError(f"HTTP {r.status_code}") from e
        if not isinstance(data, dict):
            raise UpstreamError(f"HTTP {r.status_code}")
        return data
