from __future__ import annotations

from typing import Optional, Protocol

from .model import Identity, IdentityPage


class IdentityRepository(Protocol):
    def create_identity(self, *, email: str, password_hash: str, name: str) -> Identity:
        """Raises ConflictError when the email is taken."""

        raise NotImplementedError

    def list_identities(self, *, cursor: Optional[str], limit: int) -> IdentityPage:
        """One page ordered by identity_id, starting after `cursor`."""

        raise NotImplementedError
