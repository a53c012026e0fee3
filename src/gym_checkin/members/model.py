from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class Identity:
    """Login identity of a member (email is NNNNNN@<domain>)."""

    identity_id: str
    email: str
    name: str
    password_hash: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class IdentityPage:
    items: Sequence[Identity] = field(default_factory=tuple)
    total: int = 0


@dataclass(frozen=True)
class CreatedMember:
    identity: Identity
    number: int
    member_id: str

    @property
    def email(self) -> str:
        return self.identity.email
