"""Identity provider contracts used by the admin credential panel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CreatedUser:
    uid: str
    email: str


@dataclass(frozen=True)
class IdentitySession:
    uid: str
    email: str
    id_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
