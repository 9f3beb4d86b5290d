"""
Identity provider - MOCK client.

⚠️  Keeps users in a dict. Mirrors the real client's error messages so the
    admin endpoint behaves the same in development.
"""

import logging
import uuid
from typing import Dict, List

from src.integrations.contracts.identity import CreatedUser, IdentitySession
from src.integrations.contracts.interfaces import IdentityProvider
from src.integrations.errors import UpstreamRejected

logger = logging.getLogger(__name__)


class IdentityMockClient(IdentityProvider):
    def __init__(self) -> None:
        self.users: Dict[str, Dict[str, str]] = {}
        self.reset_requests: List[str] = []

    async def create_user(self, email: str, password: str) -> CreatedUser:
        key = email.lower()
        if key in self.users:
            raise UpstreamRejected("A user with this email already exists", system="identity", status_code=400)
        uid = uuid.uuid4().hex[:28]
        self.users[key] = {"uid": uid, "email": email, "password": password}
        logger.info("[MOCK] Provisioned identity user %s", uid)
        return CreatedUser(uid=uid, email=email)

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        user = self.users.get(email.lower())
        if not user or user["password"] != password:
            raise UpstreamRejected("Invalid email or password", system="identity", status_code=400)
        return IdentitySession(uid=user["uid"], email=user["email"], id_token=f"mock-token-{user['uid']}")

    async def send_password_reset(self, email: str) -> None:
        if email.lower() not in self.users:
            raise UpstreamRejected("No user exists with this email", system="identity", status_code=400)
        self.reset_requests.append(email)
