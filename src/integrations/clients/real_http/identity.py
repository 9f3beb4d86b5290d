"""
Firebase Identity Toolkit REST client.

Used by the admin panel to provision email/password logins. Firebase reports
failures as {"error": {"code": 400, "message": "EMAIL_EXISTS"}}; those codes
are translated into readable messages here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from src.integrations.clients.real_http.http_utils import request_json
from src.integrations.contracts.identity import CreatedUser, IdentitySession
from src.integrations.contracts.interfaces import IdentityProvider
from src.integrations.errors import ConfigurationError, UpstreamRejected
from src.utils.config_loader import IdentityConfig

logger = logging.getLogger(__name__)

IDENTITY = "identity"

_ERROR_MESSAGES = {
    "EMAIL_EXISTS": "A user with this email already exists",
    "INVALID_EMAIL": "Email is not valid",
    "EMAIL_NOT_FOUND": "No user exists with this email",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "USER_DISABLED": "This account has been disabled",
    "OPERATION_NOT_ALLOWED": "Email/password sign-in is disabled for this project",
}


def _firebase_error_code(payload: Dict[str, Any]) -> str:
    error = payload.get("error") if isinstance(payload, dict) else None
    message = error.get("message", "") if isinstance(error, dict) else ""
    # WEAK_PASSWORD : Password should be at least 6 characters
    return str(message).split(":", 1)[0].strip()


class FirebaseIdentityClient(IdentityProvider):
    def __init__(self, config: IdentityConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self.base_url = config.api_url.rstrip("/")
        self.transport = transport

    def ensure_configured(self) -> None:
        if not self.config.api_key:
            raise ConfigurationError("FIREBASE_API_KEY is not configured.", system=IDENTITY)

    async def _call(self, action: str, body: Dict[str, Any]) -> Dict[str, Any]:
        self.ensure_configured()
        try:
            return await request_json(
                "POST",
                f"{self.base_url}/accounts:{action}?key={self.config.api_key}",
                system=IDENTITY,
                label="Identity provider",
                headers={"Content-Type": "application/json"},
                json=body,
                timeout_seconds=self.config.timeout_seconds,
                transport=self.transport,
            )
        except UpstreamRejected as e:
            code = _firebase_error_code(e.payload)
            if code == "WEAK_PASSWORD":
                message = f"Password must be at least {self.config.min_password_length} characters"
            else:
                message = _ERROR_MESSAGES.get(code, e.message)
            raise UpstreamRejected(message, system=IDENTITY, payload={"code": code}, status_code=e.status_code) from e

    async def create_user(self, email: str, password: str) -> CreatedUser:
        data = await self._call("signUp", {"email": email, "password": password, "returnSecureToken": False})
        logger.info("Provisioned identity user %s", data.get("localId"))
        return CreatedUser(uid=str(data.get("localId", "")), email=str(data.get("email", email)))

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        data = await self._call(
            "signInWithPassword", {"email": email, "password": password, "returnSecureToken": True}
        )
        expires_in = data.get("expiresIn")
        return IdentitySession(
            uid=str(data.get("localId", "")),
            email=str(data.get("email", email)),
            id_token=str(data.get("idToken", "")),
            refresh_token=data.get("refreshToken"),
            expires_in=int(expires_in) if expires_in else None,
        )

    async def send_password_reset(self, email: str) -> None:
        await self._call("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})
