import json

import httpx
import pytest

from src.integrations.clients.real_http.identity import FirebaseIdentityClient
from src.integrations.errors import ConfigurationError, UpstreamRejected
from src.utils.config_loader import IdentityConfig


def _client(handler, api_key="fb-key"):
    return FirebaseIdentityClient(IdentityConfig(api_key=api_key), transport=httpx.MockTransport(handler))


def _firebase_error(message):
    return httpx.Response(400, json={"error": {"code": 400, "message": message, "errors": []}})


@pytest.mark.asyncio
async def test_create_user_calls_sign_up():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params["key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"localId": "uid-1", "email": "ops@example.com"})

    user = await _client(handler).create_user("ops@example.com", "s3cretpw")

    assert user.uid == "uid-1"
    assert user.email == "ops@example.com"
    assert seen["path"].endswith("/accounts:signUp")
    assert seen["key"] == "fb-key"
    assert seen["body"]["password"] == "s3cretpw"


@pytest.mark.asyncio
async def test_duplicate_email_message():
    with pytest.raises(UpstreamRejected) as exc:
        await _client(lambda request: _firebase_error("EMAIL_EXISTS")).create_user("a@b.co", "password1")

    assert exc.value.message == "A user with this email already exists"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_weak_password_message_uses_configured_minimum():
    handler = lambda request: _firebase_error("WEAK_PASSWORD : Password should be at least 6 characters")

    with pytest.raises(UpstreamRejected) as exc:
        await _client(handler).create_user("a@b.co", "123")

    assert exc.value.message == "Password must be at least 6 characters"


@pytest.mark.asyncio
async def test_sign_in_returns_session():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/accounts:signInWithPassword")
        return httpx.Response(
            200,
            json={"localId": "uid-1", "email": "a@b.co", "idToken": "tok", "refreshToken": "r", "expiresIn": "3600"},
        )

    session = await _client(handler).sign_in("a@b.co", "password1")

    assert session.id_token == "tok"
    assert session.expires_in == 3600


@pytest.mark.asyncio
async def test_password_reset_sends_oob_code_request():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"email": "a@b.co"})

    await _client(handler).send_password_reset("a@b.co")

    assert bodies == [{"requestType": "PASSWORD_RESET", "email": "a@b.co"}]


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        await _client(lambda request: httpx.Response(200, json={}), api_key=None).create_user("a@b.co", "pw1234")
