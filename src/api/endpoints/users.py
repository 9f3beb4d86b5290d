"""
Admin credential provisioning endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from src.api.dependencies import get_config, get_identity_provider
from src.integrations.contracts.interfaces import IdentityProvider
from src.integrations.errors import ConfigurationError, IntegrationError, UpstreamRejected
from src.intake.passwords import DEFAULT_PASSWORD_LENGTH, generate_password
from src.intake.validation import validate_email
from src.utils.config_loader import IntakeConfig

logger = logging.getLogger(__name__)

api = APIRouter()
users_api = api


class CreateUserRequest(BaseModel):
    email: str = ""
    password: Optional[str] = Field(default=None, description="Omit to have a password generated")


class PasswordResetRequest(BaseModel):
    email: str = ""


def _identity_http_error(e: IntegrationError, action: str) -> HTTPException:
    if isinstance(e, ConfigurationError):
        logger.error("Identity provider configuration missing: %s", e.message)
        return HTTPException(status_code=500, detail={"message": "Identity provider is not configured"})
    if isinstance(e, UpstreamRejected) and (e.status_code or 500) < 500:
        return HTTPException(status_code=400, detail={"message": e.message})
    logger.error("Error during %s: %s", action, e.message)
    return HTTPException(status_code=502, detail={"message": f"Failed to {action}"})


@api.post("/users", tags=["Users"], status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
    config: IntakeConfig = Depends(get_config),
):
    errors = {}
    email = validate_email(request.email, errors)
    if errors:
        raise HTTPException(status_code=400, detail={"message": errors["email"], "field_errors": errors})

    min_length = config.identity.min_password_length
    generated = request.password is None or request.password == ""
    password = generate_password(max(DEFAULT_PASSWORD_LENGTH, min_length)) if generated else request.password
    if len(password) < min_length:
        raise HTTPException(
            status_code=400,
            detail={"message": f"Password must be at least {min_length} characters"},
        )

    try:
        user = await identity.create_user(email, password)
    except IntegrationError as e:
        raise _identity_http_error(e, "create user")

    body = {"uid": user.uid, "email": user.email}
    if generated:
        body["generated_password"] = password
    return body


@api.get("/users/password", tags=["Users"])
async def suggest_password():
    return {"password": generate_password()}


@api.post("/users/password-reset", tags=["Users"])
async def send_password_reset(
    request: PasswordResetRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    errors = {}
    email = validate_email(request.email, errors)
    if errors:
        raise HTTPException(status_code=400, detail={"message": errors["email"], "field_errors": errors})

    try:
        await identity.send_password_reset(email)
    except IntegrationError as e:
        raise _identity_http_error(e, "send password reset")
    return {"sent": True, "email": email}
