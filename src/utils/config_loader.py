"""
Configuration loader for the contact intake service.

Non-secret settings (endpoints, board column ids, timeouts) live in
config/intake_config.yml. Credentials are read from the environment so they
never end up in the repository.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "intake_config.yml"


class BoardColumns(BaseModel):
    """Fixed Monday.com column ids on the contacts board."""

    email: str = "email__1"
    employer: str = "text__1"
    role: str = "text_mkygh34f"
    linkedin: str = "text_2__1"
    location: str = "location__1"
    area_of_expertise: str = "dropdown5__1"
    labels: str = "dropdown_mkrv1p9m"
    notes: str = "text_mkygas91"


class MondayConfig(BaseModel):
    api_url: str = "https://api.monday.com/v2"
    api_token: Optional[str] = None
    board_id: Optional[str] = None
    timeout_seconds: float = Field(default=20.0, gt=0)
    columns: BoardColumns = Field(default_factory=BoardColumns)


class ResendConfig(BaseModel):
    api_url: str = "https://api.resend.com"
    api_key: Optional[str] = None
    timeout_seconds: float = Field(default=20.0, gt=0)


class IdentityConfig(BaseModel):
    api_url: str = "https://identitytoolkit.googleapis.com/v1"
    api_key: Optional[str] = None
    timeout_seconds: float = Field(default=15.0, gt=0)
    min_password_length: int = Field(default=6, ge=1)


class IntakeConfig(BaseModel):
    integrations_mode: Literal["auto", "real", "mock"] = "auto"
    options_cache_ttl_seconds: float = Field(default=300.0, ge=0)
    monday: MondayConfig = Field(default_factory=MondayConfig)
    resend: ResendConfig = Field(default_factory=ResendConfig)
    identity: IdentityConfig = Field(default_factory=IdentityConfig)

    def use_real_integrations(self) -> bool:
        if self.integrations_mode == "real":
            return True
        if self.integrations_mode == "mock":
            return False
        return bool(self.monday.api_token or self.resend.api_key or self.identity.api_key)


# env var -> (section, field)
_ENV_OVERRIDES = {
    "MONDAY_API_TOKEN": ("monday", "api_token"),
    "MONDAY_BOARD_ID": ("monday", "board_id"),
    "MONDAY_API_URL": ("monday", "api_url"),
    "RESEND_API_KEY": ("resend", "api_key"),
    "RESEND_API_URL": ("resend", "api_url"),
    "FIREBASE_API_KEY": ("identity", "api_key"),
}


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name, "").strip()
        if value:
            data.setdefault(section, {})[key] = value

    mode = os.getenv("INTEGRATIONS_MODE", "").strip().lower()
    if mode in {"live", "real"}:
        data["integrations_mode"] = "real"
    elif mode in {"mock", "test"}:
        data["integrations_mode"] = "mock"
    elif mode == "auto":
        data["integrations_mode"] = "auto"
    return data


def load_intake_config(config_path: Optional[Path] = None) -> IntakeConfig:
    """
    Load and validate the intake configuration.

    Args:
        config_path: Path to the YAML file. Defaults to config/intake_config.yml.
            A missing default file is not an error; built-in defaults apply.

    Returns:
        Validated IntakeConfig with environment credentials applied.

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        ValidationError: If the merged config doesn't match the schema
    """
    load_dotenv()

    data: Dict[str, Any] = {}
    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    elif config_path is not None:
        raise FileNotFoundError(f"Intake config file not found: {config_path}")
    else:
        logger.info("No intake config file at %s, using defaults", path)

    try:
        cfg = IntakeConfig(**_apply_env(data))
        logger.info("Loaded intake config (integrations_mode=%s)", cfg.integrations_mode)
        return cfg
    except ValidationError as e:
        logger.error("Intake config validation failed: %s", e)
        raise
