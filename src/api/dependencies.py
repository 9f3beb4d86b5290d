import hmac
import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from fastapi import Depends, Header, HTTPException, Request, status

from src.integrations.clients.mocks.identity import IdentityMockClient
from src.integrations.clients.mocks.monday import MondayMockClient, seed_columns
from src.integrations.clients.mocks.resend import ResendMockClient
from src.integrations.clients.real_http.identity import FirebaseIdentityClient
from src.integrations.clients.real_http.monday import MondayBoardClient
from src.integrations.clients.real_http.resend import ResendClient
from src.integrations.contracts.interfaces import BoardClient, IdentityProvider, MessagingClient
from src.intake.catalog import OptionCatalogResolver
from src.intake.coordinator import WriteCoordinator
from src.utils.config_loader import IntakeConfig, load_intake_config

load_dotenv()

logger = logging.getLogger(__name__)

_ALLOWLIST_PATHS = {
    "/",
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/openapi.json",
    "/redoc",
}


def get_api_keys():
    keys = os.getenv("API_KEYS", "")
    return [k.strip() for k in keys.split(",") if k.strip()]


async def api_key_protection(
    request: Request = None,  # keep Request type so FastAPI injects it; default None for direct calls/tests
    x_api_key: str = Header(default=None, alias="X-API-KEY"),
):
    debug = os.getenv("API_KEY_DEBUG", "").lower() in ("1", "true", "yes")
    path = request.url.path if request is not None else "<no-request>"

    if request is not None and request.url.path in _ALLOWLIST_PATHS:
        if debug:
            logger.info("API key check: allowlisted path=%s", path)
        return

    valid_keys = get_api_keys()
    candidate = (x_api_key or "").strip()

    ok = bool(candidate) and any(hmac.compare_digest(candidate, k) for k in valid_keys)
    if debug:
        logger.info("API key check: path=%s ok=%s configured_keys=%d", path, ok, len(valid_keys))

    if not ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API Key",
        )


# ============================================================================
# CLIENT SELECTION (mock vs real happens here and nowhere else)
# ============================================================================

@lru_cache
def get_config() -> IntakeConfig:
    return load_intake_config()


@lru_cache
def get_board_client() -> BoardClient:
    cfg = get_config()
    if cfg.use_real_integrations():
        return MondayBoardClient(cfg.monday)
    logger.warning("Using MOCK Monday.com client")
    return MondayMockClient(columns=seed_columns(cfg.monday.columns))


@lru_cache
def get_messaging_client() -> MessagingClient:
    cfg = get_config()
    if cfg.use_real_integrations():
        return ResendClient(cfg.resend)
    logger.warning("Using MOCK Resend client")
    return ResendMockClient()


@lru_cache
def get_identity_provider() -> IdentityProvider:
    cfg = get_config()
    if cfg.use_real_integrations():
        return FirebaseIdentityClient(cfg.identity)
    logger.warning("Using MOCK identity provider")
    return IdentityMockClient()


@lru_cache
def get_catalog_resolver() -> OptionCatalogResolver:
    cfg = get_config()
    return OptionCatalogResolver(
        get_board_client(),
        get_messaging_client(),
        columns=cfg.monday.columns,
        ttl_seconds=cfg.options_cache_ttl_seconds,
    )


def get_coordinator(
    board_client: BoardClient = Depends(get_board_client),
    messaging_client: MessagingClient = Depends(get_messaging_client),
    config: IntakeConfig = Depends(get_config),
) -> WriteCoordinator:
    return WriteCoordinator(board_client, messaging_client, columns=config.monday.columns)
