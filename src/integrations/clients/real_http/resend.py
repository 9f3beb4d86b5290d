"""
Resend contacts/segments HTTP client.

Endpoints used:
- GET  /segments                               (first page only)
- POST /contacts                               (email, first_name, last_name, unsubscribed)
- POST /contacts/{contact_id}/segments/{id}    (one call per segment)

Important:
- This client is the ONLY place that talks to Resend.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import httpx

from src.integrations.clients.real_http.http_utils import request_json
from src.integrations.contracts.interfaces import MessagingClient
from src.integrations.contracts.messaging import ContactPayload, SegmentOption
from src.integrations.errors import ConfigurationError
from src.integrations.policy.response_wrappers import RESEND, normalize_contact_response, normalize_segments_response
from src.utils.config_loader import ResendConfig

logger = logging.getLogger(__name__)


class ResendClient(MessagingClient):
    def __init__(self, config: ResendConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self.base_url = config.api_url.rstrip("/")
        self.transport = transport

    def ensure_configured(self) -> None:
        if not self.config.api_key:
            raise ConfigurationError("RESEND_API_KEY is not configured.", system=RESEND)

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    async def _request(self, method: str, path: str, body: Optional[dict] = None) -> dict:
        self.ensure_configured()
        return await request_json(
            method,
            f"{self.base_url}{path}",
            system=RESEND,
            label="Resend",
            headers=self._headers(),
            json=body,
            timeout_seconds=self.config.timeout_seconds,
            transport=self.transport,
        )

    async def list_segments(self) -> List[SegmentOption]:
        data = await self._request("GET", "/segments")
        return normalize_segments_response(data)

    async def create_contact(self, contact: ContactPayload) -> str:
        data = await self._request("POST", "/contacts", contact.to_request_body())
        contact_id = normalize_contact_response(data)
        logger.info("Created Resend contact %s", contact_id)
        return contact_id

    async def add_contact_to_segment(self, contact_id: str, segment_id: str) -> None:
        await self._request("POST", f"/contacts/{contact_id}/segments/{segment_id}")
