"""Shared httpx request helper for the real HTTP clients."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from src.integrations.errors import UnexpectedResponse, UpstreamRejected, UpstreamUnreachable
from src.integrations.policy.response_wrappers import extract_error_message

logger = logging.getLogger(__name__)


async def request_json(
    method: str,
    url: str,
    *,
    system: str,
    label: str,
    headers: Dict[str, str],
    json: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
    timeout_seconds: float = 20.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    Send one request and return the decoded JSON body ({} for an empty body).

    Raises:
        UpstreamUnreachable: connect errors, timeouts and other transport failures
        UpstreamRejected: any non-2xx status
        UnexpectedResponse: a 2xx body that is not JSON
    """
    try:
        async with httpx.AsyncClient(timeout=timeout_seconds, transport=transport) as client:
            response = await client.request(method, url, headers=headers, json=json, params=params)
    except httpx.RequestError as e:
        logger.error("Request error calling %s %s: %s", label, url, e)
        raise UpstreamUnreachable(f"Could not reach {label}: {e}", system=system) from e

    body: Any = None
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = None

    if response.is_error:
        message = extract_error_message(body, default=f"{label} API error: {response.reason_phrase}")
        logger.error("HTTP error from %s: %s %s", label, response.status_code, response.text)
        raise UpstreamRejected(
            message,
            system=system,
            payload=body if isinstance(body, dict) else {"raw": response.text},
            status_code=response.status_code,
        )

    if not response.content:
        return {}
    if not isinstance(body, dict):
        raise UnexpectedResponse(f"{label} returned a non-JSON body", system=system, payload={"raw": response.text})
    return body
