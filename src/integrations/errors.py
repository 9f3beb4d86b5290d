"""
Integration error taxonomy.

Every failure talking to Monday.com, Resend or the identity provider is raised
as one of these, so callers never have to catch httpx exceptions directly.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class IntegrationError(Exception):
    def __init__(
        self,
        message: str,
        *,
        system: str = "",
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.system = system
        self.payload = payload or {}


class ConfigurationError(IntegrationError):
    """A required credential or identifier is missing. Raised before any network call."""


class UpstreamUnreachable(IntegrationError):
    """Network-level failure (connect error, timeout, protocol error)."""


class UpstreamRejected(IntegrationError):
    """The upstream system answered with a structured error."""

    def __init__(
        self,
        message: str,
        *,
        system: str = "",
        payload: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, system=system, payload=payload)
        self.status_code = status_code


class UnexpectedResponse(IntegrationError):
    """The response matched neither the success nor the documented error shape."""
