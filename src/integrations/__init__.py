"""
Integrations layer.
This package contains all code used to communicate with external systems:
- Monday.com (contacts board: dropdown options, item creation)
- Resend (contacts and segment membership)
- Firebase Identity Toolkit (admin credential provisioning)

Key rule:
- Intake code MUST NOT call external APIs directly.
- It calls integration clients (under src/integrations/clients) through the
  interfaces in contracts/interfaces.py.
- MOCK clients are used in development and tests; REAL_HTTP clients when
  credentials are configured.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py).
"""

from .contracts.board import BoardItemWriteResult, BoardOptions, BoardWritePayload, DropdownOption
from .contracts.identity import CreatedUser, IdentitySession
from .contracts.interfaces import BoardClient, ContactSubmission, IdentityProvider, MessagingClient
from .contracts.messaging import (
    ContactPayload,
    ContactWriteResult,
    PartialEnrollmentFailure,
    SegmentEnrollmentResult,
    SegmentOption,
)
from .errors import (
    ConfigurationError,
    IntegrationError,
    UnexpectedResponse,
    UpstreamRejected,
    UpstreamUnreachable,
)

__all__ = [
    # interfaces
    "BoardClient", "ContactSubmission", "IdentityProvider", "MessagingClient",
    # board
    "BoardItemWriteResult", "BoardOptions", "BoardWritePayload", "DropdownOption",
    # messaging
    "ContactPayload", "ContactWriteResult", "PartialEnrollmentFailure",
    "SegmentEnrollmentResult", "SegmentOption",
    # identity
    "CreatedUser", "IdentitySession",
    # errors
    "ConfigurationError", "IntegrationError", "UnexpectedResponse",
    "UpstreamRejected", "UpstreamUnreachable",
]
