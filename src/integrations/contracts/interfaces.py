from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

from .board import BoardWritePayload
from .identity import CreatedUser, IdentitySession
from .messaging import ContactPayload, SegmentOption


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class ContactSubmission:
    """A validated intake form submission. Built by src/intake/validation.py."""

    full_name: str
    email: str
    area_of_expertise: List[int]
    labels: List[int]
    segment_ids: List[str]
    employer: str = ""
    role: str = ""
    linkedin: str = ""
    location: str = ""
    notes: str = ""


# ---------------------------------------------------------------------------
# Abstract client interfaces
# ---------------------------------------------------------------------------

class BoardClient(ABC):
    """Work-management board (Monday.com) client."""

    @abstractmethod
    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the token or board id is missing."""

    @abstractmethod
    async def fetch_columns(self) -> List[Dict[str, Any]]:
        """Return the board's column schema: id, title, type, settings_str."""

    @abstractmethod
    async def create_item(self, item_name: str, column_values: BoardWritePayload) -> Dict[str, Any]:
        """
        Issue the create_item mutation and return the raw GraphQL body.

        Interpreting the body (created item vs. error list) is the
        coordinator's job, see policy/response_wrappers.py.
        """


class MessagingClient(ABC):
    """Email/segmentation platform (Resend) client."""

    @abstractmethod
    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the API key is missing."""

    @abstractmethod
    async def list_segments(self) -> List[SegmentOption]:
        """Return the first page of segments."""

    @abstractmethod
    async def create_contact(self, contact: ContactPayload) -> str:
        """Create a contact and return its id."""

    @abstractmethod
    async def add_contact_to_segment(self, contact_id: str, segment_id: str) -> None:
        """Enroll an existing contact in one segment."""


class IdentityProvider(ABC):
    """Email/password identity provider used by the admin panel."""

    @abstractmethod
    async def create_user(self, email: str, password: str) -> CreatedUser:
        """Provision a new email/password login."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> IdentitySession:
        """Exchange credentials for a session."""

    @abstractmethod
    async def send_password_reset(self, email: str) -> None:
        """Trigger the provider's password reset email."""


__all__ = [
    "BoardClient",
    "ContactSubmission",
    "IdentityProvider",
    "MessagingClient",
]
