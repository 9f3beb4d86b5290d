"""
Resend - MOCK client.

⚠️  In-memory contacts and segments for development and tests.
    Segment enrollment failures are scripted per segment id.
"""

import asyncio
import logging
import uuid
from typing import Dict, Iterable, List, Optional

from src.integrations.contracts.interfaces import MessagingClient
from src.integrations.contracts.messaging import ContactPayload, SegmentOption
from src.integrations.errors import ConfigurationError, UpstreamRejected
from src.integrations.policy.response_wrappers import RESEND

logger = logging.getLogger(__name__)


_MOCK_SEGMENTS: List[SegmentOption] = [
    SegmentOption(id="seg_newsletter", name="Newsletter"),
    SegmentOption(id="seg_events", name="Events"),
    SegmentOption(id="seg_partners", name="Partners"),
]


class ResendMockClient(MessagingClient):
    def __init__(
        self,
        segments: Optional[List[SegmentOption]] = None,
        failing_segments: Iterable[str] = (),
        create_contact_error: Optional[Exception] = None,
        list_segments_error: Optional[Exception] = None,
        enrollment_delay_seconds: float = 0.0,
        configured: bool = True,
    ) -> None:
        self.segments = list(segments) if segments is not None else list(_MOCK_SEGMENTS)
        self.failing_segments = set(failing_segments)
        self.create_contact_error = create_contact_error
        self.list_segments_error = list_segments_error
        self.enrollment_delay_seconds = enrollment_delay_seconds
        self.configured = configured
        self.contacts: Dict[str, ContactPayload] = {}
        self.enrollments: List[tuple] = []
        self.create_contact_calls = 0
        self.enrollment_calls = 0

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("RESEND_API_KEY is not configured.", system=RESEND)

    async def list_segments(self) -> List[SegmentOption]:
        self.ensure_configured()
        if self.list_segments_error is not None:
            raise self.list_segments_error
        return list(self.segments)

    async def create_contact(self, contact: ContactPayload) -> str:
        self.ensure_configured()
        self.create_contact_calls += 1
        if self.create_contact_error is not None:
            raise self.create_contact_error
        contact_id = str(uuid.uuid4())
        self.contacts[contact_id] = contact
        logger.info("[MOCK] Created Resend contact %s for %s", contact_id, contact.email)
        return contact_id

    async def add_contact_to_segment(self, contact_id: str, segment_id: str) -> None:
        self.ensure_configured()
        self.enrollment_calls += 1
        if self.enrollment_delay_seconds:
            await asyncio.sleep(self.enrollment_delay_seconds)
        if segment_id in self.failing_segments:
            raise UpstreamRejected(f"Segment {segment_id} not found", system=RESEND, status_code=404)
        self.enrollments.append((contact_id, segment_id))
