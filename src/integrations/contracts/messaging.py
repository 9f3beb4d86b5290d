"""
Messaging platform contracts (Resend contacts and segments).

Segment enrollment is one call per segment, so the contact write result
carries an independent outcome for every requested segment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class SegmentOption:
    id: str
    name: str


@dataclass(frozen=True)
class ContactPayload:
    email: str
    first_name: str
    last_name: str

    def to_request_body(self) -> dict:
        return {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "unsubscribed": False,
        }


@dataclass(frozen=True)
class SegmentEnrollmentResult:
    segment_id: str
    success: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PartialEnrollmentFailure:
    """A segment the contact could not be added to. Reported as a warning."""

    segment_id: str
    message: str


@dataclass
class ContactWriteResult:
    contact_id: str
    segment_results: List[SegmentEnrollmentResult] = field(default_factory=list)

    @property
    def failed_segments(self) -> List[PartialEnrollmentFailure]:
        return [
            PartialEnrollmentFailure(segment_id=r.segment_id, message=r.error or "Segment enrollment failed")
            for r in self.segment_results
            if not r.success
        ]
