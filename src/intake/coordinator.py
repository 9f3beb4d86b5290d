"""
Write coordinator: one intake submission -> Monday.com item + Resend contact.

Sequence:
    MAPPED -> BOARD_WRITE_ATTEMPTED -> BOARD_WRITE_SUCCEEDED | BOARD_WRITE_FAILED
           -> CONTACT_WRITE_ATTEMPTED -> SEGMENT_ENROLLMENT_ATTEMPTED -> RECONCILED

Rules:
- Both clients must be configured before anything is sent.
- The board write goes first. If it fails, Resend is never called.
- A created board item counts as success even when the response also carries
  an error list (see interpret_board_item_response).
- Once the board item exists the contact write always runs. A contact failure
  does not undo the board item; there is no compensating write.
- Segment enrollments run concurrently, one call per segment. Each is tracked
  on its own and a failure only produces a warning.

Nothing is deduplicated: submitting the same person twice creates two items
and two contacts.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.integrations.contracts.board import BoardItemWriteResult
from src.integrations.contracts.interfaces import BoardClient, ContactSubmission, MessagingClient
from src.integrations.contracts.messaging import ContactWriteResult, PartialEnrollmentFailure, SegmentEnrollmentResult
from src.integrations.errors import IntegrationError, UnexpectedResponse
from src.integrations.policy.response_wrappers import (
    GENERIC_BOARD_ERROR,
    extract_error_message,
    interpret_board_item_response,
)
from src.intake.field_mapper import to_board_payload, to_contact_payload
from src.utils.config_loader import BoardColumns

logger = logging.getLogger(__name__)


class WriteState(str, Enum):
    MAPPED = "MAPPED"
    BOARD_WRITE_ATTEMPTED = "BOARD_WRITE_ATTEMPTED"
    BOARD_WRITE_SUCCEEDED = "BOARD_WRITE_SUCCEEDED"
    BOARD_WRITE_FAILED = "BOARD_WRITE_FAILED"
    CONTACT_WRITE_ATTEMPTED = "CONTACT_WRITE_ATTEMPTED"
    SEGMENT_ENROLLMENT_ATTEMPTED = "SEGMENT_ENROLLMENT_ATTEMPTED"
    RECONCILED = "RECONCILED"


@dataclass
class CoordinatorOutcome:
    board: Optional[BoardItemWriteResult] = None
    contact: Optional[ContactWriteResult] = None
    contact_error: Optional[IntegrationError] = None
    states: List[WriteState] = field(default_factory=list)

    @property
    def board_succeeded(self) -> bool:
        return self.board is not None and self.board.success

    @property
    def contact_created(self) -> bool:
        return self.contact is not None

    @property
    def success(self) -> bool:
        return self.board_succeeded and self.contact_created

    @property
    def segment_failures(self) -> List[PartialEnrollmentFailure]:
        return self.contact.failed_segments if self.contact else []

    @property
    def failed_stage(self) -> Optional[str]:
        if not self.board_succeeded:
            return "board"
        if not self.contact_created:
            return "contact"
        return None

    @property
    def error_kind(self) -> Optional[str]:
        if not self.board_succeeded:
            return self.board.error_kind if self.board else None
        if self.contact_error is not None:
            return type(self.contact_error).__name__
        return None

    @property
    def error_message(self) -> Optional[str]:
        if not self.board_succeeded:
            return self.board.error_message if self.board else None
        if self.contact_error is not None:
            return self.contact_error.message
        return None


class WriteCoordinator:
    def __init__(
        self,
        board_client: BoardClient,
        messaging_client: MessagingClient,
        columns: Optional[BoardColumns] = None,
    ) -> None:
        self.board_client = board_client
        self.messaging_client = messaging_client
        self.columns = columns or BoardColumns()

    def ensure_configured(self) -> None:
        """Raise ConfigurationError unless both systems have their credentials."""
        self.board_client.ensure_configured()
        self.messaging_client.ensure_configured()

    async def submit(self, submission: ContactSubmission) -> CoordinatorOutcome:
        """
        Run the two-system write for one submission.

        Raises:
            ConfigurationError: a credential is missing; nothing was sent.
        """
        self.ensure_configured()

        outcome = CoordinatorOutcome()
        board_payload = to_board_payload(submission, self.columns)
        contact_payload = to_contact_payload(submission)
        outcome.states.append(WriteState.MAPPED)

        outcome.states.append(WriteState.BOARD_WRITE_ATTEMPTED)
        outcome.board = await self._write_board(submission.full_name, board_payload)
        if not outcome.board.success:
            outcome.states.append(WriteState.BOARD_WRITE_FAILED)
            outcome.states.append(WriteState.RECONCILED)
            return outcome
        outcome.states.append(WriteState.BOARD_WRITE_SUCCEEDED)

        outcome.states.append(WriteState.CONTACT_WRITE_ATTEMPTED)
        try:
            contact_id = await self.messaging_client.create_contact(contact_payload)
        except IntegrationError as e:
            logger.error(
                "Resend contact creation failed after Monday.com item %s was created: %s (payload=%s)",
                outcome.board.item_id,
                e.message,
                e.payload,
            )
            outcome.contact_error = e
            outcome.states.append(WriteState.RECONCILED)
            return outcome

        outcome.states.append(WriteState.SEGMENT_ENROLLMENT_ATTEMPTED)
        segment_results = await asyncio.gather(
            *(self._enroll(contact_id, segment_id) for segment_id in submission.segment_ids)
        )
        outcome.contact = ContactWriteResult(contact_id=contact_id, segment_results=list(segment_results))

        failures = outcome.segment_failures
        if failures:
            logger.warning(
                "Contact %s could not be added to %d segment(s): %s",
                contact_id,
                len(failures),
                [f.segment_id for f in failures],
            )
        outcome.states.append(WriteState.RECONCILED)
        return outcome

    async def _write_board(self, item_name: str, payload: dict) -> BoardItemWriteResult:
        try:
            raw = await self.board_client.create_item(item_name, payload)
            result = interpret_board_item_response(raw, payload)
        except UnexpectedResponse as e:
            logger.error("Unexpected Monday.com response: %s (payload=%s, column_values=%s)", e.message, e.payload, payload)
            return BoardItemWriteResult(
                success=False,
                error_message=extract_error_message(e.payload, default=GENERIC_BOARD_ERROR),
                error_kind=type(e).__name__,
                attempted_payload=payload,
            )
        except IntegrationError as e:
            logger.error("Monday.com item creation failed: %s (column_values=%s)", e.message, payload)
            return BoardItemWriteResult(
                success=False,
                error_message=e.message or GENERIC_BOARD_ERROR,
                error_kind=type(e).__name__,
                attempted_payload=payload,
            )

        if not result.success:
            logger.error(
                "Monday.com mutation errors: %s (column_values=%s, response=%s)",
                result.error_message,
                payload,
                raw,
            )
        return result

    async def _enroll(self, contact_id: str, segment_id: str) -> SegmentEnrollmentResult:
        try:
            await self.messaging_client.add_contact_to_segment(contact_id, segment_id)
        except IntegrationError as e:
            logger.warning("Error adding contact %s to segment %s: %s", contact_id, segment_id, e.message)
            return SegmentEnrollmentResult(segment_id=segment_id, success=False, error=e.message)
        except Exception as e:
            logger.exception("Unexpected error adding contact %s to segment %s", contact_id, segment_id)
            return SegmentEnrollmentResult(segment_id=segment_id, success=False, error=str(e))
        return SegmentEnrollmentResult(segment_id=segment_id, success=True)
