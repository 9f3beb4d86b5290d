"""
Result reporter: coordinator outcome -> response body for the intake UI.

Only short, user-safe messages leave this module. Raw upstream payloads stay
in the logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.integrations.errors import ConfigurationError, IntegrationError
from src.intake.coordinator import CoordinatorOutcome

GENERIC_SUBMIT_ERROR = "Failed to submit contact. Please try again."
CONFIGURATION_ERROR_MESSAGE = "The intake service is not configured. Please contact an administrator."

_STATUS_BY_KIND = {
    "ConfigurationError": 500,
    "UpstreamUnreachable": 502,
    "UpstreamRejected": 502,
    "UnexpectedResponse": 502,
}


class BoardItemModel(BaseModel):
    id: str
    name: str = ""


class SegmentFailureModel(BaseModel):
    segment_id: str
    message: str


class SubmissionResponse(BaseModel):
    success: bool
    error_message: Optional[str] = None
    stage: Optional[str] = None
    board_item: Optional[BoardItemModel] = None
    contact_id: Optional[str] = None
    segment_failures: List[SegmentFailureModel] = Field(default_factory=list)


@dataclass
class SubmissionReport:
    status_code: int
    body: SubmissionResponse

    def to_dict(self) -> Dict[str, Any]:
        return self.body.model_dump(exclude_none=True)


def report_outcome(outcome: CoordinatorOutcome) -> SubmissionReport:
    board_item = None
    if outcome.board_succeeded:
        board_item = BoardItemModel(id=outcome.board.item_id, name=outcome.board.item_name or "")

    if outcome.success:
        body = SubmissionResponse(
            success=True,
            board_item=board_item,
            contact_id=outcome.contact.contact_id,
            segment_failures=[
                SegmentFailureModel(segment_id=f.segment_id, message=f.message) for f in outcome.segment_failures
            ],
        )
        return SubmissionReport(status_code=200, body=body)

    body = SubmissionResponse(
        success=False,
        error_message=outcome.error_message or GENERIC_SUBMIT_ERROR,
        stage=outcome.failed_stage,
        board_item=board_item,
    )
    return SubmissionReport(status_code=_STATUS_BY_KIND.get(outcome.error_kind or "", 502), body=body)


def report_error(exc: IntegrationError, stage: Optional[str] = None) -> SubmissionReport:
    """Shape an error raised before or outside the coordinator's sequence."""
    if isinstance(exc, ConfigurationError):
        message = CONFIGURATION_ERROR_MESSAGE
    else:
        message = exc.message or GENERIC_SUBMIT_ERROR
    body = SubmissionResponse(success=False, error_message=message, stage=stage or exc.system or None)
    return SubmissionReport(status_code=_STATUS_BY_KIND.get(type(exc).__name__, 502), body=body)
