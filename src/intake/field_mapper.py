"""
Field mapper: ContactSubmission -> Monday.com column values and Resend contact.

Only fields with data are written. Monday treats an omitted column and an
explicitly empty one differently, so empty optional fields never appear as
keys in the board payload.
"""

from __future__ import annotations

from typing import Tuple

from src.integrations.contracts.board import BoardWritePayload
from src.integrations.contracts.interfaces import ContactSubmission
from src.integrations.contracts.messaging import ContactPayload
from src.utils.config_loader import BoardColumns


def split_full_name(full_name: str) -> Tuple[str, str]:
    """First whitespace-delimited token, then the remainder ("" when there is none)."""
    parts = (full_name or "").strip().split(None, 1)
    if not parts:
        return "", ""
    first = parts[0]
    last = parts[1].strip() if len(parts) > 1 else ""
    return first, last


def to_board_payload(submission: ContactSubmission, columns: BoardColumns) -> BoardWritePayload:
    payload: BoardWritePayload = {
        # email columns need both keys
        columns.email: {"email": submission.email, "text": submission.email},
    }

    text_fields = (
        (columns.employer, submission.employer),
        (columns.role, submission.role),
        (columns.linkedin, submission.linkedin),
        (columns.notes, submission.notes),
    )
    for column_id, value in text_fields:
        value = (value or "").strip()
        if value:
            payload[column_id] = value

    # location__1 is a location-type column that needs lat/lng; free-text
    # location is deliberately not written.

    if submission.area_of_expertise:
        payload[columns.area_of_expertise] = {"ids": list(submission.area_of_expertise)}
    if submission.labels:
        payload[columns.labels] = {"ids": list(submission.labels)}

    return payload


def to_contact_payload(submission: ContactSubmission) -> ContactPayload:
    first_name, last_name = split_full_name(submission.full_name)
    return ContactPayload(email=submission.email, first_name=first_name, last_name=last_name)
