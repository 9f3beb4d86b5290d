"""Backend validation for intake form submissions.

The frontend posts the contact form as a dictionary. These validators make
sure required fields are present and well-formed before anything is written
to Monday.com or Resend.

On validation failure, raise `FormValidationError` so the API can return HTTP 422
with structured `field_errors`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from src.integrations.contracts.interfaces import ContactSubmission

if TYPE_CHECKING:
    from src.intake.catalog import OptionCatalog

logger = logging.getLogger(__name__)


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def _get(payload: Dict[str, Any], field: str, *aliases: str) -> Any:
    for key in (field, *aliases):
        if key in payload:
            return payload[key]
    return None


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Dict[str, Any], field: str, errors: Dict[str, str], *aliases: str, label: Optional[str] = None) -> str:
    value = _strip(_get(payload, field, *aliases))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def optional_str(payload: Dict[str, Any], field: str, *aliases: str) -> str:
    return _strip(_get(payload, field, *aliases))


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: str, errors: Dict[str, str], field: str = "email") -> str:
    value = _strip(value)
    if not value:
        add_error(errors, field, "Email is required")
        return value
    if not _EMAIL_RE.match(value):
        add_error(errors, field, "Email is not valid")
    return value


def require_id_list(
    payload: Dict[str, Any],
    field: str,
    errors: Dict[str, str],
    *aliases: str,
    coerce: Callable[[Any], Any] = int,
    label: Optional[str] = None,
) -> List[Any]:
    """Non-empty list of ids, de-duplicated in submission order."""
    raw = _get(payload, field, *aliases)
    if raw is None or raw == "" or raw == []:
        add_error(errors, field, f"Select at least one {label or field}")
        return []
    if not isinstance(raw, (list, tuple, set)):
        raw = [raw]

    out: List[Any] = []
    for item in raw:
        try:
            value = coerce(item)
        except (TypeError, ValueError):
            add_error(errors, field, f"{label or field} contains an invalid id: {item!r}")
            return []
        if isinstance(value, str):
            value = value.strip()
            if not value:
                add_error(errors, field, f"{label or field} contains an empty id")
                return []
        if value not in out:
            out.append(value)
    return out


def _coerce_int(v: Any) -> int:
    # bool is an int subclass; True is not a dropdown id
    if isinstance(v, bool):
        raise ValueError(v)
    if isinstance(v, float) and not v.is_integer():
        raise ValueError(v)
    return int(v)


def build_contact_submission(payload: Dict[str, Any]) -> ContactSubmission:
    """Validate a raw form payload. Accepts snake_case and the UI's camelCase keys."""
    errors: Dict[str, str] = {}

    full_name = require_str(payload, "full_name", errors, "fullName", label="Full name")
    email = validate_email(_as_str(_get(payload, "email")), errors)
    area_of_expertise = require_id_list(
        payload, "area_of_expertise", errors, "areaOfExpertise", coerce=_coerce_int, label="area of expertise"
    )
    labels = require_id_list(payload, "labels", errors, coerce=_coerce_int, label="label")
    segment_ids = require_id_list(payload, "segment_ids", errors, "segmentIds", coerce=str, label="segment")

    if errors:
        raise FormValidationError(field_errors=errors)

    return ContactSubmission(
        full_name=full_name,
        email=email,
        area_of_expertise=area_of_expertise,
        labels=labels,
        segment_ids=segment_ids,
        employer=optional_str(payload, "employer"),
        role=optional_str(payload, "role"),
        linkedin=optional_str(payload, "linkedin", "linkedinUrl"),
        location=optional_str(payload, "location"),
        notes=optional_str(payload, "notes"),
    )


def validate_selections(submission: ContactSubmission, catalog: "OptionCatalog") -> None:
    """
    Check every selected id against the option catalog snapshot.

    A field whose option source failed to load (None in the snapshot) is not
    checked; the upstream system will reject unknown ids itself.
    """
    errors: Dict[str, str] = {}
    checks = (
        ("area_of_expertise", submission.area_of_expertise, catalog.expertise_ids),
        ("labels", submission.labels, catalog.label_ids),
        ("segment_ids", submission.segment_ids, catalog.segment_ids),
    )
    for field, selected, allowed in checks:
        if allowed is None:
            logger.warning("Skipping %s validation: option source unavailable", field)
            continue
        unknown = [v for v in selected if v not in allowed]
        if unknown:
            add_error(errors, field, f"Unknown option id(s): {', '.join(str(v) for v in unknown)}")

    if errors:
        raise FormValidationError(field_errors=errors, message="Selected options are no longer available")
