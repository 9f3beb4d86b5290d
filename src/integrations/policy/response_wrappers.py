from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from src.integrations.contracts.board import BoardItemWriteResult, BoardWritePayload
from src.integrations.contracts.messaging import SegmentOption
from src.integrations.errors import UnexpectedResponse

logger = logging.getLogger(__name__)

MONDAY = "monday"
RESEND = "resend"

GENERIC_BOARD_ERROR = "Failed to create item in Monday.com"
GENERIC_CONTACT_ERROR = "Failed to create contact in Resend"


class MondayColumnModel(BaseModel):
    id: str
    title: str = ""
    type: str = ""
    settings_str: Optional[str] = None


class CreatedItemModel(BaseModel):
    id: str
    name: str = ""


class ResendSegmentModel(BaseModel):
    id: str
    name: str


class ResendContactModel(BaseModel):
    id: str


def extract_error_message(body: Any, default: Optional[str] = None) -> Optional[str]:
    """First human-readable error message in a Monday or Resend error body."""
    if not isinstance(body, dict):
        return default
    errors = body.get("errors")
    if isinstance(errors, list):
        for err in errors:
            if isinstance(err, dict) and isinstance(err.get("message"), str) and err["message"].strip():
                return err["message"]
    for key in ("error_message", "message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return default


def interpret_board_item_response(
    raw: Dict[str, Any],
    attempted_payload: BoardWritePayload,
) -> BoardItemWriteResult:
    """
    Decide whether a create_item response means the item exists.

    IMPORTANT: a created item id wins over an error list. Monday can report
    column-level errors in the same body as a successful creation; those are
    logged as warnings and the write counts as a success. Only an error list
    with no created item is a failure, and a body with neither is an
    UnexpectedResponse.
    """
    if not isinstance(raw, dict):
        raise UnexpectedResponse("Monday.com returned a non-object response", system=MONDAY, payload={"raw": raw})

    errors = raw.get("errors") if isinstance(raw.get("errors"), list) else []
    data = raw.get("data") if isinstance(raw.get("data"), dict) else {}
    created = data.get("create_item")

    if isinstance(created, dict) and created.get("id") not in (None, ""):
        item = _build_model(CreatedItemModel, {"id": str(created["id"]), "name": created.get("name") or ""}, raw)
        warnings = [extract_error_message({"errors": [e]}, default=str(e)) for e in errors]
        if warnings:
            logger.warning("Monday.com created item %s with warnings: %s", item.id, warnings)
        return BoardItemWriteResult(
            success=True,
            item_id=item.id,
            item_name=item.name,
            warnings=warnings,
            attempted_payload=attempted_payload,
        )

    if errors:
        return BoardItemWriteResult(
            success=False,
            error_message=extract_error_message(raw, default=GENERIC_BOARD_ERROR),
            error_kind="UpstreamRejected",
            attempted_payload=attempted_payload,
        )

    raise UnexpectedResponse(
        "Monday.com response contained neither a created item nor errors",
        system=MONDAY,
        payload=raw,
    )


def normalize_board_columns(raw: Dict[str, Any]) -> List[MondayColumnModel]:
    """Columns of the first board in a `boards(ids) { columns }` response."""
    data = raw.get("data") if isinstance(raw, dict) else None
    if not isinstance(data, dict):
        raise UnexpectedResponse("Monday.com schema response has no data", system=MONDAY, payload=_as_payload(raw))

    boards = data.get("boards")
    if not isinstance(boards, list):
        raise UnexpectedResponse("Monday.com schema response has no boards list", system=MONDAY, payload=raw)
    if not boards:
        logger.warning("Monday.com returned no board for the configured board id")
        return []

    columns = boards[0].get("columns") if isinstance(boards[0], dict) else None
    if not isinstance(columns, list):
        return []

    out: List[MondayColumnModel] = []
    for column in columns:
        try:
            out.append(MondayColumnModel(**column))
        except (TypeError, ValidationError):
            logger.warning("Skipping malformed Monday.com column entry: %r", column)
    return out


def normalize_segments_response(raw: Dict[str, Any]) -> List[SegmentOption]:
    data = raw.get("data") if isinstance(raw, dict) else None
    if not isinstance(data, list):
        raise UnexpectedResponse("Resend segments response has no data list", system=RESEND, payload=_as_payload(raw))

    segments: List[SegmentOption] = []
    for entry in data:
        try:
            model = ResendSegmentModel(**entry)
        except (TypeError, ValidationError):
            logger.warning("Skipping malformed Resend segment entry: %r", entry)
            continue
        segments.append(SegmentOption(id=model.id, name=model.name))
    return segments


def normalize_contact_response(raw: Dict[str, Any]) -> str:
    if not isinstance(raw, dict) or not raw.get("id"):
        raise UnexpectedResponse("Resend contact response has no contact id", system=RESEND, payload=_as_payload(raw))
    return _build_model(ResendContactModel, {"id": str(raw["id"])}, raw).id


def _as_payload(raw: Any) -> Dict[str, Any]:
    return raw if isinstance(raw, dict) else {"raw": raw}


def _build_model(model_type, payload: Dict[str, Any], raw: Any):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise UnexpectedResponse(f"Response validation failed: {exc}", payload=_as_payload(raw)) from exc
