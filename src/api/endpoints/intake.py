"""
Intake endpoints: option lists for the form and the contact submission.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_catalog_resolver, get_coordinator
from src.integrations.errors import ConfigurationError, IntegrationError
from src.intake.catalog import OptionCatalogResolver
from src.intake.coordinator import WriteCoordinator
from src.intake.reporter import report_error, report_outcome
from src.intake.validation import FormValidationError, build_contact_submission, validate_selections

logger = logging.getLogger(__name__)

api = APIRouter()
intake_api = api


def _validation_http_error(e: FormValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "error": "validation_error",
            "message": e.message,
            "field_errors": e.field_errors,
        },
    )


@api.get("/board/options", tags=["Intake"])
async def get_board_options(resolver: OptionCatalogResolver = Depends(get_catalog_resolver)):
    try:
        options = await resolver.fetch_board_options()
    except ConfigurationError as e:
        logger.error("Monday.com configuration missing: %s", e.message)
        raise HTTPException(status_code=500, detail={"message": "Monday.com configuration missing"})
    except IntegrationError as e:
        logger.error("Error fetching Monday.com options: %s", e.message)
        raise HTTPException(status_code=502, detail={"message": "Failed to fetch options from Monday.com"})

    return {
        "area_of_expertise": [asdict(o) for o in options.area_of_expertise],
        "labels": [asdict(o) for o in options.labels],
    }


@api.get("/segments", tags=["Intake"])
async def get_segments(resolver: OptionCatalogResolver = Depends(get_catalog_resolver)):
    try:
        segments = await resolver.fetch_segment_options()
    except ConfigurationError as e:
        logger.error("Resend configuration missing: %s", e.message)
        raise HTTPException(status_code=500, detail={"message": "Resend API key not configured"})
    except IntegrationError as e:
        logger.error("Error fetching Resend segments: %s", e.message)
        raise HTTPException(status_code=502, detail={"message": "Failed to fetch segments from Resend"})

    return {"segments": [asdict(s) for s in segments]}


@api.get("/options", tags=["Intake"])
async def get_all_options(resolver: OptionCatalogResolver = Depends(get_catalog_resolver)):
    """Board options and segments in one call. A failed source comes back empty with an error entry."""
    result = await resolver.fetch_all()
    board = result.board_options
    return {
        "area_of_expertise": [asdict(o) for o in board.area_of_expertise] if board is not None else [],
        "labels": [asdict(o) for o in board.labels] if board is not None else [],
        "segments": [asdict(s) for s in result.segments] if result.segments is not None else [],
        "errors": dict(result.errors),
    }


@api.post("/contacts", tags=["Intake"])
async def submit_contact(
    payload: Dict[str, Any] = Body(...),
    resolver: OptionCatalogResolver = Depends(get_catalog_resolver),
    coordinator: WriteCoordinator = Depends(get_coordinator),
):
    try:
        submission = build_contact_submission(payload)
    except FormValidationError as e:
        raise _validation_http_error(e)

    # both credentials are checked before the catalog lookup reaches Monday.com
    try:
        coordinator.ensure_configured()
    except ConfigurationError as e:
        logger.error("Contact submission aborted, configuration missing: %s", e.message)
        report = report_error(e)
        return JSONResponse(status_code=report.status_code, content=report.to_dict())

    catalog = await resolver.current_catalog()
    try:
        validate_selections(submission, catalog)
    except FormValidationError:
        # options may have been added since the snapshot was cached
        resolver.invalidate()
        catalog = await resolver.current_catalog()
        try:
            validate_selections(submission, catalog)
        except FormValidationError as e:
            raise _validation_http_error(e)

    try:
        outcome = await coordinator.submit(submission)
    except ConfigurationError as e:
        logger.error("Contact submission aborted, configuration missing: %s", e.message)
        report = report_error(e)
        return JSONResponse(status_code=report.status_code, content=report.to_dict())

    report = report_outcome(outcome)
    return JSONResponse(status_code=report.status_code, content=report.to_dict())
