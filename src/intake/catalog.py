"""
Option catalog resolver.

Loads the selectable ids the intake form offers:
- area of expertise and label options from two Monday.com dropdown columns
- segments from Resend

The two sources are independent failure domains. A Monday outage leaves the
segment list intact and vice versa.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from src.integrations.contracts.board import BoardOptions, DropdownOption
from src.integrations.contracts.interfaces import BoardClient, MessagingClient
from src.integrations.contracts.messaging import SegmentOption
from src.integrations.errors import IntegrationError
from src.utils.config_loader import BoardColumns

logger = logging.getLogger(__name__)

BOARD_SOURCE = "board"
SEGMENTS_SOURCE = "segments"


def parse_dropdown_options(settings_str: Optional[str]) -> List[DropdownOption]:
    """
    Extract the `labels` array from a dropdown column's settings blob.

    Never raises: a missing, malformed or unexpected blob yields [] so the
    form stays usable when the board schema drifts.
    """
    if not settings_str:
        return []
    try:
        settings = json.loads(settings_str)
    except (TypeError, ValueError):
        return []
    if not isinstance(settings, dict):
        return []
    labels = settings.get("labels")
    if not isinstance(labels, list):
        return []

    options: List[DropdownOption] = []
    for label in labels:
        if not isinstance(label, dict) or "id" not in label or "name" not in label:
            continue
        try:
            options.append(DropdownOption(id=int(label["id"]), name=str(label["name"])))
        except (TypeError, ValueError):
            continue
    return options


@dataclass
class OptionCatalog:
    """Snapshot of valid ids. None means that source could not be loaded."""

    expertise_ids: Optional[Set[int]] = None
    label_ids: Optional[Set[int]] = None
    segment_ids: Optional[Set[str]] = None
    fetched_at: float = 0.0

    @property
    def complete(self) -> bool:
        return None not in (self.expertise_ids, self.label_ids, self.segment_ids)


@dataclass
class CatalogFetchResult:
    board_options: Optional[BoardOptions] = None
    segments: Optional[List[SegmentOption]] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def to_catalog(self, fetched_at: float) -> OptionCatalog:
        catalog = OptionCatalog(fetched_at=fetched_at)
        if self.board_options is not None:
            catalog.expertise_ids = {o.id for o in self.board_options.area_of_expertise}
            catalog.label_ids = {o.id for o in self.board_options.labels}
        if self.segments is not None:
            catalog.segment_ids = {s.id for s in self.segments}
        return catalog


class OptionCatalogResolver:
    def __init__(
        self,
        board_client: BoardClient,
        messaging_client: MessagingClient,
        columns: Optional[BoardColumns] = None,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.board_client = board_client
        self.messaging_client = messaging_client
        self.columns = columns or BoardColumns()
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cached: Optional[OptionCatalog] = None

    async def fetch_board_options(self) -> BoardOptions:
        self.board_client.ensure_configured()
        columns: List[Dict[str, Any]] = await self.board_client.fetch_columns()
        by_id = {c.get("id"): c for c in columns if isinstance(c, dict)}

        expertise_column = by_id.get(self.columns.area_of_expertise)
        label_column = by_id.get(self.columns.labels)
        if expertise_column is None:
            logger.warning("Dropdown column %s not found on board", self.columns.area_of_expertise)
        if label_column is None:
            logger.warning("Dropdown column %s not found on board", self.columns.labels)

        return BoardOptions(
            area_of_expertise=parse_dropdown_options(expertise_column.get("settings_str")) if expertise_column else [],
            labels=parse_dropdown_options(label_column.get("settings_str")) if label_column else [],
        )

    async def fetch_segment_options(self) -> List[SegmentOption]:
        self.messaging_client.ensure_configured()
        return await self.messaging_client.list_segments()

    async def fetch_all(self) -> CatalogFetchResult:
        """Load both sources concurrently; each failure is captured, never propagated."""
        board, segments = await asyncio.gather(
            self.fetch_board_options(),
            self.fetch_segment_options(),
            return_exceptions=True,
        )

        result = CatalogFetchResult()
        for source, value in ((BOARD_SOURCE, board), (SEGMENTS_SOURCE, segments)):
            if isinstance(value, BaseException) and not isinstance(value, Exception):
                raise value
            if isinstance(value, IntegrationError):
                logger.error("Failed to load %s options: %s", source, value.message)
                result.errors[source] = value.message
            elif isinstance(value, Exception):
                logger.error("Unexpected error loading %s options", source, exc_info=value)
                result.errors[source] = f"Failed to load {source} options"
            elif source == BOARD_SOURCE:
                result.board_options = value
            else:
                result.segments = value

        self._store(result)
        return result

    def _store(self, result: CatalogFetchResult) -> None:
        catalog = result.to_catalog(self._clock())
        if catalog.complete:
            self._cached = catalog

    async def current_catalog(self) -> OptionCatalog:
        """Cached snapshot when fresh, otherwise a new fetch (partial snapshots are not cached)."""
        cached = self._cached
        if cached is not None and self._clock() - cached.fetched_at < self.ttl_seconds:
            return cached
        result = await self.fetch_all()
        return result.to_catalog(self._clock())

    def invalidate(self) -> None:
        self._cached = None
