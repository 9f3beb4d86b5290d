"""
Monday.com - MOCK client.

⚠️  In-memory board used for development and tests. No network calls.
    Failures are scripted through the constructor (fail_with, create_item_response).
"""

import json
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional, Union

from src.integrations.contracts.board import BoardWritePayload
from src.integrations.contracts.interfaces import BoardClient
from src.integrations.errors import ConfigurationError
from src.integrations.policy.response_wrappers import MONDAY
from src.utils.config_loader import BoardColumns

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

_EXPERTISE_LABELS = [
    {"id": 1, "name": "Engineering"},
    {"id": 2, "name": "Product"},
    {"id": 3, "name": "Design"},
    {"id": 4, "name": "Sales"},
]

_CAPABILITY_LABELS = [
    {"id": 1, "name": "Advisor"},
    {"id": 2, "name": "Investor"},
    {"id": 3, "name": "Speaker"},
]


def seed_columns(columns: Optional[BoardColumns] = None) -> List[Dict[str, Any]]:
    columns = columns or BoardColumns()
    return [
        {"id": "name", "title": "Name", "type": "name", "settings_str": "{}"},
        {"id": columns.email, "title": "Email", "type": "email", "settings_str": "{}"},
        {"id": columns.employer, "title": "Employer", "type": "text", "settings_str": "{}"},
        {
            "id": columns.area_of_expertise,
            "title": "Area of Expertise",
            "type": "dropdown",
            "settings_str": json.dumps({"labels": _EXPERTISE_LABELS}),
        },
        {
            "id": columns.labels,
            "title": "Labels",
            "type": "dropdown",
            "settings_str": json.dumps({"labels": _CAPABILITY_LABELS}),
        },
    ]


ItemResponse = Union[Dict[str, Any], Callable[[str, BoardWritePayload], Dict[str, Any]]]


class MondayMockClient(BoardClient):
    def __init__(
        self,
        columns: Optional[List[Dict[str, Any]]] = None,
        create_item_response: Optional[ItemResponse] = None,
        fail_with: Optional[Exception] = None,
        configured: bool = True,
    ) -> None:
        self.columns = columns if columns is not None else seed_columns()
        self.create_item_response = create_item_response
        self.fail_with = fail_with
        self.configured = configured
        self.created_items: List[Dict[str, Any]] = []
        self.create_item_calls = 0
        self.fetch_columns_calls = 0

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("MONDAY_API_TOKEN is not configured.", system=MONDAY)

    async def fetch_columns(self) -> List[Dict[str, Any]]:
        self.ensure_configured()
        self.fetch_columns_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        return [dict(column) for column in self.columns]

    async def create_item(self, item_name: str, column_values: BoardWritePayload) -> Dict[str, Any]:
        self.ensure_configured()
        self.create_item_calls += 1
        # round-trip through JSON like the real mutation variables
        decoded = json.loads(json.dumps(column_values))
        if self.fail_with is not None:
            raise self.fail_with

        if callable(self.create_item_response):
            return self.create_item_response(item_name, decoded)
        if self.create_item_response is not None:
            return self.create_item_response

        item_id = str(uuid.uuid4().int)[:10]
        self.created_items.append({"id": item_id, "name": item_name, "column_values": decoded})
        logger.info("[MOCK] Created Monday.com item %s (%s)", item_id, item_name)
        return {"data": {"create_item": {"id": item_id, "name": item_name}}}
