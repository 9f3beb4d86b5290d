"""
Monday.com GraphQL client.

Purpose:
- Reads the contacts board column schema (dropdown option universes)
- Creates one item per intake submission

Implementation notes:
- Authorization is the raw API token, not a Bearer value
- create_item takes column_values as a JSON-encoded *string* inside the
  GraphQL variables; the values are serialized twice on the way out
- GraphQL errors usually arrive with HTTP 200, so create_item returns the raw
  body and leaves interpretation to the write coordinator

Important:
- This client is the ONLY place that talks to Monday.com.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from src.integrations.clients.real_http.http_utils import request_json
from src.integrations.contracts.board import BoardWritePayload
from src.integrations.contracts.interfaces import BoardClient
from src.integrations.errors import ConfigurationError, UpstreamRejected
from src.integrations.policy.response_wrappers import MONDAY, extract_error_message, normalize_board_columns
from src.utils.config_loader import MondayConfig

logger = logging.getLogger(__name__)

BOARD_COLUMNS_QUERY = """
query ($boardIds: [ID!]) {
  boards(ids: $boardIds) {
    columns {
      id
      title
      type
      settings_str
    }
  }
}
"""

CREATE_ITEM_MUTATION = """
mutation ($boardId: ID!, $itemName: String!, $columnValues: JSON!) {
  create_item(board_id: $boardId, item_name: $itemName, column_values: $columnValues) {
    id
    name
  }
}
"""


class MondayBoardClient(BoardClient):
    def __init__(self, config: MondayConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self.transport = transport

    def ensure_configured(self) -> None:
        if not self.config.api_token:
            raise ConfigurationError("MONDAY_API_TOKEN is not configured.", system=MONDAY)
        if not self.config.board_id:
            raise ConfigurationError("MONDAY_BOARD_ID is not configured.", system=MONDAY)

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": self.config.api_token or "",
        }

    async def _graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        self.ensure_configured()
        return await request_json(
            "POST",
            self.config.api_url,
            system=MONDAY,
            label="Monday.com",
            headers=self._headers(),
            json={"query": query, "variables": variables},
            timeout_seconds=self.config.timeout_seconds,
            transport=self.transport,
        )

    async def fetch_columns(self) -> List[Dict[str, Any]]:
        data = await self._graphql(BOARD_COLUMNS_QUERY, {"boardIds": [self.config.board_id]})
        if data.get("errors") and not data.get("data"):
            message = extract_error_message(data, default="Monday.com schema query failed")
            logger.error("GraphQL error in Monday.com schema query: %s", data["errors"])
            raise UpstreamRejected(message, system=MONDAY, payload=data)
        return [column.model_dump() for column in normalize_board_columns(data)]

    async def create_item(self, item_name: str, column_values: BoardWritePayload) -> Dict[str, Any]:
        variables = {
            "boardId": self.config.board_id,
            "itemName": item_name,
            "columnValues": json.dumps(column_values),
        }
        logger.info("Creating Monday.com item on board %s", self.config.board_id)
        return await self._graphql(CREATE_ITEM_MUTATION, variables)
