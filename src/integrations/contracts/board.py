"""
Work-management board contracts (Monday.com).

Defines the shapes the board client, the field mapper and the write
coordinator exchange:
- DropdownOption: one selectable value of a dropdown column
- BoardOptions: the option universe for the two classification columns
- BoardItemWriteResult: outcome of creating one item on the board

Both clients/mocks/monday.py and clients/real_http/monday.py speak in these
types, so the coordinator never sees raw GraphQL payloads except for
diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Column id -> column value. Values are either plain strings or the
# structured shapes Monday expects ({"email", "text"}, {"ids": [...]}).
BoardWritePayload = Dict[str, Any]


@dataclass(frozen=True)
class DropdownOption:
    id: int
    name: str


@dataclass
class BoardOptions:
    area_of_expertise: List[DropdownOption] = field(default_factory=list)
    labels: List[DropdownOption] = field(default_factory=list)


@dataclass
class BoardItemWriteResult:
    """
    Either a created item (item_id + item_name) or a failure reason.

    attempted_payload is kept for operator logs only and must not be returned
    to end users verbatim.
    """

    success: bool
    item_id: Optional[str] = None
    item_name: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    attempted_payload: BoardWritePayload = field(default_factory=dict)
