"""
Steam Market — Pagination Cursor Resolver

The inventory endpoint reports "more available" in `more_start`, which is
either a boolean or a numeric offset:

    | more_start      | Cursor            |
    |:----------------|:------------------|
    | absent          | Terminal          |
    | true / false    | Terminal          |
    | 0               | Terminal          |
    | n > 0 (integer) | Continue(n)       |
    | anything else   | SchemaViolation   |

Any boolean terminates; its value is not consulted. An offset of 0 cannot be
told apart from "no more pages" upstream and is treated as terminal.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

import structlog
from pydantic import BaseModel, ConfigDict

from steam_market.engine.decoder import JsonKind, kind_of
from steam_market.errors import SchemaViolation

logger = structlog.get_logger(__name__)

CURSOR_FIELD = "more_start"


class Terminal(BaseModel):
    """No more pages."""

    model_config = ConfigDict(frozen=True)


class Continue(BaseModel):
    """Fetch the next page starting at `offset`."""

    model_config = ConfigDict(frozen=True)

    offset: int


Cursor = Union[Terminal, Continue]


def decode_cursor(value: Any) -> Cursor:
    """Resolve a raw cursor value: boolean first, then integer, else fail."""
    kind = kind_of(value)

    if kind is JsonKind.BOOLEAN:
        return Terminal()

    if kind is JsonKind.NUMBER:
        if isinstance(value, float):
            if not value.is_integer():
                raise SchemaViolation(CURSOR_FIELD, "fractional number", value)
            value = int(value)
        if value < 0:
            raise SchemaViolation(CURSOR_FIELD, "negative number", value)
        if value == 0:
            return Terminal()
        return Continue(offset=value)

    raise SchemaViolation(CURSOR_FIELD, kind.value, value)


def resolve_cursor(page: Mapping[str, Any]) -> Cursor:
    """Read the cursor from a decoded page; an absent field means Terminal."""
    if CURSOR_FIELD not in page:
        return Terminal()
    cursor = decode_cursor(page[CURSOR_FIELD])
    logger.debug("inventory_cursor_resolved", cursor=repr(cursor), source="cursor")
    return cursor
