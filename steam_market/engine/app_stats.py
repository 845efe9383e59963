"""
Steam Market — Inventory App-Stats Extractor

The profile inventory page has no JSON endpoint for its app list; the data is
a script assignment embedded in the HTML:

    var g_rgAppContextData = {"730":{"appid":730,"name":"Counter-Strike 2",...}};

Extraction is two independent stages so each failure stays distinguishable:
1. pattern match the assignment      -> CannotLoadInventory if absent
2. parse the captured text as JSON   -> DecodeError if malformed
"""

from __future__ import annotations

import re

import structlog
from pydantic import ValidationError

from steam_market.engine.decoder import JsonKind, decode_json, expect
from steam_market.errors import CannotLoadInventory, DecodeError
from steam_market.models.inventory import AppStats

logger = structlog.get_logger(__name__)

APP_CONTEXT_PATTERN = re.compile(r"var g_rgAppContextData = (.*?);")


def extract_app_context_json(html: str) -> str:
    """Stage 1: return the raw JSON text assigned to g_rgAppContextData."""
    match = APP_CONTEXT_PATTERN.search(html)
    if match is None:
        logger.warning("app_stats_pattern_not_found", html_length=len(html), source="app_stats")
        raise CannotLoadInventory("inventory page has no g_rgAppContextData assignment")
    return match.group(1)


def parse_app_stats(payload: str) -> dict[str, AppStats]:
    """Stage 2: decode the captured text into per-app stats keyed by appid string."""
    document = expect(decode_json(payload), JsonKind.OBJECT, "g_rgAppContextData")
    try:
        return {key: AppStats.model_validate(value) for key, value in document.items()}
    except ValidationError as e:
        raise DecodeError(f"invalid app stats entry: {e}") from e


def extract_app_stats(html: str) -> dict[str, AppStats]:
    """Run both stages over an inventory page."""
    stats = parse_app_stats(extract_app_context_json(html))
    logger.debug("app_stats_extracted", apps=len(stats), source="app_stats")
    return stats
