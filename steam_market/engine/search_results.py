"""
Steam Market — Search Result Mapper

Maps /market/search/render/?norender=1 results onto SearchResult records.

Two kinds of fields, kept apart:
- eight required fields, extracted by exact key with exact JSON type. Any
  missing or mistyped field aborts the whole response;
- `asset_description`, carried through as-is and never inspected.

Fail-fast, not best-effort, for fields inside a result. Entries of `results`
that are not objects are skipped."""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from steam_market.engine.decoder import (
    JsonKind,
    as_int,
    decode_envelope,
    kind_of,
    require_number,
    require_string,
)
from steam_market.errors import CannotLoadPrices, TypeMismatch
from steam_market.models.market import SearchEnvelope, SearchResult

logger = structlog.get_logger(__name__)

STRING_FIELDS = (
    "name",
    "hash_name",
    "sell_price_text",
    "app_icon",
    "app_name",
    "sale_price_text",
)
NUMBER_FIELDS = ("sell_listings", "sell_price")
PASS_THROUGH_FIELD = "asset_description"


def map_search_result(item: Mapping[str, Any]) -> SearchResult:
    """Extract one search hit. Raises TypeMismatch on the first bad field."""
    values: dict[str, Any] = {key: require_string(item, key) for key in STRING_FIELDS}
    values.update({key: require_number(item, key) for key in NUMBER_FIELDS})
    values[PASS_THROUGH_FIELD] = item.get(PASS_THROUGH_FIELD)
    return SearchResult(**values)


def map_search_results(results: list[Any]) -> list[SearchResult]:
    """
    Map every object entry in order. Field errors are reported as `results[i].field`.

    Entries that are not objects are skipped.
    """
    mapped: list[SearchResult] = []
    skipped = 0
    for index, item in enumerate(results):
        if kind_of(item) is not JsonKind.OBJECT:
            skipped += 1
            continue
        try:
            mapped.append(map_search_result(item))
        except TypeMismatch as e:
            logger.warning(
                "search_result_rejected",
                index=index,
                field=e.field,
                expected=e.expected,
                actual=e.actual,
                source="search",
            )
            raise TypeMismatch(f"results[{index}].{e.field}", e.expected, e.actual) from e

    if skipped:
        logger.debug("search_results_skipped", skipped=skipped, kept=len(mapped), source="search")
    return mapped


def _window_int(document: Mapping[str, Any], key: str) -> int:
    """Page-window counts default to 0 when absent; a present value must be an integer."""
    if key not in document:
        return 0
    return as_int(document[key], key)


def parse_search_response(raw: bytes | str) -> tuple[SearchEnvelope, list[SearchResult]]:
    """
    Decode a full search response.

    Returns:
        (envelope metadata, results in upstream order)

    Raises:
        DecodeError / TypeMismatch: body or a result has the wrong shape.
        CannotLoadPrices: success is false or `results` is not an array.
    """
    document = decode_envelope(raw, CannotLoadPrices)

    results = document.get("results")
    if kind_of(results) is not JsonKind.ARRAY:
        raise CannotLoadPrices()

    envelope = SearchEnvelope(
        success=True,
        start=_window_int(document, "start"),
        pagesize=_window_int(document, "pagesize"),
        total_count=_window_int(document, "total_count"),
        searchdata=document.get("searchdata"),
    )
    return envelope, map_search_results(results)
