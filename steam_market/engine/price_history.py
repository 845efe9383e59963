"""
Steam Market — Price-History Tuple Parser

/market/pricehistory returns its series as an array of 3-element arrays:

    "prices": [
        ["Mar 01 2021 01: +0", 12.5, "3"],
        ...
    ]

The element order has been observed to vary, so roles are assigned by value
type and fill order instead of by index:

    string, while date is empty  -> date
    any later string             -> count
    number                       -> price

A tuple is kept only if it ends up with exactly one number and two strings.
Anything else is skipped without failing the series.
"""

from __future__ import annotations

from typing import Any

import structlog

from steam_market.engine.decoder import JsonKind, decode_json, kind_of
from steam_market.errors import CannotLoadPrices, InvalidPriceResponse
from steam_market.models.market import PriceHistory, PricePoint

logger = structlog.get_logger(__name__)


class _TupleAccumulator:
    """Fills PricePoint roles from a single tuple, tracking what was seen."""

    def __init__(self) -> None:
        self.date = ""
        self.count = ""
        self.price = 0.0
        self.strings = 0
        self.numbers = 0

    def feed(self, value: Any) -> None:
        kind = kind_of(value)
        if kind is JsonKind.STRING:
            if not self.date:
                self.date = value
            else:
                self.count = value
            self.strings += 1
        elif kind is JsonKind.NUMBER:
            self.price = float(value)
            self.numbers += 1

    @property
    def well_formed(self) -> bool:
        return self.strings == 2 and self.numbers == 1

    def build(self) -> PricePoint:
        return PricePoint(date=self.date, price=self.price, count=self.count)


def parse_price_point(entry: Any) -> PricePoint | None:
    """Decode one tuple, or return None if it is not a well-formed sample."""
    if kind_of(entry) is not JsonKind.ARRAY:
        return None

    acc = _TupleAccumulator()
    for value in entry:
        acc.feed(value)

    if not acc.well_formed:
        return None
    return acc.build()


def parse_price_points(prices: Any) -> list[PricePoint]:
    """
    Decode the `prices` payload into an ordered series.

    Args:
        prices: The decoded `prices` value; must be a JSON array.

    Returns:
        One PricePoint per well-formed tuple, in input order.

    Raises:
        CannotLoadPrices: `prices` is absent or not an array.
    """
    if kind_of(prices) is not JsonKind.ARRAY:
        raise CannotLoadPrices()

    points: list[PricePoint] = []
    skipped = 0
    for entry in prices:
        point = parse_price_point(entry)
        if point is None:
            skipped += 1
            continue
        points.append(point)

    if skipped:
        logger.debug(
            "price_history_tuples_skipped",
            skipped=skipped,
            kept=len(points),
            source="price_history",
        )
    return points


def parse_price_history(raw: bytes | str) -> PriceHistory:
    """
    Decode a full /market/pricehistory body.

    Raises:
        DecodeError: body is not JSON.
        InvalidPriceResponse: body is JSON but not a `{"success": bool}` object.
        CannotLoadPrices: success is false, or `prices` is absent / not an array.
    """
    document = decode_json(raw)
    if kind_of(document) is not JsonKind.OBJECT:
        raise InvalidPriceResponse()

    success = document.get("success")
    if kind_of(success) is not JsonKind.BOOLEAN:
        raise InvalidPriceResponse()
    if not success:
        raise CannotLoadPrices()

    prefix = document.get("price_prefix")
    suffix = document.get("price_suffix")
    return PriceHistory(
        price_prefix=prefix if isinstance(prefix, str) else "",
        price_suffix=suffix if isinstance(suffix, str) else "",
        prices=parse_price_points(document.get("prices")),
    )
