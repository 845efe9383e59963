"""
Steam Market — Market Records

Value objects produced by the market endpoints. Each is built fresh per call
from values the engine has already type-checked, or validated directly from
a flat response with pydantic where the upstream schema is well-behaved.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """One sample of a price-history series."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(default="", description="Upstream date label, e.g. 'Mar 01 2021 01: +0'")
    price: float = Field(default=0.0, description="Median sale price at that point")
    count: str = Field(default="", description="Units sold, as the string the service sends")


class PriceHistory(BaseModel):
    """Full price-history response: currency affixes plus the ordered series."""

    price_prefix: str = ""
    price_suffix: str = ""
    prices: list[PricePoint] = Field(default_factory=list)


class PriceOverview(BaseModel):
    """Response of /market/priceoverview. Values are pre-formatted display strings."""

    success: bool
    lowest_price: str | None = None
    median_price: str | None = None
    volume: str | None = None


class SearchEnvelope(BaseModel):
    """Window metadata of a /market/search/render response."""

    success: bool
    start: int
    pagesize: int
    total_count: int
    searchdata: Any = None


class SearchResult(BaseModel):
    """A single market search hit."""

    model_config = ConfigDict(frozen=True)

    name: str
    hash_name: str
    sell_listings: float
    sell_price: float
    sell_price_text: str            # Price shown on the search result list
    app_icon: str
    app_name: str
    sale_price_text: str            # Cheapest listing available
    asset_description: Any = None   # Passed through uninterpreted


class SellResult(BaseModel):
    """Response of /market/sellitem."""

    success: bool
    requires_confirmation: int = 0
    needs_mobile_confirmation: bool = False
    needs_email_confirmation: bool = False
    email_domain: str = ""


class BuyOrderResult(BaseModel):
    """Response of /market/createbuyorder. `success` is an error code: 1 means OK."""

    success: int
    message: str = ""
    buy_orderid: int = 0
