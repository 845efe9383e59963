"""
Models package — export all record types.
"""

from steam_market.models.inventory import (
    AppStats,
    Description,
    InventoryAsset,
    InventoryContext,
)
from steam_market.models.market import (
    BuyOrderResult,
    PriceHistory,
    PriceOverview,
    PricePoint,
    SearchEnvelope,
    SearchResult,
    SellResult,
)

__all__ = [
    "AppStats",
    "BuyOrderResult",
    "Description",
    "InventoryAsset",
    "InventoryContext",
    "PriceHistory",
    "PriceOverview",
    "PricePoint",
    "SearchEnvelope",
    "SearchResult",
    "SellResult",
]
