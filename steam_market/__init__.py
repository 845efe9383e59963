"""Steam Community Market and inventory client."""

from steam_market.errors import (
    CannotLoadInventory,
    CannotLoadPrices,
    DecodeError,
    DomainFailure,
    HTTPStatusError,
    InvalidPriceResponse,
    OrderRejected,
    SchemaViolation,
    SteamMarketError,
    TransportError,
    TypeMismatch,
)

__version__ = "0.1.0"

__all__ = [
    "CannotLoadInventory",
    "CannotLoadPrices",
    "DecodeError",
    "DomainFailure",
    "HTTPStatusError",
    "InvalidPriceResponse",
    "OrderRejected",
    "SchemaViolation",
    "SteamMarketError",
    "TransportError",
    "TypeMismatch",
]
