"""
Steam Market — Error Taxonomy

Every failure the clients raise derives from SteamMarketError, so callers
can branch on the failure class without matching message strings:

    SteamMarketError
    ├── TransportError          network / DNS / timeout from the transport
    ├── HTTPStatusError         any non-200 response
    ├── DecodeError             body is not JSON or has the wrong shape
    │   └── TypeMismatch        a specific field has the wrong JSON type
    ├── SchemaViolation         a cursor had a type we refuse to guess about
    └── DomainFailure           envelope decoded but the service said no
        ├── CannotLoadPrices
        ├── InvalidPriceResponse
        ├── CannotLoadInventory
        └── OrderRejected
"""

from __future__ import annotations

from typing import Any


class SteamMarketError(Exception):
    """Base class for every error raised by steam_market."""


class TransportError(SteamMarketError):
    """The HTTP collaborator failed before a response was received."""


class HTTPStatusError(SteamMarketError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"http error: {status_code}" + (f" ({url})" if url else ""))


class DecodeError(SteamMarketError):
    """Payload did not parse as JSON or did not match the expected envelope."""


class TypeMismatch(DecodeError):
    """A field was missing or held a JSON value of the wrong type."""

    def __init__(self, field: str, expected: str, actual: str) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"field {field!r}: expected {expected}, got {actual}")


class SchemaViolation(SteamMarketError):
    """A polymorphic field carried a type outside its known variants."""

    def __init__(self, field: str, actual: str, value: Any = None) -> None:
        self.field = field
        self.actual = actual
        self.value = value
        super().__init__(f"unexpected type for {field}: {actual} ({value!r})")


class DomainFailure(SteamMarketError):
    """The envelope decoded, but the service reported failure."""

    default_message = "request was rejected by the service"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class CannotLoadPrices(DomainFailure):
    default_message = "unable to load prices at this time"


class InvalidPriceResponse(DomainFailure):
    default_message = "invalid market pricehistory response"


class CannotLoadInventory(DomainFailure):
    default_message = "unable to load inventory at this time"


class OrderRejected(DomainFailure):
    """A sell or buy order was refused; carries the upstream code and message."""

    default_message = "order was rejected"

    def __init__(self, code: int | None = None, message: str | None = None) -> None:
        self.code = code
        self.upstream_message = message or ""
        text = message or self.default_message
        if code is not None:
            text = f"{text} (code {code})"
        super().__init__(text)
