"""
Steam Market — Community Market Client

One method per market endpoint: price history, price overview, search, sell,
buy order and buy-order cancellation. Requests go through the Transport;
bodies are handed to the engine parsers. Nothing is cached and no order state
is tracked locally.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import Any
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from steam_market.config import settings
from steam_market.engine.decoder import JsonKind, decode_envelope, decode_json, expect
from steam_market.engine.price_history import parse_price_history
from steam_market.engine.search_results import parse_search_response
from steam_market.errors import CannotLoadPrices, DecodeError, OrderRejected
from steam_market.models.inventory import InventoryAsset
from steam_market.models.market import (
    BuyOrderResult,
    PriceHistory,
    PriceOverview,
    PricePoint,
    SearchEnvelope,
    SearchResult,
    SellResult,
)
from steam_market.transport import Transport, issue_ok

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
PRICE_HISTORY_PATH = "/market/pricehistory/"
PRICE_OVERVIEW_PATH = "/market/priceoverview/"
SEARCH_PATH = "/market/search/render/"
SELL_PATH = "/market/sellitem/"
CREATE_BUY_ORDER_PATH = "/market/createbuyorder/"
CANCEL_BUY_ORDER_PATH = "/market/cancelbuyorder/"

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}
BUY_ORDER_OK = 1


def _validate(model: type[BaseModel], document: Any) -> Any:
    """pydantic validation with failures reported as DecodeError."""
    try:
        return model.model_validate(document)
    except ValidationError as e:
        raise DecodeError(f"invalid {model.__name__} response: {e}") from e


def price_to_cents(price_total: Decimal | float | str) -> int:
    """Whole cents for a currency amount, truncated. Never goes through float math."""
    cents = Decimal(str(price_total)) * 100
    if cents < 0:
        raise ValueError(f"price_total must be non-negative, got {price_total}")
    return int(cents.quantize(Decimal("1"), rounding=ROUND_DOWN))


def listing_url(base_url: str, app_id: int, market_hash_name: str) -> str:
    return f"{base_url}/market/listings/{app_id}/{quote(market_hash_name, safe='')}"


class MarketClient:
    """
    Client for the Steam Community Market endpoints.

    Usage:
        with HttpxTransport() as transport:
            market = MarketClient(transport)
            envelope, results = market.search(730, "redline")
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _get(self, path: str, params: dict[str, Any]) -> bytes:
        return issue_ok(self._transport, "GET", str(httpx.URL(path, params=params)))

    def _post(self, path: str, form: dict[str, str], headers: dict[str, str] | None = None) -> bytes:
        return issue_ok(self._transport, "POST", path, form=form, headers={**FORM_HEADERS, **(headers or {})})

    # -----------------------------------------------------------------------
    # Prices
    # -----------------------------------------------------------------------

    def get_price_history_details(self, app_id: int, market_hash_name: str) -> PriceHistory:
        """
        Fetch the median-price series for an item, with its currency affixes.

        Raises:
            TransportError, HTTPStatusError, DecodeError,
            InvalidPriceResponse, CannotLoadPrices
        """
        logger.info("market_price_history_fetch", app_id=app_id, market_hash_name=market_hash_name)

        body = self._get(PRICE_HISTORY_PATH, {"appid": app_id, "market_hash_name": market_hash_name})
        history = parse_price_history(body)

        logger.info(
            "market_price_history_fetch_complete",
            app_id=app_id,
            market_hash_name=market_hash_name,
            points=len(history.prices),
        )
        return history

    def get_price_history(self, app_id: int, market_hash_name: str) -> list[PricePoint]:
        """Price-history series only, in upstream order."""
        return self.get_price_history_details(app_id, market_hash_name).prices

    def get_price_overview(
        self,
        app_id: int,
        country: str,
        currency: str,
        market_hash_name: str,
    ) -> PriceOverview:
        """
        Fetch lowest / median price and volume for an item.

        Args:
            app_id: Steam app id (e.g. 730).
            country: ISO country code (e.g. "US").
            currency: Steam currency id (e.g. "1" for USD).
            market_hash_name: Item hash name.
        """
        logger.info(
            "market_price_overview_fetch",
            app_id=app_id,
            country=country,
            currency=currency,
            market_hash_name=market_hash_name,
        )

        body = self._get(
            PRICE_OVERVIEW_PATH,
            {
                "appid": app_id,
                "country": country,
                "currency": currency,
                "market_hash_name": market_hash_name,
            },
        )
        return _validate(PriceOverview, decode_envelope(body, CannotLoadPrices))

    # -----------------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------------

    def search(
        self,
        app_id: int,
        query: str,
        offset: int = 0,
        count: int | None = None,
    ) -> tuple[SearchEnvelope, list[SearchResult]]:
        """
        Run one market search page.

        Any result with a missing or mistyped field fails the whole call.

        Returns:
            (envelope with start / pagesize / total_count, results in order)
        """
        count = count if count is not None else settings.SEARCH_PAGE_SIZE
        logger.info("market_search", app_id=app_id, query=query, offset=offset, count=count)

        body = self._get(
            SEARCH_PATH,
            {"norender": 1, "appid": app_id, "query": query, "start": offset, "count": count},
        )
        envelope, results = parse_search_response(body)

        logger.info(
            "market_search_complete",
            app_id=app_id,
            query=query,
            total_count=envelope.total_count,
            results_count=len(results),
        )
        return envelope, results

    # -----------------------------------------------------------------------
    # Orders
    # -----------------------------------------------------------------------

    def sell_item(self, asset: InventoryAsset, amount: int, price: int) -> SellResult:
        """
        List an inventory asset for sale.

        Args:
            asset: The asset to list.
            amount: Stack size to list.
            price: Price the seller receives, in cents.

        Raises:
            OrderRejected: the service answered success=false.
        """
        logger.info(
            "market_sell_item",
            asset_id=asset.asset_id,
            app_id=asset.app_id,
            context_id=asset.context_id,
            amount=amount,
            price=price,
        )

        body = self._post(
            SELL_PATH,
            {
                "amount": str(amount),
                "appid": str(asset.app_id),
                "assetid": str(asset.asset_id),
                "contextid": str(asset.context_id),
                "price": str(price),
            },
        )
        document = expect(decode_json(body), JsonKind.OBJECT, "<envelope>")
        if document.get("success") is not True:
            message = document.get("message")
            raise OrderRejected(message=message if isinstance(message, str) else None)

        result = _validate(SellResult, document)
        logger.info(
            "market_sell_item_complete",
            asset_id=asset.asset_id,
            requires_confirmation=result.requires_confirmation,
        )
        return result

    def place_buy_order(
        self,
        app_id: int,
        price_total: Decimal | float | str,
        quantity: int,
        currency: str,
        market_hash_name: str,
    ) -> BuyOrderResult:
        """
        Create a buy order.

        Args:
            price_total: Total for all units, in currency units (sent as cents).

        Raises:
            OrderRejected: the service answered with an error code other than 1.
        """
        cents = price_to_cents(price_total)
        logger.info(
            "market_buy_order",
            app_id=app_id,
            market_hash_name=market_hash_name,
            price_total_cents=cents,
            quantity=quantity,
            currency=currency,
        )

        body = self._post(
            CREATE_BUY_ORDER_PATH,
            {
                "appid": str(app_id),
                "currency": currency,
                "market_hash_name": market_hash_name,
                "price_total": str(cents),
                "quantity": str(quantity),
            },
            headers={"Referer": listing_url(self._transport.base_url, app_id, market_hash_name)},
        )
        result: BuyOrderResult = _validate(BuyOrderResult, decode_json(body))
        if result.success != BUY_ORDER_OK:
            logger.warning(
                "market_buy_order_rejected",
                code=result.success,
                message=result.message,
                market_hash_name=market_hash_name,
            )
            raise OrderRejected(code=result.success, message=result.message or None)

        logger.info("market_buy_order_complete", buy_orderid=result.buy_orderid)
        return result

    def cancel_buy_order(self, order_id: int) -> None:
        """
        Cancel a buy order.

        The upstream status is surfaced as-is on every call; cancelling an
        already-cancelled order is not special-cased here.
        """
        logger.info("market_cancel_buy_order", buy_orderid=order_id)
        self._post(
            CANCEL_BUY_ORDER_PATH,
            {"buy_orderid": str(order_id)},
            headers={"Referer": f"{self._transport.base_url}/market"},
        )
