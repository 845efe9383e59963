"""
Steam Market — Inventory Client

Fetches a user's inventory for one (app, context) bucket, following the
`more_start` cursor page by page, and reads the per-app stats embedded in the
profile inventory page.

Pages form a strict dependency chain (each offset comes from the previous
page's cursor), so they are fetched one after another. There is no page cap:
an upstream that never stops returning a continuation offset must be bounded
by the transport's timeout or by the caller.
"""

from __future__ import annotations

import httpx
import structlog

from steam_market.engine.app_stats import extract_app_stats
from steam_market.engine.cursor import Continue, Terminal
from steam_market.engine.inventory_merge import merge_inventory, parse_inventory_page
from steam_market.models.inventory import AppStats, InventoryAsset
from steam_market.transport import Transport, issue_ok

logger = structlog.get_logger(__name__)


def inventory_page_url(steam_id: int, app_id: int, context_id: int, start: int, tradable_only: bool) -> str:
    params: dict[str, int] = {"start": start}
    if tradable_only:
        params["trading"] = 1
    return str(httpx.URL(f"/profiles/{steam_id}/inventory/json/{app_id}/{context_id}/", params=params))


class InventoryClient:
    """
    Client for the community inventory endpoints.

    Usage:
        with HttpxTransport() as transport:
            inventory = InventoryClient(transport)
            assets = inventory.get_inventory(76561197960287930, 730, 2)
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get_inventory(
        self,
        steam_id: int,
        app_id: int,
        context_id: int,
        tradable_only: bool = False,
    ) -> list[InventoryAsset]:
        """
        Fetch every asset in an inventory bucket.

        Each page's assets are joined with that page's descriptions and
        appended in page order. Within a page, order is unspecified.

        Raises:
            TransportError, HTTPStatusError, DecodeError,
            CannotLoadInventory, SchemaViolation. Nothing accumulated from
            earlier pages is returned on failure.
        """
        logger.info(
            "inventory_fetch",
            steam_id=steam_id,
            app_id=app_id,
            context_id=context_id,
            tradable_only=tradable_only,
        )

        items: list[InventoryAsset] = []
        start = 0
        pages = 0

        while True:
            body = issue_ok(
                self._transport,
                "GET",
                inventory_page_url(steam_id, app_id, context_id, start, tradable_only),
            )
            page = parse_inventory_page(body, app_id, context_id)
            items.extend(merge_inventory(page.assets, page.descriptions))
            pages += 1

            logger.debug(
                "inventory_page_fetched",
                steam_id=steam_id,
                start=start,
                page_assets=len(page.assets),
                fetched_so_far=len(items),
            )

            if isinstance(page.cursor, Terminal):
                break
            assert isinstance(page.cursor, Continue)
            start = page.cursor.offset

        logger.info(
            "inventory_fetch_complete",
            steam_id=steam_id,
            app_id=app_id,
            context_id=context_id,
            pages=pages,
            total_assets=len(items),
        )
        return items

    def get_app_stats(self, steam_id: int) -> dict[str, AppStats]:
        """
        Per-app inventory stats for a user, keyed by appid string.

        Raises:
            CannotLoadInventory: the page carries no g_rgAppContextData.
            DecodeError: the embedded data is not valid JSON of the right shape.
        """
        logger.info("inventory_app_stats_fetch", steam_id=steam_id)

        body = issue_ok(self._transport, "GET", f"/profiles/{steam_id}/inventory")
        stats = extract_app_stats(body.decode("utf-8", errors="replace"))

        logger.info("inventory_app_stats_fetch_complete", steam_id=steam_id, apps=len(stats))
        return stats
