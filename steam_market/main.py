"""
Steam Market — Command-Line Entrypoint

Configures structlog and runs one client call, printing the result as JSON.

Run via:
    python -m steam_market.main price-history --app-id 730 --hash-name "AK-47 | Redline (Field-Tested)"
    python -m steam_market.main search --app-id 730 --query redline --count 10
    python -m steam_market.main inventory --steam-id 76561197960287930 --app-id 730 --context-id 2
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

import structlog

from steam_market.config import settings
from steam_market.errors import SteamMarketError
from steam_market.pipeline.inventory import InventoryClient
from steam_market.pipeline.market import MarketClient
from steam_market.transport import HttpxTransport, Transport


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def _configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output on stderr.

    stdout is reserved for command results.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Configure stdlib logging first (for httpx and other libraries)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="steam_market",
        description="Query the Steam Community Market and inventories.",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="DEBUG | INFO | WARNING | ERROR")
    commands = parser.add_subparsers(dest="command", required=True)

    history = commands.add_parser("price-history", help="Median price series for an item.")
    history.add_argument("--app-id", type=int, required=True)
    history.add_argument("--hash-name", required=True)

    overview = commands.add_parser("price-overview", help="Lowest / median price and volume.")
    overview.add_argument("--app-id", type=int, required=True)
    overview.add_argument("--hash-name", required=True)
    overview.add_argument("--country", default=settings.DEFAULT_COUNTRY)
    overview.add_argument("--currency", default=settings.DEFAULT_CURRENCY)

    search = commands.add_parser("search", help="One page of market search results.")
    search.add_argument("--app-id", type=int, required=True)
    search.add_argument("--query", default="")
    search.add_argument("--offset", type=int, default=0)
    search.add_argument("--count", type=int, default=settings.SEARCH_PAGE_SIZE)

    inventory = commands.add_parser("inventory", help="Every asset in an inventory bucket.")
    inventory.add_argument("--steam-id", type=int, required=True)
    inventory.add_argument("--app-id", type=int, required=True)
    inventory.add_argument("--context-id", type=int, required=True)
    inventory.add_argument("--tradable-only", action="store_true")

    stats = commands.add_parser("app-stats", help="Per-app inventory counts for a user.")
    stats.add_argument("--steam-id", type=int, required=True)

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace, transport: Transport) -> Any:
    """Dispatch one command and return a JSON-serializable result."""
    market = MarketClient(transport)
    inventory = InventoryClient(transport)

    if args.command == "price-history":
        history = market.get_price_history_details(args.app_id, args.hash_name)
        return history.model_dump()
    if args.command == "price-overview":
        overview = market.get_price_overview(args.app_id, args.country, args.currency, args.hash_name)
        return overview.model_dump()
    if args.command == "search":
        envelope, results = market.search(args.app_id, args.query, args.offset, args.count)
        return {"envelope": envelope.model_dump(), "results": [r.model_dump() for r in results]}
    if args.command == "inventory":
        assets = inventory.get_inventory(args.steam_id, args.app_id, args.context_id, args.tradable_only)
        return [a.model_dump() for a in sorted(assets, key=lambda a: a.asset_id)]
    if args.command == "app-stats":
        stats = inventory.get_app_stats(args.steam_id)
        return {key: value.model_dump() for key, value in stats.items()}
    raise ValueError(f"Unknown command: {args.command}")


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(log_level=args.log_level)
    logger = structlog.get_logger(__name__)

    try:
        with HttpxTransport() as transport:
            result = run_command(args, transport)
    except SteamMarketError as e:
        logger.error(
            "steam_market_command_failed",
            command=args.command,
            error=str(e),
            error_type=type(e).__name__,
        )
        return 1

    json.dump(result, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
