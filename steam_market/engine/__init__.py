from steam_market.engine.app_stats import extract_app_context_json, extract_app_stats, parse_app_stats
from steam_market.engine.cursor import Continue, Cursor, Terminal, decode_cursor, resolve_cursor
from steam_market.engine.inventory_merge import InventoryPage, merge_inventory, parse_inventory_page
from steam_market.engine.price_history import parse_price_history, parse_price_points
from steam_market.engine.search_results import map_search_result, parse_search_response

__all__ = [
    "Continue",
    "Cursor",
    "InventoryPage",
    "Terminal",
    "decode_cursor",
    "extract_app_context_json",
    "extract_app_stats",
    "map_search_result",
    "merge_inventory",
    "parse_app_stats",
    "parse_inventory_page",
    "parse_price_history",
    "parse_price_points",
    "parse_search_response",
    "resolve_cursor",
]
