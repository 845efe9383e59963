"""Tests for the command-line entrypoint (steam_market/main.py)."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest
import structlog
from structlog.testing import capture_logs

import steam_market.main as main_module
from payloads import inventory_html, inventory_page, search_item, search_response
from steam_market.main import main, parse_args, run_command

STEAM_ID = 76561197960287930


@pytest.fixture
def logs():
    """Capture structlog events instead of configuring JSON output."""
    with patch.object(main_module, "_configure_logging"), capture_logs() as captured:
        yield captured


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class TestParseArgs:
    def test_overview_defaults_from_settings(self) -> None:
        args = parse_args(["price-overview", "--app-id", "730", "--hash-name", "Case Key"])
        assert args.command == "price-overview"
        assert args.country == main_module.settings.DEFAULT_COUNTRY
        assert args.currency == main_module.settings.DEFAULT_CURRENCY

    def test_inventory(self) -> None:
        args = parse_args(
            ["inventory", "--steam-id", str(STEAM_ID), "--app-id", "753", "--context-id", "6", "--tradable-only"]
        )
        assert (args.steam_id, args.app_id, args.context_id, args.tradable_only) == (STEAM_ID, 753, 6, True)

    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args([])


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    def test_search(self, transport) -> None:
        transport.queue(search_response([search_item()]))
        args = parse_args(["search", "--app-id", "730", "--query", "redline", "--count", "10"])

        result = run_command(args, transport)

        assert result["envelope"]["total_count"] == 1532
        assert result["results"][0]["hash_name"] == "AK-47 | Redline (Field-Tested)"

    def test_inventory_is_sorted_by_asset_id(self, transport) -> None:
        transport.queue(
            inventory_page(
                {"30": ("1", "0"), "10": ("1", "0"), "20": ("1", "0")},
                {"1_0": "Case"},
            )
        )
        args = parse_args(["inventory", "--steam-id", str(STEAM_ID), "--app-id", "730", "--context-id", "2"])

        result = run_command(args, transport)

        assert [a["asset_id"] for a in result] == [10, 20, 30]
        assert {a["name"] for a in result} == {"Case"}

    def test_app_stats(self, transport) -> None:
        transport.queue(inventory_html())
        result = run_command(parse_args(["app-stats", "--steam-id", str(STEAM_ID)]), transport)
        assert result["730"]["contexts"]["2"]["name"] == "Backpack"


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_price_history_prints_json(self, mock_steam, logs, capsys) -> None:
        mock_steam.get("/market/pricehistory/").mock(
            return_value=httpx.Response(
                200,
                json={"success": True, "price_prefix": "$", "price_suffix": "", "prices": [[12.5, "Mar 1 2021", "3"]]},
            )
        )

        code = main(["price-history", "--app-id", "730", "--hash-name", "AK-47 | Redline (Field-Tested)"])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["prices"] == [{"date": "Mar 1 2021", "price": 12.5, "count": "3"}]

    def test_failure_exits_1_and_logs(self, mock_steam, logs, capsys) -> None:
        mock_steam.get("/market/priceoverview/").mock(return_value=httpx.Response(200, json={"success": False}))

        code = main(["price-overview", "--app-id", "730", "--hash-name", "Case Key"])

        assert code == 1
        assert capsys.readouterr().out == ""
        failure = [e for e in logs if e["event"] == "steam_market_command_failed"]
        assert failure[0]["error_type"] == "CannotLoadPrices"
        assert failure[0]["command"] == "price-overview"

    def test_http_error_exits_1(self, mock_steam, logs) -> None:
        mock_steam.get(f"/profiles/{STEAM_ID}/inventory/json/730/2/").mock(return_value=httpx.Response(403))
        code = main(["inventory", "--steam-id", str(STEAM_ID), "--app-id", "730", "--context-id", "2"])
        assert code == 1
        assert logs[-1]["error_type"] == "HTTPStatusError"


class TestConfigureLogging:
    def test_json_lines_on_stderr(self, capsys) -> None:
        main_module._configure_logging("DEBUG")
        structlog.get_logger("test").info("probe_event", source="test")

        captured = capsys.readouterr()
        assert captured.out == ""
        line = json.loads(captured.err.strip().splitlines()[-1])
        assert line["event"] == "probe_event"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_level_filtering(self, capsys) -> None:
        main_module._configure_logging("WARNING")
        structlog.get_logger("test").info("hidden_event")
        assert "hidden_event" not in capsys.readouterr().err
