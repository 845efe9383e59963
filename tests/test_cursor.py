"""Tests for the pagination cursor resolver (steam_market/engine/cursor.py)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from steam_market.engine.cursor import Continue, Terminal, decode_cursor, resolve_cursor
from steam_market.errors import SchemaViolation, SteamMarketError


class TestTerminal:
    @pytest.mark.parametrize("value", [True, False])
    def test_any_boolean_terminates(self, value: bool) -> None:
        """The boolean's value is not consulted."""
        assert decode_cursor(value) == Terminal()

    @pytest.mark.parametrize("value", [0, 0.0])
    def test_zero_terminates(self, value) -> None:
        assert decode_cursor(value) == Terminal()

    def test_absent_field_terminates(self) -> None:
        assert resolve_cursor({"success": True}) == Terminal()


class TestContinue:
    @pytest.mark.parametrize("value, offset", [(1, 1), (2500, 2500), (5000.0, 5000)])
    def test_positive_integer(self, value, offset: int) -> None:
        cursor = decode_cursor(value)
        assert cursor == Continue(offset=offset)
        assert isinstance(cursor.offset, int)

    def test_resolve_reads_more_start(self) -> None:
        assert resolve_cursor({"more": True, "more_start": 2000}) == Continue(offset=2000)


class TestSchemaViolation:
    @pytest.mark.parametrize(
        "value, actual",
        [
            ("2000", "string"),
            (None, "null"),
            ({}, "object"),
            ([2000], "array"),
            (12.5, "fractional number"),
            (-1, "negative number"),
        ],
    )
    def test_unknown_types_are_rejected(self, value, actual: str) -> None:
        with pytest.raises(SchemaViolation) as exc_info:
            decode_cursor(value)
        assert exc_info.value.field == "more_start"
        assert exc_info.value.actual == actual
        assert "unexpected type for more_start" in str(exc_info.value)

    def test_explicit_null_is_not_absent(self) -> None:
        with pytest.raises(SchemaViolation):
            resolve_cursor({"more_start": None})

    def test_is_a_steam_market_error(self) -> None:
        with pytest.raises(SteamMarketError):
            decode_cursor("next")


class TestCursorValues:
    def test_cursors_are_immutable(self) -> None:
        cursor = Continue(offset=2000)
        with pytest.raises(ValidationError):
            cursor.offset = 4000

    def test_variants_never_compare_equal(self) -> None:
        assert Terminal() != Continue(offset=1)
        assert Continue(offset=1) == Continue(offset=1)

    def test_offset_must_be_an_integer(self) -> None:
        with pytest.raises(ValidationError):
            Continue(offset="next")
