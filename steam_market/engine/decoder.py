"""
Steam Market — Tagged-Value Decoder

Checked extraction of typed values from untyped JSON. Every other parser in
the engine goes through these helpers, so a missing key or a value of the
wrong type surfaces as a TypeMismatch naming the field, the expected kind and
the kind actually found, never as a KeyError or a silently wrong value.

Python's json module maps JSON onto dict / list / str / int / float / bool /
None. bool is a subclass of int, so it is checked first everywhere: `true` is
never a number.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping

import structlog

from steam_market.errors import DecodeError, DomainFailure, TypeMismatch

logger = structlog.get_logger(__name__)

MISSING = "missing"


class JsonKind(str, Enum):
    """The six JSON value kinds."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    """Classify a decoded JSON value."""
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise DecodeError(f"not a JSON value: {type(value).__name__}")


def expect(value: Any, kind: JsonKind, field: str) -> Any:
    """Return `value` if it is of `kind`, else raise TypeMismatch."""
    actual = kind_of(value)
    if actual is not kind:
        raise TypeMismatch(field, kind.value, actual.value)
    return value


def require(mapping: Mapping[str, Any], key: str, kind: JsonKind) -> Any:
    """Look up `key` and check its kind. A missing key reports actual='missing'."""
    if key not in mapping:
        raise TypeMismatch(key, kind.value, MISSING)
    return expect(mapping[key], kind, key)


def require_string(mapping: Mapping[str, Any], key: str) -> str:
    return require(mapping, key, JsonKind.STRING)


def require_number(mapping: Mapping[str, Any], key: str) -> float:
    return float(require(mapping, key, JsonKind.NUMBER))


def require_bool(mapping: Mapping[str, Any], key: str) -> bool:
    return require(mapping, key, JsonKind.BOOLEAN)


def require_object(mapping: Mapping[str, Any], key: str) -> dict[str, Any]:
    return require(mapping, key, JsonKind.OBJECT)


def require_array(mapping: Mapping[str, Any], key: str) -> list[Any]:
    return require(mapping, key, JsonKind.ARRAY)


def as_int(value: Any, field: str) -> int:
    """
    Coerce an integral JSON number to int.

    Accepts 12 and 12.0; rejects 12.5, booleans and every non-number.
    """
    number = expect(value, JsonKind.NUMBER, field)
    if isinstance(number, float):
        if not number.is_integer():
            raise TypeMismatch(field, "integer", "fractional number")
        return int(number)
    return number


def require_int(mapping: Mapping[str, Any], key: str) -> int:
    if key not in mapping:
        raise TypeMismatch(key, "integer", MISSING)
    return as_int(mapping[key], key)


def as_id(value: Any, field: str) -> int:
    """
    Decode a numeric identifier.

    The service sends 64-bit IDs as decimal strings ("5412345678") and small
    ones as plain numbers; both are accepted.
    """
    kind = kind_of(value)
    if kind is JsonKind.STRING:
        if not (value.isascii() and value.isdigit()):
            raise TypeMismatch(field, "numeric id", f"string {value!r}")
        return int(value)
    if kind is JsonKind.NUMBER:
        return as_int(value, field)
    raise TypeMismatch(field, "numeric id", kind.value)


def require_id(mapping: Mapping[str, Any], key: str) -> int:
    if key not in mapping:
        raise TypeMismatch(key, "numeric id", MISSING)
    return as_id(mapping[key], key)


def decode_json(raw: bytes | str) -> Any:
    """Parse a response body, raising DecodeError on malformed input."""
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"response is not valid JSON: {e}") from e


def decode_envelope(
    raw: bytes | str,
    failure: type[DomainFailure],
) -> dict[str, Any]:
    """
    Decode a `{"success": bool, ...}` envelope.

    Raises DecodeError when the body is not a JSON object with a boolean
    success flag, and `failure` when the flag is false. The returned object
    is only ever the payload of a successful response.
    """
    document = decode_json(raw)
    envelope = expect(document, JsonKind.OBJECT, "<envelope>")
    if not require_bool(envelope, "success"):
        logger.debug("envelope_unsuccessful", failure=failure.__name__)
        raise failure()
    return envelope
