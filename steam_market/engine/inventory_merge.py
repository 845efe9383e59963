"""
Steam Market — Inventory Merge Engine

The legacy inventory endpoint splits every page into two maps keyed by
runtime identifiers:

    rgInventory:    {"5412345678": {"id": "5412345678", "classid": "310776",
                                    "instanceid": "302028390", ...}, ...}
    rgDescriptions: {"310776_302028390": {"name": ..., "market_name": ...,
                                         "market_hash_name": ...}, ...}

Assets carry no names; descriptions carry no asset ids. They are joined on
the composite key "<classid>_<instanceid>". Descriptions are page-local, so
the join happens once per page.

Output order follows the iteration order of the asset mapping and is NOT
part of the contract. Sort in the caller if a stable order is needed.
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog
from pydantic import BaseModel, ConfigDict

from steam_market.engine.cursor import Cursor, resolve_cursor
from steam_market.engine.decoder import (
    JsonKind,
    as_id,
    decode_envelope,
    expect,
    kind_of,
    require_id,
    require_string,
)
from steam_market.errors import CannotLoadInventory, TypeMismatch
from steam_market.models.inventory import Description, InventoryAsset

logger = structlog.get_logger(__name__)


class InventoryPage(BaseModel):
    """One decoded page: unjoined assets, page-local descriptions, cursor."""

    model_config = ConfigDict(frozen=True)

    assets: dict[str, InventoryAsset]
    descriptions: dict[str, Description]
    cursor: Cursor


def merge_inventory(
    assets_by_id: Mapping[str, InventoryAsset],
    descriptions_by_key: Mapping[str, Description],
) -> list[InventoryAsset]:
    """
    Attach description names to assets.

    Every asset appears in the output exactly once. An asset without a
    matching description is kept with empty name fields.
    """
    merged: list[InventoryAsset] = []
    unmatched = 0

    for asset in assets_by_id.values():
        desc = descriptions_by_key.get(asset.description_key)
        if desc is None:
            unmatched += 1
            merged.append(asset)
            continue
        merged.append(
            asset.model_copy(
                update={
                    "name": desc.name,
                    "market_name": desc.market_name,
                    "market_hash_name": desc.market_hash_name,
                }
            )
        )

    if unmatched:
        logger.debug(
            "inventory_assets_without_description",
            unmatched=unmatched,
            total=len(merged),
            source="inventory_merge",
        )
    return merged


def _keyed_section(document: Mapping[str, Any], key: str) -> dict[str, Any]:
    """
    Read a map-of-maps section.

    An empty inventory is serialized as `[]` rather than `{}`; that one case
    is accepted as an empty map.
    """
    if key not in document:
        raise TypeMismatch(key, JsonKind.OBJECT.value, "missing")
    section = document[key]
    if kind_of(section) is JsonKind.ARRAY and not section:
        return {}
    return expect(section, JsonKind.OBJECT, key)


def parse_asset(raw: Any, key: str, app_id: int, context_id: int) -> InventoryAsset:
    """Decode one rgInventory entry. app/context ids come from the request."""
    where = f"rgInventory[{key}]"
    entry = expect(raw, JsonKind.OBJECT, where)
    try:
        return InventoryAsset(
            asset_id=require_id(entry, "id"),
            class_id=require_id(entry, "classid"),
            instance_id=as_id(entry.get("instanceid", 0), "instanceid"),
            amount=as_id(entry.get("amount", 1), "amount"),
            app_id=app_id,
            context_id=context_id,
        )
    except TypeMismatch as e:
        raise TypeMismatch(f"{where}.{e.field}", e.expected, e.actual) from e


def parse_description(raw: Any, key: str) -> Description:
    where = f"rgDescriptions[{key}]"
    entry = expect(raw, JsonKind.OBJECT, where)
    try:
        return Description(
            name=require_string(entry, "name"),
            market_name=require_string(entry, "market_name"),
            market_hash_name=require_string(entry, "market_hash_name"),
        )
    except TypeMismatch as e:
        raise TypeMismatch(f"{where}.{e.field}", e.expected, e.actual) from e


def parse_inventory_page(raw: bytes | str, app_id: int, context_id: int) -> InventoryPage:
    """
    Decode one /inventory/json page.

    Raises:
        DecodeError / TypeMismatch: wrong shape.
        CannotLoadInventory: success is false.
        SchemaViolation: `more_start` has an unknown type.
    """
    document = decode_envelope(raw, CannotLoadInventory)

    assets = {
        key: parse_asset(value, key, app_id, context_id)
        for key, value in _keyed_section(document, "rgInventory").items()
    }
    descriptions = {
        key: parse_description(value, key)
        for key, value in _keyed_section(document, "rgDescriptions").items()
    }
    return InventoryPage(
        assets=assets,
        descriptions=descriptions,
        cursor=resolve_cursor(document),
    )
