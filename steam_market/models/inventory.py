"""
Steam Market — Inventory Records
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InventoryAsset(BaseModel):
    """
    One item instance in a user's inventory.

    Name fields are empty until a matching Description is merged in.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: int
    instance_id: int = 0
    class_id: int
    app_id: int
    context_id: int
    amount: int = 1
    name: str = ""
    market_name: str = ""
    market_hash_name: str = ""

    @property
    def description_key(self) -> str:
        """Composite join key into rgDescriptions."""
        return f"{self.class_id}_{self.instance_id}"


class Description(BaseModel):
    """Display names shared by every asset of the same class/instance."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    market_name: str = ""
    market_hash_name: str = ""


class InventoryContext(BaseModel):
    """An (app, context) bucket and how many assets it holds."""

    id: int                         # Sent as a string; context ids need 64 bits
    asset_count: int = 0
    name: str = ""


class AppStats(BaseModel):
    """Per-app inventory metadata embedded in the profile inventory page."""

    model_config = ConfigDict(populate_by_name=True)

    appid: int
    name: str = ""
    asset_count: int = 0
    icon: str = ""
    link: str = ""
    inventory_logo: str = ""
    trade_permissions: str = ""
    contexts: dict[str, InventoryContext] = Field(default_factory=dict, alias="rgContexts")

    @field_validator("contexts", mode="before")
    @classmethod
    def empty_list_as_map(cls, v: Any) -> Any:
        """Apps without contexts serialize rgContexts as []."""
        if isinstance(v, list) and not v:
            return {}
        return v
