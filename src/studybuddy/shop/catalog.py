"""Server-held shop catalog.

Prices live here, in code, and nowhere else. Purchase requests carry only
an item id; the cost charged is always the one below.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShopItem:
    item_id: str
    title: str
    token_cost: int
    description: str


SHOP_CATALOG: dict[str, ShopItem] = {
    "1": ShopItem("1", "Premium Solutions", 50, "Detailed step-by-step explanations"),
    "2": ShopItem("2", "Avatar Skin", 30, "Astronaut theme"),
    "3": ShopItem("3", "Study Theme", 20, "Dark mode theme"),
    "4": ShopItem("4", "Special Exercises", 40, "Yoga & Stretching"),
}


def get_shop_item(item_id: str) -> ShopItem | None:
    """Look up a catalog item by id."""
    return SHOP_CATALOG.get(item_id)
