"""Static catalog data."""

from __future__ import annotations

from decimal import Decimal

from seafood_order.constant import (
    CATALOG_ROWS_BY_CATEGORY,
    CATEGORY_DISPLAY,
    CATEGORY_ORDER,
    OTHER_PREPARABLE_IDS,
    PREPARABLE_CATEGORIES,
    UNIT_LABEL,
)
from seafood_order.models import CatalogItem


def _can_prepare(category: str, item_id: str) -> bool:
    if category in PREPARABLE_CATEGORIES:
        return True
    return category == "other" and item_id in OTHER_PREPARABLE_IDS


def _build_item(category: str, row: dict[str, str | int]) -> CatalogItem:
    item_id = str(row["id"])
    return CatalogItem(
        item_id=item_id,
        name=str(row["name"]),
        unit_price=Decimal(str(row["price"])),
        unit_label=UNIT_LABEL,
        category=category,
        category_display=CATEGORY_DISPLAY[category],
        surcharge=Decimal(str(row["surcharge"])),
        can_prepare=_can_prepare(category, item_id),
    )


CATALOG_BY_CATEGORY: dict[str, list[CatalogItem]] = {
    category: [_build_item(category, row) for row in CATALOG_ROWS_BY_CATEGORY[category]]
    for category in CATEGORY_ORDER
}

CATALOG_BY_ID: dict[str, CatalogItem] = {
    item.item_id: item for items in CATALOG_BY_CATEGORY.values() for item in items
}


def catalog_item(item_id: str) -> CatalogItem:
    """Get a catalog item by id. Raises KeyError for unknown ids."""
    return CATALOG_BY_ID[item_id]


def all_items() -> list[CatalogItem]:
    """Every catalog item in category display order."""
    return [item for category in CATEGORY_ORDER for item in CATALOG_BY_CATEGORY[category]]


def search_catalog(query: str, category: str) -> list[CatalogItem]:
    """
    Filter the catalog for display.

    An empty query lists the active category; any other query searches every
    category by case-insensitive substring of the item name.
    """
    q = query.strip().lower()
    if not q:
        return list(CATALOG_BY_CATEGORY.get(category, []))
    return [item for item in all_items() if q in item.name.lower()]
