from decimal import Decimal

import pytest

from seafood_order.data import CATALOG_BY_CATEGORY, CATALOG_BY_ID, all_items, catalog_item, search_catalog


def test_catalog_shape():
    assert list(CATALOG_BY_CATEGORY) == ["fish", "whole-fish", "prawns", "other"]
    assert [len(items) for items in CATALOG_BY_CATEGORY.values()] == [11, 5, 5, 5]
    assert len(CATALOG_BY_ID) == len(all_items()) == 26


def test_catalog_item_fields():
    prawns = catalog_item("king-prawns")

    assert prawns.unit_price == Decimal("2500")
    assert prawns.surcharge == Decimal("200")
    assert prawns.unit_label == "KG"
    assert prawns.category_display == "Premium Prawns"


def test_unknown_item_raises_key_error():
    with pytest.raises(KeyError):
        catalog_item("salmon")


def test_preparation_flags():
    preparable_other = {item.item_id for item in CATALOG_BY_CATEGORY["other"] if item.can_prepare}

    assert preparable_other == {"kalamari", "octopus"}
    assert all(item.can_prepare for category in ("fish", "whole-fish", "prawns") for item in CATALOG_BY_CATEGORY[category])


def test_empty_search_lists_the_active_category():
    assert search_catalog("", "prawns") == CATALOG_BY_CATEGORY["prawns"]
    assert search_catalog("  ", "other") == CATALOG_BY_CATEGORY["other"]


def test_search_spans_all_categories_case_insensitively():
    names = [(item.category, item.name) for item in search_catalog("SNAPPER", "prawns")]

    assert names == [
        ("fish", "Red Snapper"),
        ("fish", "White Snapper"),
        ("whole-fish", "Red Snapper"),
        ("whole-fish", "White Snapper"),
    ]
    assert search_catalog("squid", "fish")[0].item_id == "kalamari"
    assert search_catalog("salmon", "fish") == []
