"""Editable static catalog and display configuration."""

from __future__ import annotations

CATEGORY_ORDER: list[str] = ["fish", "whole-fish", "prawns", "other"]

CATEGORY_DISPLAY: dict[str, str] = {
    "fish": "Fresh Fish (Fillet)",
    "whole-fish": "Whole Fish (Small)",
    "prawns": "Premium Prawns",
    "other": "Other Seafood",
}

# Short tags shown in front of catalog and cart rows.
CATEGORY_BADGE: dict[str, str] = {
    "fish": "F",
    "whole-fish": "W",
    "prawns": "P",
    "other": "O",
}

# Categories where every item may be prepared.
PREPARABLE_CATEGORIES: frozenset[str] = frozenset({"fish", "whole-fish", "prawns"})

# "other" items that may still be prepared (squid and octopus).
OTHER_PREPARABLE_IDS: frozenset[str] = frozenset({"kalamari", "octopus"})

PREPARATION_LABEL_BY_CATEGORY: dict[str, str] = {
    "fish": "Fillet & Gutted",
    "whole-fish": "Cleaned & Descaled",
    "prawns": "Deveined & Peeled",
    "other": "Cleaned",
}

PREPARATION_DESCRIPTION_BY_CATEGORY: dict[str, str] = {
    "fish": "Professional filleting and gutting",
    "whole-fish": "Cleaned and descaled, ready to cook",
    "prawns": "Deveined and peeled, ready to cook",
    "other": "Professionally cleaned",
}

AS_IS_LABEL = "As Is"
AS_IS_DESCRIPTION = "Delivered as caught, no processing"
PREPARATION_UNAVAILABLE = "Not available for this item"

UNIT_LABEL = "KG"
CURRENCY_LABEL = "KSh"

MIN_QUANTITY = "0.5"
MAX_QUANTITY = "300"
QUANTITY_STEP = "0.5"
DEFAULT_QUANTITY = "1"

CASH_ON_DELIVERY_LABEL = "Cash on Delivery"
MPESA_LABEL = "M-Pesa"

DISPATCH_FAILURE_HINT = "Please contact us directly."

# Raw catalog rows consumed by seafood_order.data (which wraps them into CatalogItem instances).
CATALOG_ROWS_BY_CATEGORY: dict[str, list[dict[str, str | int]]] = {
    "fish": [
        {"id": "tuna-fillet", "name": "Tuna", "price": 650, "surcharge": 200},
        {"id": "red-snapper-fillet", "name": "Red Snapper", "price": 650, "surcharge": 200},
        {"id": "white-snapper-fillet", "name": "White Snapper", "price": 650, "surcharge": 200},
        {"id": "parrot-fish-fillet", "name": "Parrot Fish", "price": 650, "surcharge": 200},
        {"id": "black-runner-fillet", "name": "Black Runner", "price": 650, "surcharge": 200},
        {"id": "rockod-fish-fillet", "name": "Rockod Fish (Tewa)", "price": 650, "surcharge": 200},
        {"id": "seabus-fillet", "name": "Seabus", "price": 650, "surcharge": 200},
        {"id": "kingfish-fillet", "name": "KingFish", "price": 650, "surcharge": 200},
        {"id": "kolekole-fillet", "name": "Kolekole", "price": 650, "surcharge": 200},
        {"id": "pandu-fillet", "name": "Pandu", "price": 650, "surcharge": 200},
        {"id": "baracuda-fillet", "name": "Baracuda", "price": 650, "surcharge": 200},
    ],
    "whole-fish": [
        {"id": "taffi-whole", "name": "Taffi", "price": 600, "surcharge": 150},
        {"id": "changu-whole", "name": "Changu", "price": 600, "surcharge": 150},
        {"id": "kolekole-whole", "name": "Kolekole", "price": 600, "surcharge": 150},
        {"id": "red-snapper-whole", "name": "Red Snapper", "price": 600, "surcharge": 150},
        {"id": "white-snapper-whole", "name": "White Snapper", "price": 600, "surcharge": 150},
    ],
    "prawns": [
        {"id": "king-prawns", "name": "King Prawns", "price": 2500, "surcharge": 200},
        {"id": "queen-prawns", "name": "Queen Prawns", "price": 1400, "surcharge": 200},
        {"id": "tiger-prawns", "name": "Tiger Prawns", "price": 2000, "surcharge": 200},
        {"id": "jumbo-prawns", "name": "Jumbo Prawns", "price": 3200, "surcharge": 200},
        {"id": "mixed-prawns", "name": "Mixed Prawns", "price": 1600, "surcharge": 200},
    ],
    "other": [
        {"id": "kalamari", "name": "Kalamari (Squid)", "price": 800, "surcharge": 200},
        {"id": "octopus", "name": "Octopus", "price": 600, "surcharge": 200},
        {"id": "lobster", "name": "Lobster", "price": 2400, "surcharge": 200},
        {"id": "oyster", "name": "Oyster", "price": 550, "surcharge": 200},
        {"id": "crabs", "name": "Crabs", "price": 750, "surcharge": 200},
    ],
}
