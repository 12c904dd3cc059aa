"""Domain models for seafood-order."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PreparationOption(str, Enum):
    """How an item is handed over. Values are the wire names."""

    AS_IS = "asis"
    PREPARED = "cleaned"


class PaymentMethod(str, Enum):
    """Displayed payment instruction. No money moves in-process."""

    MOBILE_MONEY = "mpesa"
    CASH_ON_DELIVERY = "cash"


class OrderType(str, Enum):
    SINGLE = "single"
    BULK = "bulk"


@dataclass(frozen=True)
class CatalogItem:
    """Read-only reference data for one item sold by weight."""

    item_id: str
    name: str
    unit_price: Decimal
    unit_label: str
    category: str
    category_display: str
    surcharge: Decimal
    can_prepare: bool


@dataclass(frozen=True)
class PricedLine:
    """Derived prices for one item, quantity and preparation choice."""

    base_price: Decimal
    surcharge: Decimal
    total: Decimal


@dataclass(frozen=True)
class LineItem:
    """One priced cart entry.

    Prices live in ``priced`` and are only ever produced by
    ``seafood_order.pricing.price`` together with ``quantity`` and ``option``,
    so a line never carries totals that disagree with its inputs.
    """

    line_id: str
    item: CatalogItem
    quantity: Decimal
    option: PreparationOption
    priced: PricedLine

    @property
    def base_price(self) -> Decimal:
        return self.priced.base_price

    @property
    def surcharge(self) -> Decimal:
        return self.priced.surcharge

    @property
    def total_price(self) -> Decimal:
        return self.priced.total


@dataclass(frozen=True)
class CustomerDetails:
    """Contact and delivery details captured once per checkout."""

    name: str
    phone: str
    delivery_location: str
    email: str | None = None

    def missing_fields(self) -> list[str]:
        """Return the required fields that are blank."""
        required = {
            "name": self.name,
            "phone": self.phone,
            "delivery_location": self.delivery_location,
        }
        return [field_name for field_name, value in required.items() if not value.strip()]


@dataclass(frozen=True)
class LineSummary:
    """A line item flattened for the notification payload."""

    name: str
    category: str
    category_display: str
    quantity: Decimal
    unit_price: Decimal
    option: PreparationOption
    preparation_label: str
    surcharge: Decimal
    total: Decimal


@dataclass(frozen=True)
class OrderRecord:
    """Immutable order handed to notification dispatch."""

    order_id: str
    customer: CustomerDetails
    lines: tuple[LineSummary, ...]
    payment_method: PaymentMethod
    total_amount: Decimal
    order_type: OrderType
