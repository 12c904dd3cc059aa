"""Per-line pricing rules and quantity handling."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from seafood_order.constant import DEFAULT_QUANTITY as _DEFAULT_QUANTITY_RAW
from seafood_order.constant import MAX_QUANTITY as _MAX_QUANTITY_RAW
from seafood_order.constant import MIN_QUANTITY as _MIN_QUANTITY_RAW
from seafood_order.constant import QUANTITY_STEP as _QUANTITY_STEP_RAW
from seafood_order.errors import ValidationError
from seafood_order.models import CatalogItem, PreparationOption, PricedLine

MIN_QUANTITY = Decimal(_MIN_QUANTITY_RAW)
MAX_QUANTITY = Decimal(_MAX_QUANTITY_RAW)
QUANTITY_STEP = Decimal(_QUANTITY_STEP_RAW)
DEFAULT_QUANTITY = Decimal(_DEFAULT_QUANTITY_RAW)

_ZERO = Decimal("0")


def to_quantity(value: Decimal | int | float | str) -> Decimal:
    """Convert user or wire input into a Decimal quantity without float drift."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"Quantity {value!r} is not a number") from exc


def validate_quantity(value: Decimal | int | float | str) -> Decimal:
    """Return the quantity if it is in range and on the 0.5 grid."""
    quantity = to_quantity(value)
    if not quantity.is_finite():
        raise ValidationError(f"Quantity {value!r} is not a number")
    if not (MIN_QUANTITY <= quantity <= MAX_QUANTITY):
        raise ValidationError(f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}")
    if quantity % QUANTITY_STEP != 0:
        raise ValidationError(f"Quantity must be a multiple of {QUANTITY_STEP}")
    return quantity


def increment_quantity(quantity: Decimal) -> Decimal:
    """One step up, held at the upper bound."""
    return min(MAX_QUANTITY, quantity + QUANTITY_STEP)


def decrement_quantity(quantity: Decimal) -> Decimal:
    """One step down, held at the lower bound."""
    return max(MIN_QUANTITY, quantity - QUANTITY_STEP)


def allows_preparation(item: CatalogItem) -> bool:
    """Whether ``PreparationOption.PREPARED`` may be chosen for the item."""
    return item.can_prepare


def allowed_options(item: CatalogItem) -> list[PreparationOption]:
    """Preparation options selectable for the item, prepared first."""
    if allows_preparation(item):
        return [PreparationOption.PREPARED, PreparationOption.AS_IS]
    return [PreparationOption.AS_IS]


def validate_option(item: CatalogItem, option: PreparationOption) -> PreparationOption:
    """Reject a prepared option for items that cannot be prepared."""
    if option is PreparationOption.PREPARED and not allows_preparation(item):
        raise ValidationError(f"{item.name} cannot be prepared; choose As Is")
    return option


def price(item: CatalogItem, quantity: Decimal | int | float | str, option: PreparationOption) -> PricedLine:
    """Compute base price, preparation surcharge and total for one line."""
    checked_quantity = validate_quantity(quantity)
    validate_option(item, option)

    base_price = item.unit_price * checked_quantity
    surcharge = item.surcharge if option is PreparationOption.PREPARED else _ZERO
    return PricedLine(base_price=base_price, surcharge=surcharge, total=base_price + surcharge)
