"""Cart aggregate: an ordered, immutable sequence of priced lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator
from uuid import uuid4

from seafood_order.errors import LineItemNotFound
from seafood_order.models import CatalogItem, LineItem, PreparationOption
from seafood_order.pricing import price, validate_quantity

logger = logging.getLogger(__name__)


def new_line_id(item: CatalogItem, option: PreparationOption) -> str:
    """Identity for a new cart line, unique within any cart."""
    return f"{item.item_id}-{option.value}-{uuid4().hex[:12]}"


def make_line(line_id: str, item: CatalogItem, quantity: Decimal | int | float | str, option: PreparationOption) -> LineItem:
    """Price and build a line. Raises ValidationError for illegal input."""
    checked_quantity = validate_quantity(quantity)
    return LineItem(
        line_id=line_id,
        item=item,
        quantity=checked_quantity,
        option=option,
        priced=price(item, checked_quantity, option),
    )


@dataclass(frozen=True)
class Cart:
    """Insertion-ordered cart lines. Every operation returns a new Cart."""

    lines: tuple[LineItem, ...] = ()

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def get(self, line_id: str) -> LineItem | None:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        return None

    def add(self, item: CatalogItem, quantity: Decimal | int | float | str, option: PreparationOption) -> tuple[LineItem, Cart]:
        """Append a newly priced line. Same item twice gives two lines."""
        line = make_line(new_line_id(item, option), item, quantity, option)
        return line, Cart(self.lines + (line,))

    def remove(self, line_id: str) -> Cart:
        """Drop the matching line; unknown ids leave the cart unchanged."""
        kept = tuple(line for line in self.lines if line.line_id != line_id)
        if len(kept) == len(self.lines):
            return self
        return Cart(kept)

    def update(self, line_id: str, quantity: Decimal | int | float | str, option: PreparationOption) -> Cart:
        """Reprice the matching line in place, keeping its identity and position."""
        target = self.get(line_id)
        if target is None:
            raise LineItemNotFound(line_id)
        replacement = make_line(line_id, target.item, quantity, option)
        return Cart(tuple(replacement if line.line_id == line_id else line for line in self.lines))

    def clear(self) -> Cart:
        return Cart()

    def total_items(self) -> int:
        """Number of line entries, not summed weight."""
        return len(self.lines)

    def total_price(self) -> Decimal:
        return sum((line.total_price for line in self.lines), Decimal("0"))


class CartHandle:
    """The single cart owned by a session, shared by every entry point."""

    def __init__(self, cart: Cart | None = None) -> None:
        self.cart = cart if cart is not None else Cart()

    @property
    def lines(self) -> tuple[LineItem, ...]:
        return self.cart.lines

    def add(self, item: CatalogItem, quantity: Decimal | int | float | str, option: PreparationOption) -> LineItem:
        line, self.cart = self.cart.add(item, quantity, option)
        logger.info(
            "cart_add line_id=%s item=%s quantity=%s option=%s total=%s",
            line.line_id,
            item.item_id,
            line.quantity,
            option.value,
            line.total_price,
        )
        return line

    def remove(self, line_id: str) -> Cart:
        before = len(self.cart)
        self.cart = self.cart.remove(line_id)
        if len(self.cart) == before:
            logger.debug("cart_remove_noop line_id=%s", line_id)
        else:
            logger.info("cart_remove line_id=%s", line_id)
        return self.cart

    def update(self, line_id: str, quantity: Decimal | int | float | str, option: PreparationOption) -> Cart:
        self.cart = self.cart.update(line_id, quantity, option)
        logger.info("cart_update line_id=%s quantity=%s option=%s", line_id, quantity, option.value)
        return self.cart

    def clear(self) -> Cart:
        if self.cart.lines:
            logger.info("cart_clear lines=%d", len(self.cart))
        self.cart = self.cart.clear()
        return self.cart

    def total_items(self) -> int:
        return self.cart.total_items()

    def total_price(self) -> Decimal:
        return self.cart.total_price()
