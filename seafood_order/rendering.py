"""Rendering helpers for money, weights, catalog rows and cart lines."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from seafood_order.assembly import preparation_label
from seafood_order.config import MPESA_TILL_NUMBER
from seafood_order.constant import (
    AS_IS_DESCRIPTION,
    CASH_ON_DELIVERY_LABEL,
    CATEGORY_BADGE,
    CURRENCY_LABEL,
    MPESA_LABEL,
    PREPARATION_DESCRIPTION_BY_CATEGORY,
    PREPARATION_UNAVAILABLE,
)
from seafood_order.models import CatalogItem, LineItem, PaymentMethod, PreparationOption


def format_money(amount: Decimal) -> str:
    """``KSh 1,500`` for whole amounts, ``KSh 1,500.50`` otherwise."""
    if amount == amount.to_integral_value():
        return f"{CURRENCY_LABEL} {int(amount):,}"
    return f"{CURRENCY_LABEL} {amount:,.2f}"


def format_quantity(quantity: Decimal, unit_label: str) -> str:
    """``2 KG`` or ``2.5 KG``."""
    if quantity == quantity.to_integral_value():
        return f"{int(quantity)} {unit_label}"
    return f"{quantity.normalize()} {unit_label}"


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    if category == "fish":
        return "bold #ffffff on #0891b2"
    if category == "whole-fish":
        return "bold #ffffff on #2f6db5"
    if category == "prawns":
        return "bold #ffffff on #f97316"
    return "bold #0b1f0f on #5fbf72"


def format_item_label(item: CatalogItem) -> Text:
    """Catalog row: badge, name and unit price."""
    text = Text()
    text.append(CATEGORY_BADGE.get(item.category, "?"), style=badge_style(item.category))
    text.append(f" {item.name}")
    text.append(f"  {format_money(item.unit_price)}/{item.unit_label}", style="dim")
    return text


def preparation_description(item: CatalogItem, option: PreparationOption) -> str:
    if option is PreparationOption.AS_IS:
        return AS_IS_DESCRIPTION
    if not item.can_prepare:
        return PREPARATION_UNAVAILABLE
    return PREPARATION_DESCRIPTION_BY_CATEGORY.get(item.category, PREPARATION_UNAVAILABLE)


def payment_label(method: PaymentMethod) -> str:
    if method is PaymentMethod.MOBILE_MONEY:
        return f"{MPESA_LABEL} Till: {MPESA_TILL_NUMBER}"
    return CASH_ON_DELIVERY_LABEL


def payment_instructions(method: PaymentMethod, total: Decimal) -> str:
    if method is PaymentMethod.MOBILE_MONEY:
        return f"Pay {format_money(total)} to {MPESA_LABEL} Till Number {MPESA_TILL_NUMBER}."
    return f"Pay {format_money(total)} in cash when your order arrives."


def format_line_item(line: LineItem) -> Text:
    """Cart row with weight, preparation and line total."""
    text = format_item_label(line.item)
    text.append(f"\n      {format_quantity(line.quantity, line.item.unit_label)}")
    text.append(f" · {preparation_label(line.item, line.option)}")
    if line.surcharge:
        text.append(f" (+{format_money(line.surcharge)})", style="green")
    text.append(f" = {format_money(line.total_price)}", style="bold")
    return text
