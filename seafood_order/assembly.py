"""Order assembly and the notification payload format."""

from __future__ import annotations

import time
from decimal import Decimal
from typing import Any, Iterable
from uuid import uuid4

from seafood_order.constant import AS_IS_LABEL, PREPARATION_LABEL_BY_CATEGORY
from seafood_order.errors import AssemblyError
from seafood_order.models import (
    CatalogItem,
    CustomerDetails,
    LineItem,
    LineSummary,
    OrderRecord,
    OrderType,
    PaymentMethod,
    PreparationOption,
)


def generate_order_id() -> str:
    """Millisecond timestamp plus a random suffix, e.g. ``ORD-1718000000000-3f9a1c2b7``."""
    return f"ORD-{int(time.time() * 1000)}-{uuid4().hex[:9]}"


def preparation_label(item: CatalogItem, option: PreparationOption) -> str:
    """Human-readable preparation for an item and the chosen option."""
    if option is not PreparationOption.PREPARED or not item.can_prepare:
        return AS_IS_LABEL
    return PREPARATION_LABEL_BY_CATEGORY.get(item.category, AS_IS_LABEL)


def summarize_line(line: LineItem) -> LineSummary:
    return LineSummary(
        name=line.item.name,
        category=line.item.category,
        category_display=line.item.category_display,
        quantity=line.quantity,
        unit_price=line.item.unit_price,
        option=line.option,
        preparation_label=preparation_label(line.item, line.option),
        surcharge=line.surcharge,
        total=line.total_price,
    )


def assemble(
    customer: CustomerDetails,
    lines: Iterable[LineItem],
    payment_method: PaymentMethod,
    order_id: str | None = None,
) -> OrderRecord:
    """Build the immutable order record for a confirmed checkout."""
    summaries = tuple(summarize_line(line) for line in lines)
    if not summaries:
        raise AssemblyError("Cannot assemble an order without line items")

    total_amount = sum((summary.total for summary in summaries), Decimal("0"))
    order_type = OrderType.SINGLE if len(summaries) == 1 else OrderType.BULK
    return OrderRecord(
        order_id=order_id or generate_order_id(),
        customer=customer,
        lines=summaries,
        payment_method=payment_method,
        total_amount=total_amount,
        order_type=order_type,
    )


def _json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def order_payload(order: OrderRecord) -> dict[str, Any]:
    """Encode an order as the JSON object the notification sink accepts."""
    payload: dict[str, Any] = {
        "orderId": order.order_id,
        "customerName": order.customer.name,
        "customerPhone": order.customer.phone,
        "deliveryLocation": order.customer.delivery_location,
        "items": [
            {
                "name": summary.name,
                "category": summary.category,
                "categoryDisplay": summary.category_display,
                "quantity": _json_number(summary.quantity),
                "price": _json_number(summary.unit_price),
                "deliveryOption": summary.option.value,
                "cleaningFee": _json_number(summary.surcharge),
                "totalPrice": _json_number(summary.total),
            }
            for summary in order.lines
        ],
        "paymentMethod": order.payment_method.value,
        "totalAmount": _json_number(order.total_amount),
        "orderType": order.order_type.value,
    }
    if order.customer.email:
        payload["customerEmail"] = order.customer.email
    return payload
