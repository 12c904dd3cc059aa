import json
import re
from decimal import Decimal

import pytest

from seafood_order.assembly import assemble, generate_order_id, order_payload, preparation_label
from seafood_order.cart import Cart
from seafood_order.data import catalog_item
from seafood_order.errors import AssemblyError
from seafood_order.models import CustomerDetails, OrderType, PaymentMethod, PreparationOption

CUSTOMER = CustomerDetails("Amina", "0700000000", "Nyali, Mombasa")


def test_single_line_is_single_order(tuna):
    line, _ = Cart().add(tuna, 2, PreparationOption.PREPARED)

    order = assemble(CUSTOMER, [line], PaymentMethod.MOBILE_MONEY)

    assert order.order_type is OrderType.SINGLE
    assert order.total_amount == Decimal("1500")
    assert order.lines[0].preparation_label == "Fillet & Gutted"


def test_two_lines_are_bulk(tuna, king_prawns):
    _, cart = Cart().add(tuna, 1, PreparationOption.AS_IS)
    _, cart = cart.add(king_prawns, 1, PreparationOption.AS_IS)

    order = assemble(CUSTOMER, cart.lines, PaymentMethod.CASH_ON_DELIVERY)

    assert order.order_type is OrderType.BULK
    assert order.total_amount == Decimal("3150")


def test_empty_order_is_rejected():
    with pytest.raises(AssemblyError):
        assemble(CUSTOMER, [], PaymentMethod.CASH_ON_DELIVERY)


@pytest.mark.parametrize(
    "item_id, option, label",
    [
        ("tuna-fillet", PreparationOption.PREPARED, "Fillet & Gutted"),
        ("taffi-whole", PreparationOption.PREPARED, "Cleaned & Descaled"),
        ("king-prawns", PreparationOption.PREPARED, "Deveined & Peeled"),
        ("octopus", PreparationOption.PREPARED, "Cleaned"),
        ("lobster", PreparationOption.PREPARED, "As Is"),
        ("tuna-fillet", PreparationOption.AS_IS, "As Is"),
    ],
)
def test_preparation_labels(item_id, option, label):
    assert preparation_label(catalog_item(item_id), option) == label


def test_order_ids_are_distinct():
    ids = {generate_order_id() for _ in range(200)}

    assert len(ids) == 200
    assert all(re.fullmatch(r"ORD-\d{13}-[0-9a-f]{9}", order_id) for order_id in ids)


def test_explicit_order_id_is_kept(tuna):
    line, _ = Cart().add(tuna, 1, PreparationOption.AS_IS)

    assert assemble(CUSTOMER, [line], PaymentMethod.CASH_ON_DELIVERY, order_id="ORD-1").order_id == "ORD-1"


def test_payload_matches_the_notification_contract(tuna, oyster):
    _, cart = Cart().add(tuna, 2, PreparationOption.PREPARED)
    _, cart = cart.add(oyster, "2.5", PreparationOption.AS_IS)
    order = assemble(CUSTOMER, cart.lines, PaymentMethod.MOBILE_MONEY, order_id="ORD-42")

    payload = order_payload(order)

    assert payload == {
        "orderId": "ORD-42",
        "customerName": "Amina",
        "customerPhone": "0700000000",
        "deliveryLocation": "Nyali, Mombasa",
        "items": [
            {
                "name": "Tuna",
                "category": "fish",
                "categoryDisplay": "Fresh Fish (Fillet)",
                "quantity": 2,
                "price": 650,
                "deliveryOption": "cleaned",
                "cleaningFee": 200,
                "totalPrice": 1500,
            },
            {
                "name": "Oyster",
                "category": "other",
                "categoryDisplay": "Other Seafood",
                "quantity": 2.5,
                "price": 550,
                "deliveryOption": "asis",
                "cleaningFee": 0,
                "totalPrice": 1375,
            },
        ],
        "paymentMethod": "mpesa",
        "totalAmount": 2875,
        "orderType": "bulk",
    }
    json.dumps(payload)


def test_payload_includes_email_only_when_given(tuna):
    line, _ = Cart().add(tuna, 1, PreparationOption.AS_IS)
    with_email = CustomerDetails("Amina", "0700", "Bamburi", email="amina@example.com")

    assert "customerEmail" not in order_payload(assemble(CUSTOMER, [line], PaymentMethod.CASH_ON_DELIVERY))
    payload = order_payload(assemble(with_email, [line], PaymentMethod.CASH_ON_DELIVERY))
    assert payload["customerEmail"] == "amina@example.com"
    assert payload["orderType"] == "single"
