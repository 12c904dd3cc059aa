from decimal import Decimal

from seafood_order.assembly import assemble
from seafood_order.cart import Cart
from seafood_order.models import CustomerDetails, PaymentMethod, PreparationOption
from seafood_order.printer import ticket_lines
from seafood_order.rendering import (
    format_line_item,
    format_money,
    format_quantity,
    payment_instructions,
    payment_label,
    preparation_description,
)


def test_format_money():
    assert format_money(Decimal("1500")) == "KSh 1,500"
    assert format_money(Decimal("1500.5")) == "KSh 1,500.50"
    assert format_money(Decimal("0")) == "KSh 0"


def test_format_quantity():
    assert format_quantity(Decimal("2"), "KG") == "2 KG"
    assert format_quantity(Decimal("2.50"), "KG") == "2.5 KG"
    assert format_quantity(Decimal("0.5"), "KG") == "0.5 KG"


def test_preparation_descriptions(tuna, oyster, kalamari):
    assert preparation_description(tuna, PreparationOption.PREPARED) == "Professional filleting and gutting"
    assert preparation_description(kalamari, PreparationOption.PREPARED) == "Professionally cleaned"
    assert preparation_description(oyster, PreparationOption.PREPARED) == "Not available for this item"


def test_payment_text():
    assert payment_label(PaymentMethod.MOBILE_MONEY) == "M-Pesa Till: 6030812"
    assert payment_label(PaymentMethod.CASH_ON_DELIVERY) == "Cash on Delivery"
    assert "6030812" in payment_instructions(PaymentMethod.MOBILE_MONEY, Decimal("1500"))
    assert "KSh 1,500" in payment_instructions(PaymentMethod.CASH_ON_DELIVERY, Decimal("1500"))


def test_cart_line_text(tuna):
    line, _ = Cart().add(tuna, "2.5", PreparationOption.PREPARED)

    plain = format_line_item(line).plain

    assert "Tuna" in plain
    assert "2.5 KG" in plain
    assert "Fillet & Gutted" in plain
    assert "KSh 1,825" in plain


def test_ticket_lines(tuna, oyster):
    _, cart = Cart().add(tuna, 2, PreparationOption.PREPARED)
    _, cart = cart.add(oyster, 1, PreparationOption.AS_IS)
    order = assemble(
        CustomerDetails("Amina", "0700", "Bamburi"),
        cart.lines,
        PaymentMethod.CASH_ON_DELIVERY,
        order_id="ORD-9",
    )

    lines = ticket_lines(order)

    assert lines[0] == "NEW ORDER (BULK)"
    assert "ORD-9" in lines
    assert "2 KG Tuna" in lines
    assert "1 KG Oyster" in lines
    assert "Cash on Delivery" in lines
    assert lines[-1] == "TOTAL KSh 2,050"
