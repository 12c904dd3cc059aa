from decimal import Decimal

import pytest

from seafood_order.cart import Cart, CartHandle
from seafood_order.errors import LineItemNotFound, ValidationError
from seafood_order.models import PreparationOption


def test_single_prepared_line_totals(tuna):
    line, cart = Cart().add(tuna, 2, PreparationOption.PREPARED)

    assert line.base_price == Decimal("1300")
    assert line.surcharge == Decimal("200")
    assert line.total_price == Decimal("1500")
    assert cart.total_items() == 1
    assert cart.total_price() == Decimal("1500")


def test_mixed_cart_total(king_prawns, oyster):
    _, cart = Cart().add(king_prawns, 1, PreparationOption.AS_IS)
    oyster_line, cart = cart.add(oyster, 3, PreparationOption.AS_IS)

    assert cart.total_price() == Decimal("4150")

    with pytest.raises(ValidationError):
        cart.update(oyster_line.line_id, 3, PreparationOption.PREPARED)
    assert cart.total_price() == Decimal("4150")


def test_add_returns_new_cart_and_keeps_original(tuna):
    empty = Cart()
    _, cart = empty.add(tuna, 1, PreparationOption.AS_IS)

    assert len(empty) == 0
    assert len(cart) == 1


def test_same_item_twice_is_two_lines(tuna):
    first, cart = Cart().add(tuna, 1, PreparationOption.AS_IS)
    second, cart = cart.add(tuna, 1, PreparationOption.AS_IS)

    assert first.line_id != second.line_id
    assert [line.line_id for line in cart] == [first.line_id, second.line_id]
    assert cart.total_items() == 2


def test_remove_unknown_id_is_a_noop(tuna):
    _, cart = Cart().add(tuna, 2, PreparationOption.PREPARED)

    after = cart.remove("does-not-exist")

    assert after == cart
    assert after.total_price() == Decimal("1500")


def test_remove_drops_only_the_matching_line(tuna, king_prawns):
    tuna_line, cart = Cart().add(tuna, 1, PreparationOption.AS_IS)
    _, cart = cart.add(king_prawns, 1, PreparationOption.AS_IS)

    cart = cart.remove(tuna_line.line_id)

    assert [line.item.item_id for line in cart] == ["king-prawns"]
    assert cart.total_price() == Decimal("2500")


def test_update_reprices_in_place(tuna, king_prawns):
    tuna_line, cart = Cart().add(tuna, 1, PreparationOption.AS_IS)
    _, cart = cart.add(king_prawns, 1, PreparationOption.AS_IS)

    cart = cart.update(tuna_line.line_id, "2.5", PreparationOption.PREPARED)

    updated = cart.lines[0]
    assert updated.line_id == tuna_line.line_id
    assert updated.quantity == Decimal("2.5")
    assert updated.base_price == Decimal("1625")
    assert updated.surcharge == Decimal("200")
    assert updated.total_price == Decimal("1825")
    assert cart.total_price() == Decimal("1825") + Decimal("2500")


def test_update_unknown_id_raises_not_found(tuna):
    _, cart = Cart().add(tuna, 1, PreparationOption.AS_IS)

    with pytest.raises(LineItemNotFound) as excinfo:
        cart.update("missing", 1, PreparationOption.AS_IS)

    assert isinstance(excinfo.value, KeyError)
    assert cart.total_price() == Decimal("650")


def test_clear_empties_the_cart(tuna):
    _, cart = Cart().add(tuna, 1, PreparationOption.AS_IS)

    cleared = cart.clear()

    assert cleared.total_items() == 0
    assert cleared.total_price() == 0


def test_total_matches_sum_after_mixed_operations(tuna, king_prawns, oyster):
    handle = CartHandle()
    a = handle.add(tuna, 2, PreparationOption.PREPARED)
    b = handle.add(king_prawns, "0.5", PreparationOption.AS_IS)
    handle.add(oyster, 4, PreparationOption.AS_IS)
    handle.update(b.line_id, 3, PreparationOption.PREPARED)
    handle.remove(a.line_id)
    handle.remove("ghost")

    assert handle.total_items() == 2
    assert handle.total_price() == sum(line.total_price for line in handle.lines)
    assert handle.total_price() == Decimal("7700") + Decimal("2200")
