"""Quick add-to-cart modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from seafood_order.assembly import preparation_label
from seafood_order.cart import CartHandle
from seafood_order.errors import ValidationError
from seafood_order.models import CatalogItem, PreparationOption
from seafood_order.pricing import DEFAULT_QUANTITY, allowed_options, decrement_quantity, increment_quantity, price
from seafood_order.rendering import format_item_label, format_money, format_quantity, preparation_description


class QuickAddModal(ModalScreen[None]):
    """Pick weight and preparation for one item and add it to the cart."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("left", "decrement", "-0.5"),
        ("minus", "decrement", "-0.5"),
        ("right", "increment", "+0.5"),
        ("plus", "increment", "+0.5"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("space", "select_current", "Select"),
        ("enter", "add_to_cart", "Add"),
    ]

    CSS = """
    QuickAddModal {
        align: center middle;
        background: $background 60%;
    }

    #quick-add-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #quick-add-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #quick-add-body {
        margin-bottom: 1;
        color: white;
    }

    #quick-add-error {
        color: #ffb3b3;
    }

    #quick-add-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, item: CatalogItem, cart: CartHandle, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.item = item
        self.cart = cart
        self.on_change = on_change
        self.quantity = DEFAULT_QUANTITY
        self.option: PreparationOption | None = None
        self.options = allowed_options(item)
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="quick-add-dialog"):
            yield Static("Add to Cart", id="quick-add-title")
            yield Static(id="quick-add-body")
            yield Static(id="quick-add-error")
            yield Static(
                "←/→ weight, J/K/↑/↓ move, Space select, Enter add, Esc/q close",
                id="quick-add-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()

    def action_increment(self) -> None:
        self.quantity = increment_quantity(self.quantity)
        self._refresh_content()

    def action_decrement(self) -> None:
        self.quantity = decrement_quantity(self.quantity)
        self._refresh_content()

    def action_move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self.options)
        self._refresh_content()

    def action_select_current(self) -> None:
        self.option = self.options[self.cursor_index]
        self.error = ""
        self._refresh_content()

    def action_add_to_cart(self) -> None:
        if self.option is None:
            self.error = "Choose a preparation option first."
            self._refresh_content()
            return
        try:
            self.cart.add(self.item, self.quantity, self.option)
        except ValidationError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss()
        self.on_change()

    def _refresh_content(self) -> None:
        body = self.query_one("#quick-add-body", Static)
        error_widget = self.query_one("#quick-add-error", Static)

        content = Text(style="white")
        content.append_text(format_item_label(self.item))
        content.append(f"\n\nWeight: {format_quantity(self.quantity, self.item.unit_label)}", style="bold white")
        content.append("\n")
        for idx, option in enumerate(self.options):
            pointer = "➤ " if idx == self.cursor_index else "  "
            checked = "(x)" if option is self.option else "( )"
            content.append(f"\n{pointer}{checked} {preparation_label(self.item, option)}")
            if option is PreparationOption.PREPARED:
                content.append(f" +{format_money(self.item.surcharge)}", style="green")
            content.append(f"\n        {preparation_description(self.item, option)}", style="dim")
        if not self.item.can_prepare:
            content.append(
                f"\n\n  Preparation: {preparation_description(self.item, PreparationOption.PREPARED)}",
                style="dim",
            )

        priced = price(self.item, self.quantity, self.option or PreparationOption.AS_IS)
        content.append(f"\n\nTotal: {format_money(priced.total)}", style="bold white")

        body.update(content)
        error_widget.update(self.error or "")
