"""Checkout modal screen driving a CheckoutFlow step by step."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from seafood_order.assembly import preparation_label
from seafood_order.checkout import (
    CheckoutFlow,
    ChoosingPayment,
    ChoosingPreparation,
    Complete,
    Confirming,
    EnteringDetails,
    Selecting,
)
from seafood_order.models import PaymentMethod, PreparationOption
from seafood_order.pricing import allowed_options
from seafood_order.rendering import (
    format_item_label,
    format_money,
    format_quantity,
    payment_instructions,
    payment_label,
    preparation_description,
)

_DETAIL_FIELDS: list[tuple[str, str]] = [
    ("name", "Full name"),
    ("phone", "Phone"),
    ("delivery_location", "Delivery location"),
    ("email", "Email (optional)"),
]
_PAYMENT_METHODS = [PaymentMethod.MOBILE_MONEY, PaymentMethod.CASH_ON_DELIVERY]

_STEP_TITLES = {
    Selecting: "Select Quantity",
    EnteringDetails: "Your Details",
    ChoosingPreparation: "Preparation",
    ChoosingPayment: "Payment Method",
    Confirming: "Confirm Order",
    Complete: "Order Complete",
}


class CheckoutModal(ModalScreen[None]):
    """Walk the customer through the checkout steps of one flow."""

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-body {
        color: white;
        margin-bottom: 1;
    }

    #checkout-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #checkout-help {
        color: #dddddd;
    }
    """

    def __init__(self, flow: CheckoutFlow, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.flow = flow
        self.on_change = on_change
        self.fields: dict[str, str] = {key: "" for key, _ in _DETAIL_FIELDS}
        self.field_index = 0
        self.cursor_index = 0

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static(id="checkout-title")
            yield Static(id="checkout-body")
            yield Static(id="checkout-error")
            yield Static(id="checkout-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"escape", "ctrl+c"}:
            self._close()
            return

        state = self.flow.state
        if isinstance(state, Selecting):
            self._on_selecting_key(event)
        elif isinstance(state, EnteringDetails):
            self._on_details_key(event)
        elif isinstance(state, (ChoosingPreparation, ChoosingPayment)):
            self._on_choice_key(event)
        elif isinstance(state, Confirming):
            if event.key == "enter":
                self.flow.confirm()
                self.on_change()
        elif isinstance(state, Complete):
            if event.key == "enter":
                self._close()
                return
        self._refresh_content()

    def _close(self) -> None:
        if not self.flow.is_complete:
            self.flow.abort()
        self.dismiss()
        self.on_change()

    def _on_selecting_key(self, event: Key) -> None:
        if event.key in {"left", "minus", "down"}:
            self.flow.decrement()
        elif event.key in {"right", "plus", "up"}:
            self.flow.increment()
        elif event.key == "enter":
            self.flow.continue_selection()

    def _on_details_key(self, event: Key) -> None:
        field_key = _DETAIL_FIELDS[self.field_index][0]
        if event.key in {"tab", "down"}:
            self.field_index = (self.field_index + 1) % len(_DETAIL_FIELDS)
        elif event.key in {"shift+tab", "up"}:
            self.field_index = (self.field_index - 1) % len(_DETAIL_FIELDS)
        elif event.key == "backspace":
            self.fields[field_key] = self.fields[field_key][:-1]
        elif event.key == "enter":
            if self.flow.submit_details(
                self.fields["name"],
                self.fields["phone"],
                self.fields["delivery_location"],
                self.fields["email"],
            ):
                self.cursor_index = 0
        elif event.is_printable and event.character:
            self.fields[field_key] += event.character

    def _choices(self) -> list[PreparationOption] | list[PaymentMethod]:
        item = self.flow.current_item()
        if isinstance(self.flow.state, ChoosingPreparation) and item is not None:
            return allowed_options(item)
        return _PAYMENT_METHODS

    def _on_choice_key(self, event: Key) -> None:
        choices = self._choices()
        if event.key in {"down", "j", "tab"}:
            self.cursor_index = (self.cursor_index + 1) % len(choices)
        elif event.key in {"up", "k"}:
            self.cursor_index = (self.cursor_index - 1) % len(choices)
        elif event.key == "enter":
            selected = choices[self.cursor_index]
            if isinstance(selected, PreparationOption):
                moved = self.flow.choose_preparation(selected)
            else:
                moved = self.flow.choose_payment(selected)
            if moved:
                self.cursor_index = 0

    def _refresh_content(self) -> None:
        state = self.flow.state
        title = f"{_STEP_TITLES[type(state)]}  ({self.flow.step_number}/{len(self.flow.steps)})"
        self.query_one("#checkout-title", Static).update(title)
        self.query_one("#checkout-error", Static).update(self.flow.error or "")

        content = Text(style="white")
        help_text = "Esc cancel"
        if isinstance(state, Selecting):
            content.append_text(format_item_label(state.choice.item))
            content.append(f"\n\nWeight: {format_quantity(state.choice.quantity, state.choice.item.unit_label)}", style="bold")
            content.append(f"\nPrice:  {format_money(self.flow.total())}")
            help_text = "←/→ adjust by 0.5, Enter continue, Esc cancel"
        elif isinstance(state, EnteringDetails):
            for idx, (key, label) in enumerate(_DETAIL_FIELDS):
                pointer = "➤ " if idx == self.field_index else "  "
                cursor = "|" if idx == self.field_index else ""
                content.append(f"{pointer}{label}: ", style="bold" if idx == self.field_index else "")
                content.append(f"{self.fields[key]}{cursor}\n")
            help_text = "Type to fill, Tab/↑/↓ switch field, Enter continue, Esc cancel"
        elif isinstance(state, ChoosingPreparation):
            item = state.choice.item
            for idx, option in enumerate(allowed_options(item)):
                pointer = "➤ " if idx == self.cursor_index else "  "
                content.append(f"{pointer}{preparation_label(item, option)}\n", style="bold")
                content.append(f"    {preparation_description(item, option)}\n", style="dim")
            if not item.can_prepare:
                content.append(f"  Preparation: {preparation_description(item, PreparationOption.PREPARED)}\n", style="dim")
            help_text = "↑/↓ move, Enter choose, Esc cancel"
        elif isinstance(state, ChoosingPayment):
            for idx, method in enumerate(_PAYMENT_METHODS):
                pointer = "➤ " if idx == self.cursor_index else "  "
                content.append(f"{pointer}{payment_label(method)}\n")
            content.append(f"\nTotal: {format_money(self.flow.total())}", style="bold")
            help_text = "↑/↓ move, Enter choose, Esc cancel"
        elif isinstance(state, Confirming):
            for line in state.lines:
                content.append(
                    f"{format_quantity(line.quantity, line.item.unit_label)} {line.item.name}"
                    f" · {preparation_label(line.item, line.option)} = {format_money(line.total_price)}\n"
                )
            content.append(f"\nTotal:    {format_money(self.flow.total())}", style="bold")
            content.append(f"\nPayment:  {payment_label(state.payment_method)}")
            content.append(f"\nName:     {state.customer.name}")
            content.append(f"\nPhone:    {state.customer.phone}")
            content.append(f"\nLocation: {state.customer.delivery_location}")
            help_text = "Enter confirm order, Esc cancel"
        elif isinstance(state, Complete):
            content.append("Thank you for your order! Our team has been notified.\n\n")
            content.append(f"Order ID: {state.order.order_id}\n", style="bold")
            content.append(payment_instructions(state.order.payment_method, state.order.total_amount))
            help_text = "Enter / Esc close"

        self.query_one("#checkout-body", Static).update(content)
        self.query_one("#checkout-help", Static).update(help_text)
