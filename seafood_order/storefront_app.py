"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Header, Static

from seafood_order.cart import CartHandle
from seafood_order.checkout import CheckoutFlow, Complete
from seafood_order.checkout_modal import CheckoutModal
from seafood_order.constant import CATEGORY_DISPLAY, CATEGORY_ORDER, DISPATCH_FAILURE_HINT
from seafood_order.data import search_catalog
from seafood_order.dispatch import DispatchResult, DispatchTracker, Notifier
from seafood_order.errors import ValidationError
from seafood_order.models import CatalogItem, OrderRecord
from seafood_order.quick_add_modal import QuickAddModal
from seafood_order.rendering import badge_style, format_item_label, format_line_item, format_money

logger = logging.getLogger(__name__)


class StorefrontApp(App):
    """A Textual storefront for ordering fresh seafood by weight."""

    TITLE = "Seaside Seafood"
    SUB_TITLE = "Fresh catch, priced per KG"

    class DispatchFinished(Message):
        """A background delivery finished."""

        def __init__(self, order: OrderRecord, result: DispatchResult) -> None:
            super().__init__()
            self.order = order
            self.result = result

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #catalog-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-total {
        height: 1;
        text-style: bold;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    category = reactive("fish")
    search_text = reactive("")
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next item"),
        ("up", "cycle_results(-1)", "Previous item"),
        ("down", "cycle_results(1)", "Next item"),
        ("enter", "quick_add", "Add to cart"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+o", "order_selected", "Order now", priority=True),
        Binding("ctrl+s", "checkout_cart", "Checkout cart", priority=True),
        ("ctrl+c", "cancel_search", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, notifier: Notifier, status: str = "") -> None:
        super().__init__()
        self.cart = CartHandle()
        self.tracker = DispatchTracker(notifier, on_result=self._dispatch_result_from_worker)
        self.system_status = status
        self.delivery_status = ""
        self._last_order_id = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="cart-total")
            with Vertical(id="catalog-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")

    def on_mount(self) -> None:
        logger.info("app_started status=%r", self.system_status)
        self._refresh_all()

    def on_unmount(self) -> None:
        # Deliveries still in flight finish after the UI is gone; main() waits for them.
        self.tracker.shutdown(wait=False)

    def _modal_open(self) -> bool:
        return isinstance(self.screen, (QuickAddModal, CheckoutModal))

    def on_key(self, event: Key) -> None:
        if self._modal_open():
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        char = event.character
        if self.input_state == "normal":
            key = char.lower()
            if key in {"1", "2", "3", "4"}:
                self.category = CATEGORY_ORDER[int(key) - 1]
                self.selected_index = 0
                self._refresh_search()
                event.stop()
                return

            if key == "/":
                self.input_state = "active"
                self.search_text = ""
                self.selected_index = 0
                self._refresh_search()
                event.stop()
                return

            if key == "j":
                self._move_cart_selection(1)
                event.stop()
                return

            if key == "k":
                self._move_cart_selection(-1)
                event.stop()
                return

            if key == "d":
                self._remove_selected_line()
                event.stop()
                return

            if key == "x":
                self.cart.clear()
                self._refresh_cart()
                event.stop()
                return
            return

        if not (char.isalnum() or char in " ()-"):
            return
        self.search_text += char
        self.selected_index = 0
        self._refresh_search()
        event.stop()

    def action_cancel_search(self) -> None:
        if self._modal_open():
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if self._modal_open():
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_backspace_query(self) -> None:
        if self._modal_open():
            return
        if self.input_state != "active":
            return

        if not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_quick_add(self) -> None:
        if self._modal_open():
            return
        item = self._selected_item()
        if item is None:
            return
        self.push_screen(QuickAddModal(item, self.cart, on_change=self._refresh_all))

    def action_order_selected(self) -> None:
        if self._modal_open():
            return
        item = self._selected_item()
        if item is None:
            return
        flow = CheckoutFlow.for_item(item, self.cart, self.tracker)
        self.push_screen(CheckoutModal(flow, on_change=lambda: self._after_checkout_step(flow)))

    def action_checkout_cart(self) -> None:
        if self._modal_open():
            return
        try:
            flow = CheckoutFlow.for_cart(self.cart, self.tracker)
        except ValidationError as exc:
            self.system_status = str(exc)
            self._refresh_search()
            return
        self.push_screen(CheckoutModal(flow, on_change=lambda: self._after_checkout_step(flow)))

    def _dispatch_result_from_worker(self, order: OrderRecord, result: DispatchResult) -> None:
        # post_message is thread-safe and never waits on the event loop.
        if not self.post_message(self.DispatchFinished(order, result)):
            logger.debug("dispatch_result_dropped order_id=%s ok=%s", order.order_id, result.ok)

    def on_storefront_app_dispatch_finished(self, message: DispatchFinished) -> None:
        order, result = message.order, message.result
        if result.ok:
            self.delivery_status = f"Order {order.order_id} delivered"
        else:
            self.delivery_status = (
                f"Order {order.order_id} confirmed, but the notification failed: {result.reason}. "
                f"{DISPATCH_FAILURE_HINT}"
            )
            self.notify(self.delivery_status, severity="warning", timeout=10)
        self._refresh_search()

    def _filtered_results(self) -> list[CatalogItem]:
        query = self.search_text if self.input_state == "active" else ""
        return search_catalog(query, self.category)

    def _selected_item(self) -> CatalogItem | None:
        results = self._filtered_results()
        if not results:
            return None
        if not (0 <= self.selected_index < len(results)):
            self.selected_index = 0
        return results[self.selected_index]

    def _after_checkout_step(self, flow: CheckoutFlow) -> None:
        state = flow.state
        if isinstance(state, Complete) and state.order.order_id != self._last_order_id:
            self._last_order_id = state.order.order_id
            self.delivery_status = f"Sending order {state.order.order_id}..."
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_search()

    def _move_cart_selection(self, delta: int) -> None:
        if not self.cart.lines:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(self.cart.lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(self.cart.lines)
        self._refresh_cart()

    def _remove_selected_line(self) -> None:
        if not self.cart.lines or self.cart_selected_index is None:
            return

        idx = self.cart_selected_index
        if not (0 <= idx < len(self.cart.lines)):
            self.cart_selected_index = None
            self._refresh_cart()
            return

        self.cart.remove(self.cart.lines[idx].line_id)

        if not self.cart.lines:
            self.cart_selected_index = None
        else:
            self.cart_selected_index = min(idx, len(self.cart.lines) - 1)

        self._refresh_cart()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            total_widget = self.query_one("#cart-total", Static)
        except NoMatches:
            return
        lines = self.cart.lines
        total_widget.update(f"{self.cart.total_items()} item(s)   Total {format_money(self.cart.total_price())}")
        if not lines:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        # Each cart line renders on two rows.
        visible_rows = max(1, self._visible_rows(cart_widget) // 2)
        start, end = self._window_bounds(len(lines), visible_rows, self.cart_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            text.append(pointer)
            text.append(f"{idx + 1}. ")
            text.append_text(format_line_item(lines[idx]))

        if end < len(lines):
            text.append("\n⋮", style="dim")

        cart_widget.update(text)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        status = self.delivery_status or self.system_status or "Ready"
        if self.input_state == "normal":
            text = Text()
            text.append(" ", style=badge_style(self.category))
            text.append(f" {CATEGORY_DISPLAY[self.category]}  (1-4 category, / search)\n")
            text.append("Enter add · Ctrl+O order now · Ctrl+S checkout\n", style="dim")
            text.append(status)
            bar.update(text)
            return

        text = Text()
        text.append("Search: ", style="bold")
        text.append(f"{self.search_text}|\n")
        text.append("Ctrl+C exit search\n", style="dim")
        text.append(status)
        bar.update(text)

    def _refresh_results(self, results: list[CatalogItem]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return

        if not results:
            results_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        visible_rows = self._visible_rows(results_widget)
        start, end = self._window_bounds(len(results), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_item_label(results[idx]))

        if end < len(results):
            lines.append("\n⋮", style="dim")

        results_widget.update(lines)
