"""
Checkout state machine.

Each step is its own frozen state type carrying only what is known at that
step. Transition functions take the current state and return the next one,
raising ``ValidationError`` when the input gate is not met and
``InvalidTransition`` when called from the wrong step. ``CheckoutFlow`` holds
the current state for one modal and is the boundary that turns validation
errors into a message while staying on the same step.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, TypeVar, Union

from seafood_order.assembly import assemble
from seafood_order.cart import CartHandle, make_line, new_line_id
from seafood_order.dispatch import DispatchResult, DispatchTracker
from seafood_order.errors import InvalidTransition, ValidationError
from seafood_order.models import (
    CatalogItem,
    CustomerDetails,
    LineItem,
    OrderRecord,
    PaymentMethod,
    PreparationOption,
    PricedLine,
)
from seafood_order.pricing import (
    DEFAULT_QUANTITY,
    decrement_quantity,
    increment_quantity,
    price,
    validate_option,
)

logger = logging.getLogger(__name__)


class Flow(str, Enum):
    SINGLE = "single"
    CART = "cart"


@dataclass(frozen=True)
class ItemChoice:
    """The catalog item and weight picked in the single-item flow."""

    item: CatalogItem
    quantity: Decimal


@dataclass(frozen=True)
class Selecting:
    choice: ItemChoice


@dataclass(frozen=True)
class EnteringDetails:
    flow: Flow
    choice: ItemChoice | None = None


@dataclass(frozen=True)
class ChoosingPreparation:
    choice: ItemChoice
    customer: CustomerDetails


@dataclass(frozen=True)
class ChoosingPayment:
    flow: Flow
    customer: CustomerDetails
    lines: tuple[LineItem, ...]


@dataclass(frozen=True)
class Confirming:
    flow: Flow
    customer: CustomerDetails
    lines: tuple[LineItem, ...]
    payment_method: PaymentMethod


@dataclass(frozen=True)
class Complete:
    flow: Flow
    order: OrderRecord


CheckoutState = Union[Selecting, EnteringDetails, ChoosingPreparation, ChoosingPayment, Confirming, Complete]

SINGLE_STEPS: tuple[type, ...] = (Selecting, EnteringDetails, ChoosingPreparation, ChoosingPayment, Confirming, Complete)
CART_STEPS: tuple[type, ...] = (EnteringDetails, ChoosingPayment, Confirming, Complete)

_S = TypeVar("_S")


def _expect(state: CheckoutState, expected: type[_S]) -> _S:
    if not isinstance(state, expected):
        raise InvalidTransition(f"Cannot do this from {type(state).__name__}; expected {expected.__name__}")
    return state


def start_single(item: CatalogItem, quantity: Decimal = DEFAULT_QUANTITY) -> Selecting:
    return Selecting(ItemChoice(item, quantity))


def start_cart() -> EnteringDetails:
    return EnteringDetails(Flow.CART)


def increment(state: CheckoutState) -> Selecting:
    current = _expect(state, Selecting)
    return Selecting(ItemChoice(current.choice.item, increment_quantity(current.choice.quantity)))


def decrement(state: CheckoutState) -> Selecting:
    current = _expect(state, Selecting)
    return Selecting(ItemChoice(current.choice.item, decrement_quantity(current.choice.quantity)))


def confirm_selection(state: CheckoutState) -> EnteringDetails:
    current = _expect(state, Selecting)
    return EnteringDetails(Flow.SINGLE, current.choice)


def submit_details(
    state: CheckoutState,
    customer: CustomerDetails,
    cart_lines: Iterable[LineItem] = (),
) -> ChoosingPreparation | ChoosingPayment:
    """Gate on name, phone and delivery location being filled in."""
    current = _expect(state, EnteringDetails)
    missing = customer.missing_fields()
    if missing:
        labels = ", ".join(field_name.replace("_", " ") for field_name in missing)
        raise ValidationError(f"Please fill in: {labels}")

    if current.flow is Flow.SINGLE:
        if current.choice is None:
            raise InvalidTransition("Single-item details need a selected item")
        return ChoosingPreparation(current.choice, customer)

    lines = tuple(cart_lines)
    if not lines:
        raise ValidationError("Your cart is empty")
    return ChoosingPayment(Flow.CART, customer, lines)


def choose_preparation(state: CheckoutState, option: PreparationOption | None) -> ChoosingPayment:
    current = _expect(state, ChoosingPreparation)
    if option is None:
        raise ValidationError("Choose how the item should be prepared")
    item = current.choice.item
    validate_option(item, option)
    line = make_line(new_line_id(item, option), item, current.choice.quantity, option)
    return ChoosingPayment(Flow.SINGLE, current.customer, (line,))


def choose_payment(state: CheckoutState, method: PaymentMethod | None) -> Confirming:
    current = _expect(state, ChoosingPayment)
    if method is None:
        raise ValidationError("Choose a payment method")
    return Confirming(current.flow, current.customer, current.lines, method)


def confirm(state: CheckoutState, order_id: str | None = None) -> Complete:
    """Assemble the order. Dispatching it is the caller's job."""
    current = _expect(state, Confirming)
    order = assemble(current.customer, current.lines, current.payment_method, order_id=order_id)
    return Complete(current.flow, order)


class CheckoutFlow:
    """
    One checkout, single-item or whole-cart, driven by user actions.

    Validation failures set ``error`` and leave the state unchanged; the
    action methods return True only when the flow moved forward.
    """

    def __init__(self, state: CheckoutState, cart: CartHandle, tracker: DispatchTracker) -> None:
        self.state: CheckoutState = state
        self.cart = cart
        self.tracker = tracker
        self.error = ""
        self.aborted = False
        self.submission: Future[DispatchResult] | None = None

    @classmethod
    def for_item(cls, item: CatalogItem, cart: CartHandle, tracker: DispatchTracker) -> CheckoutFlow:
        return cls(start_single(item), cart, tracker)

    @classmethod
    def for_cart(cls, cart: CartHandle, tracker: DispatchTracker) -> CheckoutFlow:
        if not cart.lines:
            raise ValidationError("Your cart is empty")
        return cls(start_cart(), cart, tracker)

    @property
    def flow(self) -> Flow:
        state = self.state
        if isinstance(state, Selecting) or isinstance(state, ChoosingPreparation):
            return Flow.SINGLE
        return state.flow

    @property
    def steps(self) -> tuple[type, ...]:
        return SINGLE_STEPS if self.flow is Flow.SINGLE else CART_STEPS

    @property
    def step_number(self) -> int:
        """1-based position of the current step within this flow."""
        return self.steps.index(type(self.state)) + 1

    @property
    def is_complete(self) -> bool:
        return isinstance(self.state, Complete)

    def current_item(self) -> CatalogItem | None:
        state = self.state
        if isinstance(state, (Selecting, ChoosingPreparation)):
            return state.choice.item
        if isinstance(state, EnteringDetails) and state.choice is not None:
            return state.choice.item
        return None

    def preview(self, option: PreparationOption = PreparationOption.AS_IS) -> PricedLine | None:
        """Live price while the single-item flow is still picking quantity or preparation."""
        state = self.state
        choice = None
        if isinstance(state, (Selecting, ChoosingPreparation)):
            choice = state.choice
        elif isinstance(state, EnteringDetails):
            choice = state.choice
        if choice is None:
            return None
        return price(choice.item, choice.quantity, option)

    def total(self) -> Decimal:
        """Amount the customer will be asked to pay at this step."""
        state = self.state
        if isinstance(state, Complete):
            return state.order.total_amount
        if isinstance(state, (ChoosingPayment, Confirming)):
            return sum((line.total_price for line in state.lines), Decimal("0"))
        preview = self.preview()
        if preview is not None:
            return preview.total
        return self.cart.total_price()

    def _advance(self, action: str, next_state: CheckoutState) -> bool:
        logger.debug(
            "checkout_step action=%s from=%s to=%s",
            action,
            type(self.state).__name__,
            type(next_state).__name__,
        )
        self.state = next_state
        self.error = ""
        return True

    def _reject(self, action: str, exc: ValidationError) -> bool:
        logger.info("checkout_rejected action=%s state=%s reason=%s", action, type(self.state).__name__, exc)
        self.error = str(exc)
        return False

    def _check_open(self) -> None:
        if self.aborted:
            raise InvalidTransition("Checkout was cancelled")

    def increment(self) -> bool:
        self._check_open()
        return self._advance("increment", increment(self.state))

    def decrement(self) -> bool:
        self._check_open()
        return self._advance("decrement", decrement(self.state))

    def continue_selection(self) -> bool:
        self._check_open()
        return self._advance("continue_selection", confirm_selection(self.state))

    def submit_details(self, name: str, phone: str, delivery_location: str, email: str | None = None) -> bool:
        self._check_open()
        customer = CustomerDetails(
            name=name.strip(),
            phone=phone.strip(),
            delivery_location=delivery_location.strip(),
            email=(email or "").strip() or None,
        )
        try:
            next_state = submit_details(self.state, customer, self.cart.lines)
        except ValidationError as exc:
            return self._reject("submit_details", exc)
        return self._advance("submit_details", next_state)

    def choose_preparation(self, option: PreparationOption | None) -> bool:
        self._check_open()
        try:
            next_state = choose_preparation(self.state, option)
        except ValidationError as exc:
            return self._reject("choose_preparation", exc)
        return self._advance("choose_preparation", next_state)

    def choose_payment(self, method: PaymentMethod | None) -> bool:
        self._check_open()
        try:
            next_state = choose_payment(self.state, method)
        except ValidationError as exc:
            return self._reject("choose_payment", exc)
        return self._advance("choose_payment", next_state)

    def confirm(self) -> OrderRecord:
        """
        Complete the checkout and hand the order to dispatch.

        The state becomes ``Complete`` and the cart is emptied before delivery
        has finished; the delivery outcome only reaches ``tracker.on_result``.
        """
        self._check_open()
        completed = confirm(self.state)
        self._advance("confirm", completed)
        self.cart.clear()
        try:
            self.submission = self.tracker.submit(completed.order)
        except RuntimeError:
            logger.exception("dispatch_submit_failed order_id=%s", completed.order.order_id)
        return completed.order

    def abort(self) -> None:
        """Discard the flow. Not possible once the order is placed."""
        if self.is_complete:
            raise InvalidTransition("Order already placed")
        logger.debug("checkout_aborted state=%s", type(self.state).__name__)
        self.aborted = True
