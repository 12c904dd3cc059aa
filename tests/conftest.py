from __future__ import annotations

import pytest

from seafood_order.cart import CartHandle
from seafood_order.data import catalog_item
from seafood_order.dispatch import DispatchResult, DispatchTracker
from seafood_order.models import CatalogItem, OrderRecord


class RecordingNotifier:
    def __init__(self, result: DispatchResult | None = None) -> None:
        self.result = result or DispatchResult.success("msg-1")
        self.orders: list[OrderRecord] = []

    def dispatch(self, order: OrderRecord) -> DispatchResult:
        self.orders.append(order)
        return self.result


class ExplodingNotifier:
    def dispatch(self, order: OrderRecord) -> DispatchResult:
        raise RuntimeError("smtp is down")


@pytest.fixture
def tuna() -> CatalogItem:
    return catalog_item("tuna-fillet")


@pytest.fixture
def king_prawns() -> CatalogItem:
    return catalog_item("king-prawns")


@pytest.fixture
def oyster() -> CatalogItem:
    return catalog_item("oyster")


@pytest.fixture
def kalamari() -> CatalogItem:
    return catalog_item("kalamari")


@pytest.fixture
def cart() -> CartHandle:
    return CartHandle()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(DispatchResult.failure("HTTP 500: SendPulse API error"))


@pytest.fixture
def exploding_notifier() -> ExplodingNotifier:
    return ExplodingNotifier()


@pytest.fixture
def results() -> list[tuple[OrderRecord, DispatchResult]]:
    return []


@pytest.fixture
def tracker(notifier, results):
    tracker = DispatchTracker(notifier, on_result=lambda order, result: results.append((order, result)))
    yield tracker
    tracker.shutdown(wait=True)
