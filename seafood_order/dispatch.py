"""Notification dispatch: hand a confirmed order to the business owner."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import httpx

from seafood_order.assembly import order_payload
from seafood_order.config import NOTIFY_SINK, NOTIFY_TIMEOUT_SECONDS, NOTIFY_URL
from seafood_order.models import OrderRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one delivery attempt."""

    ok: bool
    delivery_id: str = ""
    reason: str = ""

    @classmethod
    def success(cls, delivery_id: str = "") -> DispatchResult:
        return cls(ok=True, delivery_id=delivery_id)

    @classmethod
    def failure(cls, reason: str) -> DispatchResult:
        return cls(ok=False, reason=reason or "unknown error")


class Notifier(Protocol):
    """Delivers an order to a human operator. Must return, never raise."""

    def dispatch(self, order: OrderRecord) -> DispatchResult: ...


def _delivery_id(body: dict[str, Any]) -> str:
    message_id = body.get("messageId")
    if message_id:
        return str(message_id)
    api_response = body.get("apiResponse")
    if isinstance(api_response, dict) and api_response.get("id"):
        return str(api_response["id"])
    return ""


def _error_text(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text.strip()


class HttpNotifier:
    """POSTs the order as JSON to the email service."""

    def __init__(
        self,
        url: str = NOTIFY_URL,
        timeout: float = NOTIFY_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self._client = client or httpx.Client(timeout=timeout)

    def dispatch(self, order: OrderRecord) -> DispatchResult:
        try:
            response = self._client.post(self.url, json=order_payload(order))
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return DispatchResult.failure(f"{type(exc).__name__}: {exc}")

        if not response.is_success:
            detail = _error_text(response)
            reason = f"HTTP {response.status_code}"
            return DispatchResult.failure(f"{reason}: {detail}" if detail else reason)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if body.get("success") is False:
            return DispatchResult.failure(str(body.get("error") or "notification service reported failure"))
        return DispatchResult.success(_delivery_id(body))

    def close(self) -> None:
        self._client.close()


def build_notifier(sink: str = NOTIFY_SINK) -> Notifier:
    """Create the configured notifier ("http" or "printer")."""
    if sink == "printer":
        from seafood_order.printer import TicketPrinterNotifier

        return TicketPrinterNotifier()
    if sink != "http":
        logger.warning("unknown_notify_sink sink=%r using=http", sink)
    return HttpNotifier()


ResultHook = Callable[[OrderRecord, DispatchResult], None]


class DispatchTracker:
    """
    Runs deliveries in the background and reports each outcome once.

    ``submit`` returns immediately with a future; the checkout never waits on
    it. ``on_result`` is called from the worker thread after every delivery.
    """

    def __init__(self, notifier: Notifier, on_result: ResultHook | None = None, executor: ThreadPoolExecutor | None = None) -> None:
        self.notifier = notifier
        self.on_result = on_result
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="order-dispatch")

    def submit(self, order: OrderRecord) -> Future[DispatchResult]:
        logger.info(
            "order_submitted order_id=%s type=%s lines=%d total=%s",
            order.order_id,
            order.order_type.value,
            len(order.lines),
            order.total_amount,
        )
        future = self._executor.submit(self._deliver, order)
        future.add_done_callback(lambda done: self._report(order, done.result()))
        return future

    def _deliver(self, order: OrderRecord) -> DispatchResult:
        try:
            return self.notifier.dispatch(order)
        except Exception as exc:
            logger.exception("dispatch_crashed order_id=%s", order.order_id)
            return DispatchResult.failure(str(exc))

    def _report(self, order: OrderRecord, result: DispatchResult) -> None:
        if result.ok:
            logger.info("dispatch_ok order_id=%s delivery_id=%s", order.order_id, result.delivery_id)
        else:
            logger.warning("dispatch_failed order_id=%s reason=%s", order.order_id, result.reason)
        if self.on_result is None:
            return
        try:
            self.on_result(order, result)
        except Exception:
            logger.exception("dispatch_hook_failed order_id=%s", order.order_id)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
