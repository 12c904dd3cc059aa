import threading

from seafood_order.assembly import assemble
from seafood_order.cart import Cart
from seafood_order.dispatch import DispatchResult
from seafood_order.models import CustomerDetails, PaymentMethod, PreparationOption
from seafood_order.storefront_app import StorefrontApp


def test_dispatch_result_from_worker_returns_without_a_running_loop(tuna, notifier):
    line, _ = Cart().add(tuna, 1, PreparationOption.AS_IS)
    order = assemble(CustomerDetails("Amina", "0700", "Bamburi"), [line], PaymentMethod.CASH_ON_DELIVERY)
    app = StorefrontApp(notifier)
    try:
        worker = threading.Thread(
            target=app._dispatch_result_from_worker,
            args=(order, DispatchResult.success("msg-1")),
        )
        worker.start()
        worker.join(timeout=5)

        assert not worker.is_alive()
    finally:
        app.tracker.shutdown(wait=True)
