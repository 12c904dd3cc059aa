"""Entry point for the seafood-order Textual app."""

from __future__ import annotations

import logging

from seafood_order.config import LOG_LEVEL, LOG_PATH, NOTIFY_SINK, NOTIFY_URL
from seafood_order.dispatch import build_notifier
from seafood_order.logging_setup import configure_logging
from seafood_order.printer import check_printer_dependencies
from seafood_order.storefront_app import StorefrontApp

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Textual application."""
    configure_logging(LOG_PATH, LOG_LEVEL)
    if NOTIFY_SINK == "printer":
        _, status = check_printer_dependencies()
    else:
        status = f"Orders go to {NOTIFY_URL}"
    logger.info("startup sink=%s status=%r", NOTIFY_SINK, status)
    app = StorefrontApp(build_notifier(NOTIFY_SINK), status=status)
    app.run()
    app.tracker.shutdown(wait=True)
    logger.info("shutdown")


if __name__ == "__main__":
    main()
