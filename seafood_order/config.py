"""Runtime configuration defaults for notification delivery, logging and printing."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _env(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return value or default


def _env_float(name: str, default: float) -> float:
    raw = _env(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0 or value != value:
        logger.warning("invalid_config name=%s value=%r using=%s", name, raw, default)
        return default
    return value


NOTIFY_URL = _env("SEAFOOD_NOTIFY_URL", "http://localhost:3001/api/send-order-email")
NOTIFY_TIMEOUT_SECONDS = _env_float("SEAFOOD_NOTIFY_TIMEOUT", 15.0)
# "http" posts to NOTIFY_URL, "printer" prints a ticket on the thermal printer.
NOTIFY_SINK = _env("SEAFOOD_NOTIFY_SINK", "http").lower()

MPESA_TILL_NUMBER = _env("SEAFOOD_MPESA_TILL", "6030812")

LOG_PATH = _env("SEAFOOD_LOG_PATH", "logs/seafood-order.log")
LOG_LEVEL = _env("SEAFOOD_LOG_LEVEL", "INFO").upper()

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_FONT_OVERRIDE_ENV = "SEAFOOD_PRINTER_FONT_PATH"
PRINTER_LEFT_INDENT_PX = 8
