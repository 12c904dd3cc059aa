"""Thermal ticket printer used as an alternative order notification sink."""

from __future__ import annotations

import os
from pathlib import Path

from seafood_order.config import (
    MPESA_TILL_NUMBER,
    PRINTER_FONT_OVERRIDE_ENV,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from seafood_order.constant import CASH_ON_DELIVERY_LABEL, MPESA_LABEL, UNIT_LABEL
from seafood_order.dispatch import DispatchResult
from seafood_order.models import OrderRecord, PaymentMethod
from seafood_order.rendering import format_money, format_quantity

_SEPARATOR_HEIGHT_PX = 12
_SEPARATOR_THICKNESS_PX = 3
_TAIL_SPACER_PX = 60
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)
_SEPARATOR_TOKEN = "__SEP__"


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. SEAFOOD_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(PRINTER_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {PRINTER_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _payment_text(order: OrderRecord) -> str:
    if order.payment_method is PaymentMethod.MOBILE_MONEY:
        return f"{MPESA_LABEL} Till {MPESA_TILL_NUMBER}"
    return CASH_ON_DELIVERY_LABEL


def ticket_lines(order: OrderRecord) -> list[str]:
    """Plain text rows of the order ticket, top to bottom."""
    lines = [
        f"NEW ORDER ({order.order_type.value.upper()})",
        order.order_id,
        _SEPARATOR_TOKEN,
        order.customer.name,
        order.customer.phone,
        order.customer.delivery_location,
    ]
    if order.customer.email:
        lines.append(order.customer.email)
    lines.append(_SEPARATOR_TOKEN)
    for summary in order.lines:
        lines.append(f"{format_quantity(summary.quantity, UNIT_LABEL)} {summary.name}")
        lines.append(f"    {summary.preparation_label}")
        lines.append(f"    {format_money(summary.total)}")
    lines.append(_SEPARATOR_TOKEN)
    lines.append(_payment_text(order))
    lines.append(f"TOTAL {format_money(order.total_amount)}")
    return lines


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    from PIL import Image, ImageDraw

    probe = Image.new("1", (1, 1), color=1)
    draw = ImageDraw.Draw(probe)
    if draw.textbbox((0, 0), text, font=font)[2] <= max_width_px:
        return text
    ellipsis = "..."
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}{ellipsis}"
        if draw.textbbox((0, 0), candidate, font=font)[2] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return ellipsis


def _render_line(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    max_width = PRINTER_WIDTH_PX - (PRINTER_LEFT_INDENT_PX * 2)
    safe_text = _fit_text_to_px(text, font, max_width)

    probe = Image.new("1", (1, 1), color=1)
    bbox = ImageDraw.Draw(probe).textbbox((0, 0), safe_text, font=font)
    text_height = bbox[3] - bbox[1]
    canvas_height = max(12, PRINTER_FONT_SIZE + 10)

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), safe_text, font=font, fill=0)
    return img


def _render_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, top + _SEPARATOR_THICKNESS_PX - 1), fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def print_order_ticket(order: OrderRecord) -> None:
    """Print the order ticket and cut the paper."""
    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    for line in ticket_lines(order):
        if line == _SEPARATOR_TOKEN:
            printer.image(_render_separator())
        else:
            printer.image(_render_line(line, font))
    printer.image(_render_spacer(_TAIL_SPACER_PX))
    printer.cut()


class TicketPrinterNotifier:
    """Notifies the shop by printing the order on the counter printer."""

    def dispatch(self, order: OrderRecord) -> DispatchResult:
        try:
            print_order_ticket(order)
        except Exception as exc:
            return DispatchResult.failure(f"print failed: {exc}")
        return DispatchResult.success(order.order_id)
