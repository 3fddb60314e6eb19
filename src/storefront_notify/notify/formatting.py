"""Rendering of orders into Telegram messages.

Everything in this module is pure: no I/O and no clock access, so the
same order always renders to the same text.  Messages use Telegram's
HTML parse mode; free‑form customer input is escaped so that a stray
``<`` in an address cannot make the provider reject the message.
"""

from __future__ import annotations

import html
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import DEFAULT_BASE_URL, DEFAULT_TIMEZONE
from ..orders.models import Order, OrderItem
from .errors import FormatError

OrderLike = Union[Order, Mapping[str, Any]]

_CENT = Decimal("0.01")


def _esc(value: Optional[str]) -> str:
    if value is None or value == "":
        return "-"
    return html.escape(str(value), quote=False)


def coerce_order(order: OrderLike) -> Order:
    """Return ``order`` as an :class:`Order`, validating mappings.

    Raises:
        FormatError: If the mapping is missing fields, has fields of the
            wrong type, or carries an ``items`` string that is not a
            JSON list.
    """
    if isinstance(order, Order):
        return order
    if not isinstance(order, Mapping):
        raise FormatError(f"Unsupported order value: {type(order).__name__}")
    try:
        return Order.model_validate(dict(order))
    except ValidationError as exc:
        raise FormatError(f"Invalid order: {exc}") from exc


def format_money(amount: Decimal) -> str:
    """Format an amount as dollars with exactly two decimals.

    Raises:
        FormatError: If the amount has too many digits to be rounded to
            cents in the current decimal context.
    """
    try:
        cents = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise FormatError(f"Amount {amount} cannot be formatted") from exc
    return f"${cents:.2f}"


def normalise_payment_method(method: Optional[str]) -> str:
    """Turn ``cash_on_delivery`` into ``CASH ON DELIVERY``."""
    if not method:
        return "-"
    return _esc(method.replace("_", " ").upper())


def format_created_at(created_at: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Render a timestamp like ``3/14/2025, 9:05:00 AM UTC``.

    Naive timestamps are taken to be UTC, which is what SQLite's
    ``CURRENT_TIMESTAMP`` produces.
    """
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise FormatError(f"Unknown timezone '{tz_name}'") from exc
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    local = created_at.astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem} {local.tzname()}"
    )


def resolve_image_url(image: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Return an absolute URL for a product image.

    Absolute ``http``/``https`` URLs pass through unchanged; anything else
    is treated as a path on the storefront origin.
    """
    if image.lower().startswith(("http://", "https://")):
        return image
    return f"{base_url.rstrip('/')}/{image.lstrip('/')}"


def format_item_line(item: OrderItem) -> str:
    return f"• <b>{_esc(item.name)}</b> x{item.quantity} - {format_money(item.line_total)}"


def format_item_caption(item: OrderItem) -> str:
    """Caption sent with a product photo."""
    return (
        f"<b>{_esc(item.name)}</b>\n"
        f"Quantity: {item.quantity}\n"
        f"Total: {format_money(item.line_total)}"
    )


def format_order_notification(order: OrderLike, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Render the order notification message.

    Args:
        order: An :class:`Order` or a mapping shaped like a row of the
            ``orders`` table.  ``items`` may be a JSON string or a list.
        tz_name: IANA zone used for the order date.

    Returns:
        The HTML‑formatted message text.  The grand total is taken from
        ``order.total``; it is never recomputed from the items.

    Raises:
        FormatError: If the order cannot be decoded or the message ends
            up empty.
    """
    parsed = coerce_order(order)
    items_list = "\n".join(format_item_line(item) for item in parsed.items)
    location = f"{_esc(parsed.shipping_city)}, {_esc(parsed.shipping_country)} {_esc(parsed.shipping_zip)}"

    lines = [
        "<b>📦 New Order Received!</b>",
        "",
        f"<b>Order #{parsed.id}</b>",
        "",
        "<b>👤 Customer</b>",
        f"Name: {_esc(parsed.shipping_name)}",
        f"Email: {_esc(parsed.shipping_email)}",
        f"Phone: {_esc(parsed.shipping_phone)}",
        "",
        "<b>📍 Shipping Address</b>",
        _esc(parsed.shipping_address),
        location,
        "",
        "<b>🛒 Items Ordered</b>",
        items_list,
        "",
        f"<b>Total Amount:</b> {format_money(parsed.total)}",
        f"<b>Payment Method:</b> {normalise_payment_method(parsed.payment_method)}",
        f"<b>Status:</b> {_esc(parsed.status)}",
        "",
        f"<b>Date:</b> {format_created_at(parsed.created_at, tz_name)}",
    ]
    message = "\n".join(lines).strip()
    if not message:
        raise FormatError("Rendered notification is empty")
    return message


__all__ = [
    "OrderLike",
    "coerce_order",
    "format_money",
    "normalise_payment_method",
    "format_created_at",
    "resolve_image_url",
    "format_item_line",
    "format_item_caption",
    "format_order_notification",
]
