"""Notification utilities for the storefront.

This package turns completed orders into Telegram messages and
dispatches them, together with product photos, to the shop's order
chat.  Delivery is best effort: one attempt per message, no queue.
"""

from .dispatcher import NotificationDispatcher
from .errors import FormatError, NotificationError, ProviderError, TransportError
from .formatting import format_order_notification
from .hooks import notify_order_created
from .models import DispatchReport, ImageResult

__all__ = [
    "NotificationDispatcher",
    "NotificationError",
    "FormatError",
    "TransportError",
    "ProviderError",
    "format_order_notification",
    "notify_order_created",
    "DispatchReport",
    "ImageResult",
]
