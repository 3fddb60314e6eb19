"""Integration point for the order‑creation flow.

The storefront's ``POST /api/orders`` handler persists the order,
answers the customer and then awaits :func:`notify_order_created`.  The
customer‑facing response never depends on the notification outcome:
every notifier failure is logged here and swallowed.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .dispatcher import NotificationDispatcher
from .errors import NotificationError
from .formatting import OrderLike
from .models import DispatchReport

logger = logging.getLogger(__name__)


def _order_id(order: OrderLike) -> Any:
    if isinstance(order, Mapping):
        return order.get("id")
    return getattr(order, "id", None)


async def notify_order_created(
    dispatcher: NotificationDispatcher, order: OrderLike
) -> Optional[DispatchReport]:
    """Dispatch the notification for a freshly persisted order.

    Returns:
        The dispatch report, or ``None`` when the main message could not
        be rendered or sent.  Notification errors never propagate.
    """
    try:
        report = await dispatcher.send_order_with_images(order)
    except NotificationError:
        logger.exception("Order notification failed for order %s", _order_id(order))
        return None
    if not report.message_delivered:
        logger.info("Order %s notification skipped", report.order_id)
    return report


__all__ = ["notify_order_created"]
