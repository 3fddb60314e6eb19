"""Order notification dispatcher.

:class:`NotificationDispatcher` renders a completed order into a
message and delivers it, best effort, to the configured Telegram chat.
After the main message has been delivered, a photo is sent for every
ordered item that carries an image.

Failure handling follows a simple rule.  Problems with the order itself
and failure of the main message are raised to the caller; failure of an
individual product photo is logged, recorded in the returned
:class:`DispatchReport` and otherwise ignored.  A dispatcher without a
bot token or chat id never touches the network and never raises
because of the missing configuration.

The HTTP calls are blocking (:mod:`requests`); the async orchestration
runs them in a worker thread and waits between photos with
:func:`asyncio.sleep`, so other coroutines keep running while an order
is being dispatched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests

from ..config import NotifierConfig
from . import telegram
from .formatting import (
    OrderLike,
    coerce_order,
    format_item_caption,
    format_order_notification,
    resolve_image_url,
)
from .models import DispatchReport, ImageResult

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Send order notifications to a single Telegram chat."""

    def __init__(
        self,
        config: NotifierConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the dispatcher.

        Args:
            config: Immutable notifier configuration.
            session: HTTP session to use.  A new :class:`requests.Session`
                is created when omitted; tests pass a fake.
        """
        self.config = config
        self.session = session if session is not None else requests.Session()

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def close(self) -> None:
        self.session.close()

    def _warn_unconfigured(self, what: str) -> None:
        logger.warning(
            "Telegram credentials not configured (missing %s); %s not sent",
            ", ".join(self.config.missing_variables()),
            what,
        )

    def format_order_notification(self, order: OrderLike) -> str:
        """Render ``order`` using the configured display timezone."""
        return format_order_notification(order, self.config.display_timezone)

    def send_message(self, text: str) -> bool:
        """Send a text message to the configured chat.

        Returns:
            True when Telegram accepted the message, False when the
            dispatcher is not configured.

        Raises:
            TransportError: The request could not be completed.
            ProviderError: Telegram rejected the message.
        """
        if not self.is_configured:
            self._warn_unconfigured("message")
            return False
        telegram.send_message(
            self.session,
            self.config.bot_token,
            self.config.chat_id,
            text,
            api_url=self.config.api_url,
            timeout=self.config.timeout,
        )
        logger.info("Telegram message sent to chat %s", self.config.chat_id)
        return True

    def send_product_image(self, image_url: str, caption: str) -> bool:
        """Send a product photo by URL.  Same contract as :meth:`send_message`."""
        if not self.is_configured:
            self._warn_unconfigured("photo")
            return False
        telegram.send_photo(
            self.session,
            self.config.bot_token,
            self.config.chat_id,
            image_url,
            caption,
            api_url=self.config.api_url,
            timeout=self.config.timeout,
        )
        logger.info("Telegram photo sent: %s", image_url)
        return True

    async def send_order_with_images(self, order: OrderLike) -> DispatchReport:
        """Send the order message followed by one photo per imaged item.

        The order is validated and rendered first, so a malformed order
        raises :class:`FormatError` even when the dispatcher is not
        configured.  The main message must be delivered before any photo
        is attempted; its failure propagates.  Any exception raised while
        sending a photo is caught per item and recorded in the report.

        Returns:
            A :class:`DispatchReport` listing each attempted photo.
        """
        parsed = coerce_order(order)
        text = self.format_order_notification(parsed)
        report = DispatchReport(order_id=parsed.id)

        delivered = await asyncio.to_thread(self.send_message, text)
        if not delivered:
            return report
        report.message_delivered = True

        attempted = 0
        for item in parsed.items:
            if not item.image:
                continue
            if attempted:
                await asyncio.sleep(self.config.image_delay)
            attempted += 1
            image_url = resolve_image_url(item.image, self.config.base_url)
            caption = format_item_caption(item)
            try:
                sent = await asyncio.to_thread(self.send_product_image, image_url, caption)
            except Exception as exc:
                logger.exception(
                    "Failed to send image for order %s item %r", parsed.id, item.name
                )
                report.images.append(
                    ImageResult(
                        item_name=item.name,
                        image_url=image_url,
                        delivered=False,
                        error=str(exc),
                    )
                )
                continue
            report.images.append(
                ImageResult(item_name=item.name, image_url=image_url, delivered=sent)
            )

        if report.failed_images:
            logger.warning(
                "Order %s notification sent; %d of %d images failed",
                parsed.id,
                len(report.failed_images),
                len(report.images),
            )
        return report


__all__ = ["NotificationDispatcher"]
