"""Exceptions raised by the notification layer."""

from __future__ import annotations

from typing import Optional


class NotificationError(Exception):
    """Base class for all notifier failures."""


class FormatError(NotificationError):
    """The order could not be rendered into a message."""


class TransportError(NotificationError):
    """The request never produced a usable provider response.

    Covers DNS failures, refused connections, timeouts and bodies that
    are not valid JSON.
    """


class ProviderError(NotificationError):
    """Telegram answered with ``ok: false``."""

    def __init__(self, description: str, error_code: Optional[int] = None) -> None:
        self.description = description
        self.error_code = error_code
        if error_code is not None:
            super().__init__(f"Telegram error {error_code}: {description}")
        else:
            super().__init__(f"Telegram error: {description}")
