"""
Configuration for the storefront order notifier.

This module centralises the constants and the runtime configuration
used by the notification dispatcher.  The configuration is read from
the process environment exactly once (see :func:`load_config`) and is
then passed around as an immutable :class:`NotifierConfig`.  Nothing
else in the package reads environment variables.

The recognised environment variables are:

* ``TELEGRAM_BOT_TOKEN`` – the Telegram bot token used to authenticate.
* ``TELEGRAM_CHAT_ID`` – the chat (group, channel or user) that receives
  order notifications.
* ``BASE_URL`` – public origin of the storefront, used to turn relative
  product image paths into absolute URLs.  Defaults to
  ``http://localhost:3000``.
* ``TELEGRAM_API_URL`` – optional override of the Bot API origin.
* ``TELEGRAM_TIMEOUT`` – per-request timeout in seconds (default 10).
* ``TELEGRAM_IMAGE_DELAY`` – pause between product photos in seconds
  (default 0.3).
* ``NOTIFY_TIMEZONE`` – IANA zone used to render order dates (default
  ``UTC``).

A missing bot token or chat id is not an error: the dispatcher simply
does not send anything.
"""

from __future__ import annotations

import os
from typing import Final, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Branding used in CLI help and test messages.
PROJECT_NAME: Final[str] = "Chen Electronic"

DEFAULT_API_URL: Final[str] = "https://api.telegram.org"

# Fallback origin for relative image paths; matches the storefront's
# default development port.
DEFAULT_BASE_URL: Final[str] = "http://localhost:3000"

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

# Telegram throttles bursts of photos to the same chat.
DEFAULT_IMAGE_DELAY_SECONDS: Final[float] = 0.3

DEFAULT_TIMEZONE: Final[str] = "UTC"

# Variables without which no notification is ever sent.
REQUIRED_ENV_VARS: Final[list[str]] = ["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"]


class NotifierConfig(BaseModel):
    """Immutable notifier settings.

    Attributes:
        bot_token: Telegram bot token, or ``None`` when not configured.
        chat_id: Destination chat id, or ``None`` when not configured.
        base_url: Origin prepended to relative product image paths.
        api_url: Origin of the Telegram Bot API.
        timeout: Timeout in seconds applied to every outbound request.
        image_delay: Pause in seconds between successive product photos.
        display_timezone: IANA zone used when rendering order dates.
    """

    model_config = ConfigDict(frozen=True)

    bot_token: Optional[str] = None
    chat_id: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    image_delay: float = Field(default=DEFAULT_IMAGE_DELAY_SECONDS, ge=0)
    display_timezone: str = DEFAULT_TIMEZONE

    @property
    def is_configured(self) -> bool:
        """Return True when both the bot token and chat id are present."""
        return bool(self.bot_token) and bool(self.chat_id)

    def missing_variables(self) -> List[str]:
        """Return the names of required variables that are not set, sorted."""
        missing: List[str] = []
        if not self.bot_token:
            missing.append("TELEGRAM_BOT_TOKEN")
        if not self.chat_id:
            missing.append("TELEGRAM_CHAT_ID")
        return sorted(missing)


def _clean(value: Optional[str]) -> Optional[str]:
    # Blank strings in .env files count as unset
    if value is None:
        return None
    value = value.strip()
    return value or None


def _float_or_default(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def load_config(environ: Optional[Mapping[str, str]] = None) -> NotifierConfig:
    """Build a :class:`NotifierConfig` from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ``; tests
            pass a plain dict.

    Returns:
        A frozen configuration object.  Unparseable numeric values fall
        back to their defaults rather than raising.
    """
    env = os.environ if environ is None else environ
    timeout = _float_or_default(_clean(env.get("TELEGRAM_TIMEOUT")), DEFAULT_TIMEOUT_SECONDS)
    if timeout == 0:
        timeout = DEFAULT_TIMEOUT_SECONDS
    return NotifierConfig(
        bot_token=_clean(env.get("TELEGRAM_BOT_TOKEN")),
        chat_id=_clean(env.get("TELEGRAM_CHAT_ID")),
        base_url=(_clean(env.get("BASE_URL")) or DEFAULT_BASE_URL).rstrip("/"),
        api_url=(_clean(env.get("TELEGRAM_API_URL")) or DEFAULT_API_URL).rstrip("/"),
        timeout=timeout,
        image_delay=_float_or_default(
            _clean(env.get("TELEGRAM_IMAGE_DELAY")), DEFAULT_IMAGE_DELAY_SECONDS
        ),
        display_timezone=_clean(env.get("NOTIFY_TIMEZONE")) or DEFAULT_TIMEZONE,
    )


__all__ = [
    "PROJECT_NAME",
    "DEFAULT_API_URL",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_IMAGE_DELAY_SECONDS",
    "DEFAULT_TIMEZONE",
    "REQUIRED_ENV_VARS",
    "NotifierConfig",
    "load_config",
]
