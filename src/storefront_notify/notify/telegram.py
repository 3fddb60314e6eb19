"""Thin wrapper around the Telegram Bot API.

Only the two methods the notifier needs are exposed: ``sendMessage``
and ``sendPhoto``.  Each call is a single POST with a JSON body and an
explicit timeout.  No retry adapter is mounted on the session: a
notification is attempted once and the outcome is reported to the
caller.

Failures are mapped onto the notifier's exception hierarchy:

* anything raised by :mod:`requests` (DNS, connection refused, timeout)
  and response bodies that are not JSON become :class:`TransportError`;
* a JSON body with ``ok: false`` becomes :class:`ProviderError`.

The bot token is part of the request URL, so it is scrubbed from every
error message produced here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from .errors import ProviderError, TransportError

PARSE_MODE = "HTML"


def _redact(text: str, token: str) -> str:
    return text.replace(token, "<token>") if token else text


def method_url(token: str, method: str, api_url: str = DEFAULT_API_URL) -> str:
    """Return the endpoint URL for a Bot API method."""
    return f"{api_url.rstrip('/')}/bot{token}/{method}"


def call_method(
    session: requests.Session,
    token: str,
    method: str,
    payload: Dict[str, Any],
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """POST ``payload`` to a Bot API method and return the decoded body.

    Args:
        session: HTTP session used for the request.
        token: Bot token.
        method: Bot API method name, e.g. ``sendMessage``.
        payload: JSON body.
        api_url: Bot API origin.
        timeout: Request timeout in seconds.

    Returns:
        The decoded JSON response, guaranteed to have ``ok`` set.

    Raises:
        TransportError: The request failed or the body was not JSON.
        ProviderError: Telegram reported ``ok: false``.
    """
    url = method_url(token, method, api_url)
    try:
        response = session.post(url, json=payload, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(
            _redact(f"Telegram {method} request failed: {exc}", token)
        ) from None
    try:
        body = response.json()
    except ValueError as exc:
        raise TransportError(
            f"Telegram {method} returned a non-JSON response "
            f"(HTTP {response.status_code}): {exc}"
        ) from None
    if not isinstance(body, dict):
        raise TransportError(f"Telegram {method} returned an unexpected payload")
    if not body.get("ok"):
        description = body.get("description") or f"HTTP {response.status_code}"
        error_code: Optional[int] = body.get("error_code")
        raise ProviderError(_redact(str(description), token), error_code=error_code)
    return body


def send_message(
    session: requests.Session,
    token: str,
    chat_id: str,
    text: str,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """Send an HTML‑formatted text message to ``chat_id``."""
    payload = {"chat_id": chat_id, "text": text, "parse_mode": PARSE_MODE}
    return call_method(session, token, "sendMessage", payload, api_url=api_url, timeout=timeout)


def send_photo(
    session: requests.Session,
    token: str,
    chat_id: str,
    photo_url: str,
    caption: str,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """Send a photo by URL with an HTML caption to ``chat_id``."""
    payload = {
        "chat_id": chat_id,
        "photo": photo_url,
        "caption": caption,
        "parse_mode": PARSE_MODE,
    }
    return call_method(session, token, "sendPhoto", payload, api_url=api_url, timeout=timeout)


__all__ = ["PARSE_MODE", "method_url", "call_method", "send_message", "send_photo"]
