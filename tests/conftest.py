"""Shared fixtures for the notifier tests.

No test talks to Telegram.  Dispatchers are built around
:class:`FakeSession`, which records every POST and replays scripted
outcomes in order.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from storefront_notify.config import NotifierConfig
from storefront_notify.notify.dispatcher import NotificationDispatcher

TOKEN = "123456:secret-token"
CHAT_ID = "-100777"


class FakeResponse:
    """A simple stand‑in for ``requests.Response``.

    ``data`` of type ``str`` simulates a body that is not JSON.
    """

    def __init__(self, data: Any, status_code: int = 200) -> None:
        self._data = data
        self.status_code = status_code
        self.text = data if isinstance(data, str) else json.dumps(data)

    def json(self) -> Any:
        if isinstance(self._data, str):
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._data


class FakeSession:
    """Records POST calls and replays scripted outcomes.

    Each outcome is a dict (JSON body), a str (non‑JSON body with HTTP
    502) or an exception instance (raised from ``post``).  Once the
    script runs out every call succeeds.
    """

    def __init__(self, outcomes: Optional[List[Any]] = None) -> None:
        self.outcomes = list(outcomes or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        outcome = self.outcomes.pop(0) if self.outcomes else {"ok": True, "result": {}}
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, str):
            return FakeResponse(outcome, status_code=502)
        return FakeResponse(outcome, status_code=200 if outcome.get("ok") else 400)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_dispatcher():
    """Return a factory building a dispatcher around a fresh FakeSession.

    Keyword arguments override :class:`NotifierConfig` fields; by default
    the dispatcher is fully configured with no delay between photos.
    """

    def _make(outcomes: Optional[List[Any]] = None, **overrides: Any):
        settings: Dict[str, Any] = {
            "bot_token": TOKEN,
            "chat_id": CHAT_ID,
            "base_url": "https://shop.example",
            "image_delay": 0,
        }
        settings.update(overrides)
        session = FakeSession(outcomes)
        dispatcher = NotificationDispatcher(NotifierConfig(**settings), session=session)
        return dispatcher, session

    return _make


@pytest.fixture
def sample_order() -> Dict[str, Any]:
    """Order #42 as stored in the ``orders`` table (items serialised)."""
    return {
        "id": 42,
        "items": json.dumps([{"name": "Cable", "quantity": 2, "price": 5.5}]),
        "total": 11,
        "shipping_name": "A",
        "shipping_email": "a@b.com",
        "shipping_phone": "123",
        "shipping_address": "St",
        "shipping_city": "C",
        "shipping_country": "X",
        "shipping_zip": "00000",
        "payment_method": "cash_on_delivery",
        "status": "pending",
        "created_at": "2025-03-14T09:05:00Z",
    }


@pytest.fixture
def order_with_images(sample_order: Dict[str, Any]) -> Dict[str, Any]:
    """Order with three imaged items (one relative path) and one without."""
    order = dict(sample_order)
    order["items"] = [
        {"name": "Cable", "quantity": 2, "price": 5.5, "image": "/img/cable.jpg"},
        {"name": "Charger", "quantity": 1, "price": 20, "image": "https://cdn.example/charger.png"},
        {"name": "Sticker", "quantity": 3, "price": 1},
        {"name": "Mouse", "quantity": 1, "price": 15.25, "image": "img/mouse.jpg"},
    ]
    order["total"] = 61.25
    return order
