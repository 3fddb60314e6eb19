"""Pydantic models for orders handed to the notifier.

The order subsystem stores the ordered items as a JSON string column,
while request handlers usually hold the decoded list.  :class:`Order`
accepts both and always exposes ``items`` as a list of
:class:`OrderItem`.  Unknown keys (e.g. the product ``id`` carried by
cart items) are ignored.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderItem(BaseModel):
    """A single line of an order.

    Attributes:
        name: Product name as shown to the customer.
        quantity: Number of units ordered (strictly positive).
        price: Unit price (non‑negative).
        image: Optional product image, either an absolute URL or a path
            relative to the storefront origin (e.g. ``/img/cable.jpg``).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)
    image: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _reject_bool_quantity(cls, value: Any) -> Any:
        # bool is an int subclass; lax mode would read True as 1
        if isinstance(value, bool):
            raise ValueError("quantity must be an integer, not a boolean")
        return value

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Order(BaseModel):
    """A persisted customer order as read back from the ``orders`` table."""

    model_config = ConfigDict(frozen=True)

    id: int
    items: List[OrderItem] = Field(default_factory=list)
    total: Decimal = Field(ge=0)
    shipping_name: Optional[str] = None
    shipping_email: Optional[str] = None
    shipping_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_country: Optional[str] = None
    shipping_zip: Optional[str] = None
    payment_method: Optional[str] = None
    status: str = "pending"
    created_at: datetime

    @field_validator("items", mode="before")
    @classmethod
    def _decode_items(cls, value: Any) -> Any:
        # The orders table stores items as serialised JSON
        if isinstance(value, (str, bytes)):
            value = json.loads(value)
        if not isinstance(value, list):
            raise ValueError("items must be a list")
        return value
