"""Pydantic models describing the outcome of an order dispatch."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ImageResult(BaseModel):
    """Outcome of sending one product photo.

    ``delivered`` is False only when the send failed, in which case
    ``error`` holds the reason.
    """

    item_name: str
    image_url: str
    delivered: bool
    error: Optional[str] = None


class DispatchReport(BaseModel):
    """Summary of :meth:`NotificationDispatcher.send_order_with_images`."""

    order_id: int
    message_delivered: bool = False
    images: List[ImageResult] = Field(default_factory=list)

    @property
    def failed_images(self) -> List[ImageResult]:
        return [r for r in self.images if r.error is not None]
