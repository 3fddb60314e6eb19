"""Order value types consumed by the notifier.

Orders are owned by the storefront's order subsystem; this package
only defines the read‑only shape the notifier needs.
"""

from .models import Order, OrderItem

__all__ = ["Order", "OrderItem"]
