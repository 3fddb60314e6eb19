"""Top-level package for the storefront order notifier.

This package provides a command-line interface via
:mod:`storefront_notify.cli`, configuration in
:mod:`storefront_notify.config`, order models in
:mod:`storefront_notify.orders` and the Telegram dispatcher in
:mod:`storefront_notify.notify`.
"""

__all__ = [
    "cli",
    "config",
    "orders",
    "notify",
]
