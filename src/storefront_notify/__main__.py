"""Entry point for running the notifier as a module.

This allows the CLI to be invoked with ``python -m storefront_notify``.
"""

from .cli import cli

if __name__ == "__main__":  # pragma: no cover
    cli()
