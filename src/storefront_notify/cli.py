"""Command‑line interface for the storefront notifier.

This module uses the :mod:`click` library to expose operator commands
around the Telegram order notifier: checking the configuration,
sending a test message, previewing or sending a sample order, and
dispatching an order read from a JSON file.

Configuration is read from the environment (and from a ``.env`` file in
the working directory, if present) when the CLI group starts.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

import click
from dotenv import find_dotenv, load_dotenv

from .config import PROJECT_NAME, load_config
from .notify.dispatcher import NotificationDispatcher
from .notify.errors import NotificationError


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def cli(log_level: str) -> None:
    """Storefront order notification tools."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _build_dispatcher() -> NotificationDispatcher:
    """Construct the dispatcher from the environment.

    Factored out so tests can monkeypatch it with a dispatcher that uses
    a fake HTTP session.
    """
    return NotificationDispatcher(load_config())


def _sample_order() -> Dict[str, Any]:
    """Return the order used by ``test-order``."""
    return {
        "id": 999,
        "shipping_name": "Test User",
        "shipping_email": "test@example.com",
        "shipping_phone": "123456789",
        "shipping_address": "Test Street",
        "shipping_city": "Test City",
        "shipping_country": "Test Country",
        "shipping_zip": "12345",
        "items": json.dumps([{"id": 1, "name": "Test Product", "quantity": 1, "price": 100}]),
        "total": 100,
        "payment_method": "test_payment",
        "status": "pending",
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


def _require_configured(dispatcher: NotificationDispatcher) -> None:
    missing = dispatcher.config.missing_variables()
    if missing:
        click.echo("Missing environment variables: " + ", ".join(missing), err=True)
        click.get_current_context().exit(2)


def _echo_report(report: Any) -> None:
    click.echo(json.dumps(report.model_dump(), indent=2, sort_keys=True, default=str))


@cli.command(name="config-check")
def config_check() -> None:
    """Show the notifier configuration and fail if it is incomplete.

    The bot token is never printed; only whether it is set.  Exits with
    status 2 when a required variable is missing.
    """
    config = load_config()
    click.echo(f"TELEGRAM_BOT_TOKEN: {'SET' if config.bot_token else 'MISSING'}")
    click.echo(f"TELEGRAM_CHAT_ID: {config.chat_id or 'MISSING'}")
    click.echo(f"BASE_URL: {config.base_url}")
    click.echo(f"TELEGRAM_API_URL: {config.api_url}")
    missing = config.missing_variables()
    if missing:
        click.echo("Missing environment variables: " + ", ".join(missing), err=True)
        click.get_current_context().exit(2)
    click.echo("OK")


@cli.command(name="test-message")
def test_message() -> None:
    """Send a test message to the configured chat."""
    dispatcher = _build_dispatcher()
    try:
        _require_configured(dispatcher)
        sent_at = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        text = (
            "<b>✅ Test Message</b>\n\n"
            f"If you see this in your group, {PROJECT_NAME} notifications are working!\n\n"
            f"<i>Sent at: {sent_at}</i>"
        )
        try:
            dispatcher.send_message(text)
        except NotificationError as exc:
            raise click.ClickException(str(exc))
    finally:
        dispatcher.close()
    click.echo("Test message sent.")


@cli.command(name="test-order")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Only print the rendered message; do not send it.",
)
def test_order(dry_run: bool) -> None:
    """Render sample order #999 and send it to the configured chat."""
    dispatcher = _build_dispatcher()
    order = _sample_order()
    try:
        try:
            message = dispatcher.format_order_notification(order)
        except NotificationError as exc:
            raise click.ClickException(str(exc))
        click.echo("Message preview:")
        click.echo(message)
        if dry_run:
            return
        _require_configured(dispatcher)
        try:
            report = asyncio.run(dispatcher.send_order_with_images(order))
        except NotificationError as exc:
            raise click.ClickException(str(exc))
    finally:
        dispatcher.close()
    _echo_report(report)


@cli.command()
@click.option(
    "--order-file",
    "order_file",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    required=True,
    help="Path to a JSON file holding one order row.",
)
def notify(order_file: str) -> None:
    """Send the notification for an order stored in a JSON file.

    The file holds a single order as read from the ``orders`` table;
    ``items`` may be either a JSON string or a list.  The dispatch
    report is printed as JSON.  Example::

        python -m storefront_notify notify --order-file order-42.json
    """
    with open(order_file, "r", encoding="utf-8") as f:
        try:
            order = json.load(f)
        except ValueError as exc:
            raise click.ClickException(f"Could not parse order file {order_file}: {exc}")
    dispatcher = _build_dispatcher()
    try:
        report = asyncio.run(dispatcher.send_order_with_images(order))
    except NotificationError as exc:
        raise click.ClickException(str(exc))
    finally:
        dispatcher.close()
    _echo_report(report)


__all__ = ["cli"]
