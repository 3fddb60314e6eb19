"""Tests for loading the notifier configuration from the environment."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from storefront_notify.config import (
    DEFAULT_API_URL,
    DEFAULT_BASE_URL,
    DEFAULT_IMAGE_DELAY_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    NotifierConfig,
    load_config,
)


def test_defaults_when_environment_is_empty() -> None:
    config = load_config({})
    assert config.bot_token is None
    assert config.chat_id is None
    assert config.base_url == DEFAULT_BASE_URL
    assert config.api_url == DEFAULT_API_URL
    assert config.timeout == DEFAULT_TIMEOUT_SECONDS
    assert config.image_delay == DEFAULT_IMAGE_DELAY_SECONDS
    assert config.display_timezone == "UTC"
    assert config.is_configured is False
    assert config.missing_variables() == ["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"]


def test_full_environment() -> None:
    config = load_config(
        {
            "TELEGRAM_BOT_TOKEN": "tok",
            "TELEGRAM_CHAT_ID": "-1001",
            "BASE_URL": "https://chenelectronic.example/",
            "TELEGRAM_API_URL": "http://localhost:8081/",
            "TELEGRAM_TIMEOUT": "5",
            "TELEGRAM_IMAGE_DELAY": "1.5",
            "NOTIFY_TIMEZONE": "Europe/Berlin",
        }
    )
    assert config.is_configured is True
    assert config.missing_variables() == []
    assert config.base_url == "https://chenelectronic.example"
    assert config.api_url == "http://localhost:8081"
    assert config.timeout == 5.0
    assert config.image_delay == 1.5
    assert config.display_timezone == "Europe/Berlin"


def test_blank_values_count_as_missing() -> None:
    config = load_config({"TELEGRAM_BOT_TOKEN": "  ", "TELEGRAM_CHAT_ID": "42", "BASE_URL": ""})
    assert config.is_configured is False
    assert config.missing_variables() == ["TELEGRAM_BOT_TOKEN"]
    assert config.base_url == DEFAULT_BASE_URL


@pytest.mark.parametrize("value", ["abc", "-1", "0"])
def test_bad_timeout_falls_back_to_default(value: str) -> None:
    assert load_config({"TELEGRAM_TIMEOUT": value}).timeout == DEFAULT_TIMEOUT_SECONDS


def test_bad_delay_falls_back_but_zero_is_allowed() -> None:
    assert load_config({"TELEGRAM_IMAGE_DELAY": "soon"}).image_delay == DEFAULT_IMAGE_DELAY_SECONDS
    assert load_config({"TELEGRAM_IMAGE_DELAY": "0"}).image_delay == 0


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "env-token")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "777")
    config = load_config()
    assert config.bot_token == "env-token"
    assert config.chat_id == "777"


def test_config_is_immutable() -> None:
    config = NotifierConfig(bot_token="a", chat_id="b")
    with pytest.raises(ValidationError):
        config.chat_id = "c"  # type: ignore[misc]
