from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from corona_bot.config import DEFAULT_STATS_URL, Settings, get_settings
from corona_bot.models import SpamStrategy


def test_defaults() -> None:
    settings = get_settings()

    assert settings.channel == "C0123456"
    assert settings.spam_strategy == SpamStrategy.EDIT
    assert settings.new_limit == 50
    assert settings.delay == 60
    assert settings.poll_interval == timedelta(seconds=60)
    assert settings.max_wait_time == timedelta(hours=4)
    assert settings.stats_url == DEFAULT_STATS_URL
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPAM_STRATEGY", "thread")
    monkeypatch.setenv("NEW_LIMIT", "10")
    monkeypatch.setenv("DELAY", "300")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.spam_strategy == SpamStrategy.THREAD
    assert settings.new_limit == 10
    assert settings.poll_interval == timedelta(minutes=5)
    assert settings.log_level == "DEBUG"


def test_max_wait_zero_disables_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_WAIT", "0")

    assert Settings().max_wait_time is None


@pytest.mark.parametrize("missing", ["CHANNEL", "BOT_NAME", "SLACK_KEY"])
def test_missing_required_variable_fails(monkeypatch: pytest.MonkeyPatch, missing: str) -> None:
    monkeypatch.delenv(missing)

    with pytest.raises(ValidationError) as exc_info:
        Settings()

    assert missing.lower() in str(exc_info.value)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SPAM_STRATEGY", "ALWAYS_NEW"),
        ("NEW_LIMIT", "lots"),
        ("DELAY", "0"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_fail(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()


def test_env_file_is_read(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.delenv("BOT_NAME")
    (tmp_path / ".env").write_text("BOT_NAME=fromfile\nNEW_LIMIT=75\n", encoding="utf-8")

    settings = Settings()

    assert settings.bot_name == "fromfile"
    assert settings.new_limit == 75
