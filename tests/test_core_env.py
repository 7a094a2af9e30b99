from __future__ import annotations

import logging

import pytest

from core.env import env_log_level, env_str
from core.logging import get_logger


def test_env_str_returns_default_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PRICING_TEST_VALUE", raising=False)
    assert env_str("PRICING_TEST_VALUE", "fallback") == "fallback"
    monkeypatch.setenv("PRICING_TEST_VALUE", "set")
    assert env_str("PRICING_TEST_VALUE", "fallback") == "set"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("warn", logging.WARNING),
        ("40", logging.ERROR),
    ],
)
def test_env_log_level_parses_names_and_numbers(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    monkeypatch.setenv("PRICING_LOG_LEVEL", raw)
    assert env_log_level("PRICING_LOG_LEVEL", logging.INFO) == expected


@pytest.mark.parametrize("raw", ["loud", "-5", ""])
def test_env_log_level_falls_back_on_invalid_value(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PRICING_LOG_LEVEL", raw)
    assert env_log_level("PRICING_LOG_LEVEL", logging.INFO) == logging.INFO


def test_get_logger_applies_explicit_level() -> None:
    logger = get_logger("tests.pricing", level=logging.DEBUG)
    assert logger.name == "tests.pricing"
    assert logger.level == logging.DEBUG
