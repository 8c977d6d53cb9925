"""Shared fixtures for event-scheduler tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

_ENV_VARS = (
    "EVENT_SCHEDULER_API_KEY",
    "EVENT_SCHEDULER_MODEL",
    "EVENT_SCHEDULER_MODE",
    "EVENT_SCHEDULER_OUTPUT_DIR",
    "EVENT_SCHEDULER_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all event-scheduler environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("event_scheduler.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def monkeypatch_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set a valid API key, model and mode.

    Returns the dict of variables so tests can inspect or override values.
    """
    env_vars = {
        "EVENT_SCHEDULER_API_KEY": "sk-test-key-12345",
        "EVENT_SCHEDULER_MODEL": "gpt-4o",
        "EVENT_SCHEDULER_MODE": "newTab",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
