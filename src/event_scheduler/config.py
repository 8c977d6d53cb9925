"""Configuration loading for event-scheduler.

Reads settings from environment variables (with .env support via
python-dotenv).  A missing API key is not a configuration error: it is a
first-class state that :func:`~event_scheduler.pipeline.run_pipeline`
checks before any request is made.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from event_scheduler.utils import mask_key


class ConfigError(Exception):
    """Raised when configuration values are present but invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        api_key: API key for the configured provider, or ``None``.
        model: Model identifier, or ``None`` to use the default model.
        mode: Extraction mode (``"newTab"``, ``"ical"``, ``"auto"``), or
            ``None`` to use the default mode.
        log_level: Logging level (default ``"INFO"``).
        output_dir: Directory that downloaded ``.ics`` files are written to.
        request_timeout: HTTP timeout in seconds for the provider call.
    """

    api_key: str | None = None
    model: str | None = None
    mode: str | None = None
    log_level: str = "INFO"
    output_dir: str = "."
    request_timeout: float = 30.0

    def __repr__(self) -> str:
        return (
            f"Settings(api_key={mask_key(self.api_key)!r}, "
            f"model={self.model!r}, "
            f"mode={self.mode!r}, "
            f"log_level={self.log_level!r}, "
            f"output_dir={self.output_dir!r}, "
            f"request_timeout={self.request_timeout!r})"
        )


def _optional(env_var: str) -> str | None:
    raw = os.environ.get(env_var, "").strip()
    return raw or None


def load_settings() -> Settings:
    """Load settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Blank or whitespace-only values count as
    absent.

    Returns:
        A :class:`Settings` instance.

    Raises:
        ConfigError: If ``EVENT_SCHEDULER_TIMEOUT`` is set but is not a
            positive number.
    """
    load_dotenv()

    values: dict[str, object] = {
        "api_key": _optional("EVENT_SCHEDULER_API_KEY"),
        "model": _optional("EVENT_SCHEDULER_MODEL"),
        "mode": _optional("EVENT_SCHEDULER_MODE"),
    }

    log_level = _optional("LOG_LEVEL")
    output_dir = _optional("EVENT_SCHEDULER_OUTPUT_DIR")
    timeout = _optional("EVENT_SCHEDULER_TIMEOUT")

    if log_level:
        values["log_level"] = log_level
    if output_dir:
        values["output_dir"] = output_dir
    if timeout:
        try:
            seconds = float(timeout)
        except ValueError as exc:
            raise ConfigError(
                f"EVENT_SCHEDULER_TIMEOUT must be a number, got {timeout!r}"
            ) from exc
        if seconds <= 0:
            raise ConfigError(
                f"EVENT_SCHEDULER_TIMEOUT must be positive, got {timeout!r}"
            )
        values["request_timeout"] = seconds

    return Settings(**values)
