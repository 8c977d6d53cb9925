"""Pipeline orchestrator for the text-to-calendar workflow.

Wires the components together: mode selection, model dispatch, the single
provider request, response parsing and artifact compilation.

- :func:`create_artifact` runs the pipeline and raises typed errors.
- :func:`run_pipeline` is the orchestrating caller.  It applies the
  configured defaults, holds the busy indicator for the whole action, maps
  every failure to one user notification and hands the artifact to the
  matching sink.  It returns a :class:`PipelineResult` instead of raising.
"""

from __future__ import annotations

import contextlib
import logging
import sys
import time
import webbrowser
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Protocol

from event_scheduler.compiler import compile_response
from event_scheduler.config import ConfigError, Settings
from event_scheduler.dispatch import DEFAULT_MODEL, build_request, parse_response
from event_scheduler.exceptions import (
    EventSchedulerError,
    InvalidCredentialError,
    MissingCredentialError,
    UnsupportedModelError,
)
from event_scheduler.models.artifact import CalendarFile, CalendarLink
from event_scheduler.prompts import DEFAULT_MODE, select_request_params
from event_scheduler.transport import HttpTransport, Transport
from event_scheduler.utils import mask_key

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "AI Event Scheduler"

MSG_MISSING_KEY = "API key is not set. Please set it in the extension options.."
MSG_INVALID_KEY = "Invalid API key. Please set a valid API key in the extension options."
MSG_GENERIC = "An error occurred while creating the event. Please try again later."


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


class Sinks(Protocol):
    """Host-side collaborators the pipeline reports to."""

    def notify(self, title: str, message: str) -> None: ...

    def open_settings(self) -> None: ...

    def open_link(self, url: str) -> None: ...

    def offer_download(self, file: CalendarFile) -> None: ...

    def set_busy(self, busy: bool) -> None: ...


class ConsoleSinks:
    """Terminal implementation of :class:`Sinks`.

    Links are printed to stdout and, unless *print_only* is set, opened in
    the default browser.  Calendar files are written into *output_dir*.

    Args:
        output_dir: Directory for downloaded ``.ics`` files.
        print_only: Print links without opening a browser.
    """

    def __init__(self, output_dir: str | Path = ".", print_only: bool = False) -> None:
        self._output_dir = Path(output_dir)
        self._print_only = print_only
        self.saved_files: list[Path] = []

    def notify(self, title: str, message: str) -> None:
        logger.warning("%s: %s", title, message)
        print(f"{title}: {message}", file=sys.stderr)

    def open_settings(self) -> None:
        print(
            "Set EVENT_SCHEDULER_API_KEY in your environment or .env file.",
            file=sys.stderr,
        )

    def open_link(self, url: str) -> None:
        print(url)
        if not self._print_only:
            webbrowser.open_new_tab(url)

    def offer_download(self, file: CalendarFile) -> None:
        # Keep only the final path component of the LLM-supplied name.
        name = Path(file.filename).name or "event.ics"
        self._output_dir.mkdir(parents=True, exist_ok=True)
        target = self._output_dir / name
        target.write_text(file.content, encoding="utf-8")
        self.saved_files.append(target)
        print(target)

    def set_busy(self, busy: bool) -> None:
        logger.debug("Busy indicator %s", "on" if busy else "off")


@contextlib.contextmanager
def busy_indicator(sinks: Sinks) -> Iterator[None]:
    """Show the busy indicator for the duration of the block.

    The indicator is reset on every exit path, including exceptions.
    """
    sinks.set_busy(True)
    try:
        yield
    finally:
        sinks.set_busy(False)


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass
class PipelineResult:
    """Outcome of one user action.

    Attributes:
        page_url: URL of the page the text was selected on.
        model: Model identifier used (after defaults).
        mode: Mode used (after defaults).
        artifact: The produced link or file, or ``None`` on failure.
        error: The failure that stopped the pipeline, or ``None``.
        duration_seconds: Wall-clock time for the action.
    """

    page_url: str
    model: str
    mode: str
    artifact: CalendarLink | CalendarFile | None = None
    error: Exception | None = None
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        """Whether an artifact was produced."""
        return self.artifact is not None


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def create_artifact(
    selected_text: str,
    page_url: str,
    api_key: str | None,
    model: str,
    mode: str,
    transport: Transport,
    today: date | None = None,
) -> CalendarLink | CalendarFile:
    """Run one request/response exchange and compile its artifact.

    Args:
        selected_text: The text the user selected.
        page_url: URL of the page the text came from.
        api_key: Provider API key.
        model: Model identifier; must be in the registry.
        mode: ``"newTab"``, ``"ical"`` or ``"auto"``.
        transport: Delivers the request and returns the JSON body.
        today: Override for the current date (useful for testing).

    Returns:
        A :class:`CalendarLink` or :class:`CalendarFile`.

    Raises:
        MissingCredentialError: If *api_key* is empty; nothing is sent.
        UnsupportedModelError: If *model* is unknown; nothing is sent.
        ConfigError: If *mode* is unknown; nothing is sent.
        InvalidCredentialError: If the provider rejected the key.
        TransportError: If the exchange failed.
        ProviderError: If the provider returned another error.
        MalformedResponseError: If the response could not be used.
    """
    if not api_key:
        raise MissingCredentialError()

    params = select_request_params(selected_text, mode, today=today)
    request = build_request(params, api_key, model)

    logger.info("%s is creating an event from %d chars of text", page_url, len(selected_text))
    logger.debug("Request body:\n%s", request.options.body)

    data = transport.send(request)
    response = parse_response(data, model)
    logger.info("Model %s called %s", model, response.function_used)

    return compile_response(response, page_url)


def run_pipeline(
    selected_text: str,
    page_url: str,
    settings: Settings,
    sinks: Sinks,
    transport: Transport | None = None,
    today: date | None = None,
) -> PipelineResult:
    """Run the full selected-text-to-calendar action.

    Missing model and mode settings fall back to :data:`DEFAULT_MODEL` and
    :data:`DEFAULT_MODE`.  Failures are reported once through
    ``sinks.notify`` and recorded on the result; credential failures also
    open the settings surface.

    Args:
        selected_text: The text the user selected.
        page_url: URL of the page the text came from.
        settings: Loaded :class:`Settings`.
        sinks: Host collaborators for notifications and artifacts.
        transport: Override for the HTTP transport (useful for testing).
            Defaults to :class:`HttpTransport` with the configured timeout,
            closed when the action finishes.
        today: Override for the current date (useful for testing).

    Returns:
        A :class:`PipelineResult`.
    """
    start_time = time.monotonic()
    model = settings.model or DEFAULT_MODEL
    mode = settings.mode or DEFAULT_MODE
    result = PipelineResult(page_url=page_url, model=model, mode=mode)

    logger.info(
        "Running pipeline: model=%s mode=%s key=%s",
        model,
        mode,
        mask_key(settings.api_key),
    )

    with contextlib.ExitStack() as stack:
        if transport is None:
            transport = stack.enter_context(
                HttpTransport(timeout=settings.request_timeout)
            )
        stack.enter_context(busy_indicator(sinks))
        try:
            artifact = create_artifact(
                selected_text=selected_text,
                page_url=page_url,
                api_key=settings.api_key,
                model=model,
                mode=mode,
                transport=transport,
                today=today,
            )
            if isinstance(artifact, CalendarLink):
                sinks.open_link(artifact.url)
            else:
                sinks.offer_download(artifact)
        except (EventSchedulerError, ConfigError) as exc:
            result.error = exc
            _report_failure(exc, sinks)
        except Exception as exc:
            # Sink failures (unwritable output dir, no browser) end up here.
            logger.exception("Unexpected failure while creating the event")
            result.error = exc
            sinks.notify(NOTIFICATION_TITLE, MSG_GENERIC)
        else:
            result.artifact = artifact

    result.duration_seconds = time.monotonic() - start_time
    logger.info(
        "Pipeline %s in %.1fs",
        "succeeded" if result.success else "failed",
        result.duration_seconds,
    )
    return result


def _report_failure(exc: Exception, sinks: Sinks) -> None:
    """Map *exc* to a single user-visible notification."""
    if isinstance(exc, MissingCredentialError):
        sinks.notify(NOTIFICATION_TITLE, MSG_MISSING_KEY)
        sinks.open_settings()
    elif isinstance(exc, InvalidCredentialError):
        sinks.notify(NOTIFICATION_TITLE, MSG_INVALID_KEY)
        sinks.open_settings()
    elif isinstance(exc, (UnsupportedModelError, ConfigError)):
        logger.error("Configuration problem: %s", exc)
        sinks.notify(NOTIFICATION_TITLE, str(exc))
    else:
        logger.error("Event creation failed: %s", exc)
        sinks.notify(NOTIFICATION_TITLE, MSG_GENERIC)
