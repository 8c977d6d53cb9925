"""event-scheduler: AI Event Scheduler.

Extracts event details from selected text with an LLM and turns them into a
Google Calendar link or an iCalendar file.
"""

from __future__ import annotations

from event_scheduler.compiler import build_calendar_url, compile_response
from event_scheduler.dispatch import (
    DEFAULT_MODEL,
    MODEL_REGISTRY,
    build_request,
    parse_response,
    resolve,
)
from event_scheduler.exceptions import (
    EventSchedulerError,
    InvalidCredentialError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderError,
    TransportError,
    UnsupportedModelError,
)
from event_scheduler.models import (
    CalendarFile,
    CalendarLink,
    EventInformation,
    ICalFile,
    NormalizedResponse,
    ProviderRequest,
    Recurrence,
    RequestParams,
)
from event_scheduler.prompts import DEFAULT_MODE, select_request_params

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MODE",
    "DEFAULT_MODEL",
    "MODEL_REGISTRY",
    "CalendarFile",
    "CalendarLink",
    "EventInformation",
    "EventSchedulerError",
    "ICalFile",
    "InvalidCredentialError",
    "MalformedResponseError",
    "MissingCredentialError",
    "NormalizedResponse",
    "ProviderError",
    "ProviderRequest",
    "Recurrence",
    "RequestParams",
    "TransportError",
    "UnsupportedModelError",
    "build_calendar_url",
    "build_request",
    "compile_response",
    "parse_response",
    "resolve",
    "select_request_params",
]
