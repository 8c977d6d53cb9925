"""Data models for event-scheduler."""

from __future__ import annotations

from event_scheduler.models.artifact import CalendarFile, CalendarLink
from event_scheduler.models.event import (
    GENERATE_ICAL_FILE,
    GET_EVENT_INFORMATION,
    EventInformation,
    ICalFile,
    NormalizedResponse,
    Recurrence,
)
from event_scheduler.models.request import (
    FunctionSpec,
    ProviderRequest,
    RequestOptions,
    RequestParams,
)

__all__ = [
    "GENERATE_ICAL_FILE",
    "GET_EVENT_INFORMATION",
    "CalendarFile",
    "CalendarLink",
    "EventInformation",
    "FunctionSpec",
    "ICalFile",
    "NormalizedResponse",
    "ProviderRequest",
    "Recurrence",
    "RequestOptions",
    "RequestParams",
]
