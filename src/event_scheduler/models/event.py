"""Pydantic models for the normalized LLM response.

Every provider adapter produces a :class:`NormalizedResponse`, whatever the
vendor's response shape:

- :class:`EventInformation` -- arguments of ``get_event_information``
  (one event, possibly recurring).
- :class:`ICalFile` -- arguments of ``generate_ical_file`` (a complete
  iCalendar document plus a file name).
- :class:`NormalizedResponse` -- the ``{function_used, event}`` pair; the
  ``event`` payload is validated against the model matching the tag.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

GET_EVENT_INFORMATION = "get_event_information"
GENERATE_ICAL_FILE = "generate_ical_file"

FunctionName = Literal["get_event_information", "generate_ical_file"]


class Recurrence(BaseModel):
    """Recurrence rule pieces extracted by the LLM.

    Every field is optional; an absent field means the matching rule
    component is not emitted.

    Attributes:
        frequency: ``"daily"``, ``"weekly"``, ``"monthly"`` or ``"yearly"``
            (any case).
        interval: Repeat every *interval* periods.
        days: Weekday codes (``"MO"``, ``"TU"``...) in the order given.
        end_date: Last date of the series (``YYYY-MM-DD`` or ``YYYYMMDD``).
        exceptions: Dates excluded from the series.
    """

    frequency: str | None = None
    interval: int | None = None
    days: list[str] | None = None
    end_date: str | None = None
    exceptions: list[str] | None = None


class EventInformation(BaseModel):
    """A single event as returned by ``get_event_information``.

    Dates are strings: ``YYYYMMDD`` for all-day events, or a date-time form
    such as ``YYYYMMDDTHHMMSS`` for timed events.

    Attributes:
        title: Event title.
        location: Event location (``""`` when unknown).
        description: Free-text description (``""`` when unknown).
        start_date: Start date or date-time.
        end_date: End date or date-time, or ``None`` when not given.
        recurrence: Recurrence details, or ``None`` for one-off events.
    """

    title: str = ""
    location: str = ""
    description: str = ""
    start_date: str
    end_date: str | None = None
    recurrence: Recurrence | None = None

    @field_validator("title", "location", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        """LLMs send ``null`` for unknown text fields; store ``""`` instead."""
        return "" if value is None else value


class ICalFile(BaseModel):
    """A complete calendar file as returned by ``generate_ical_file``.

    Attributes:
        ical: Full ``.ics`` document text.
        filename: Suggested download file name.
    """

    ical: str
    filename: str = Field(min_length=1)


class NormalizedResponse(BaseModel):
    """Vendor-agnostic result of one LLM call.

    Attributes:
        function_used: Which function the LLM invoked.
        event: :class:`EventInformation` for ``get_event_information``,
            :class:`ICalFile` for ``generate_ical_file``.
    """

    function_used: FunctionName
    event: Union[EventInformation, ICalFile]

    @model_validator(mode="before")
    @classmethod
    def _validate_event_for_tag(cls, data: Any) -> Any:
        """Validate ``event`` against the model selected by ``function_used``.

        Without this, a smart union could accept an ``ICalFile`` payload for
        ``get_event_information`` or the other way round.
        """
        if not isinstance(data, dict):
            return data
        event = data.get("event")
        if not isinstance(event, dict):
            return data
        tag = data.get("function_used")
        if tag == GET_EVENT_INFORMATION:
            return {**data, "event": EventInformation.model_validate(event)}
        if tag == GENERATE_ICAL_FILE:
            return {**data, "event": ICalFile.model_validate(event)}
        return data
