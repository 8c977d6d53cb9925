"""Tests for the request and response models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from event_scheduler.models import (
    CalendarFile,
    EventInformation,
    ICalFile,
    NormalizedResponse,
    ProviderRequest,
    Recurrence,
    RequestOptions,
)


class TestEventInformation:
    """Single-event payload."""

    def test_minimal_event(self) -> None:
        event = EventInformation(start_date="20240610")

        assert event.title == ""
        assert event.location == ""
        assert event.description == ""
        assert event.end_date is None
        assert event.recurrence is None

    def test_null_text_fields_become_empty(self) -> None:
        event = EventInformation.model_validate(
            {"title": None, "location": None, "description": None, "start_date": "20240610"}
        )
        assert (event.title, event.location, event.description) == ("", "", "")

    def test_start_date_required(self) -> None:
        with pytest.raises(ValidationError):
            EventInformation.model_validate({"title": "x"})

    def test_nested_recurrence(self) -> None:
        event = EventInformation.model_validate(
            {
                "start_date": "20240610",
                "recurrence": {"frequency": "weekly", "interval": "2", "days": ["MO", "WE"]},
            }
        )
        assert event.recurrence == Recurrence(frequency="weekly", interval=2, days=["MO", "WE"])


class TestNormalizedResponse:
    """The tag selects the payload model."""

    def test_event_information_tag(self) -> None:
        response = NormalizedResponse.model_validate(
            {"function_used": "get_event_information", "event": {"start_date": "20240101"}}
        )
        assert isinstance(response.event, EventInformation)

    def test_ical_tag(self) -> None:
        response = NormalizedResponse.model_validate(
            {"function_used": "generate_ical_file", "event": {"ical": "X", "filename": "x.ics"}}
        )
        assert isinstance(response.event, ICalFile)

    def test_tag_and_payload_must_agree(self) -> None:
        with pytest.raises(ValidationError):
            NormalizedResponse.model_validate(
                {"function_used": "generate_ical_file", "event": {"start_date": "20240101"}}
            )

    def test_unknown_tag_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NormalizedResponse.model_validate(
                {"function_used": "send_email", "event": {"start_date": "20240101"}}
            )

    def test_empty_filename_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ICalFile(ical="X", filename="")


class TestProviderRequest:
    """Built requests are immutable."""

    def test_frozen(self) -> None:
        request = ProviderRequest(
            endpoint="https://x", options=RequestOptions(body="{}")
        )
        assert request.options.method == "POST"
        with pytest.raises(ValidationError):
            request.endpoint = "https://y"  # type: ignore[misc]


class TestCalendarFile:
    """Download payload."""

    def test_data_url_encodes_content(self) -> None:
        file = CalendarFile(content="BEGIN:VCALENDAR\r\nEND:VCALENDAR", filename="a.ics")
        assert file.data_url == "data:text/calendar,BEGIN%3AVCALENDAR%0D%0AEND%3AVCALENDAR"
