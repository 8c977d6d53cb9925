"""Artifacts produced by the event compiler.

- :class:`CalendarLink` -- a Google Calendar deep link to open.
- :class:`CalendarFile` -- an ``.ics`` document to offer for download.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

# Characters left unescaped by JavaScript's encodeURIComponent.
URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class CalendarLink:
    """A calendar-service deep link.

    Attributes:
        url: The complete link, query string included.
    """

    url: str


@dataclass(frozen=True)
class CalendarFile:
    """A calendar file to hand to the download sink.

    Attributes:
        content: Full ``.ics`` document text.
        filename: Suggested file name.
    """

    content: str
    filename: str

    @property
    def data_url(self) -> str:
        """Same-origin ``data:`` URL carrying the file content."""
        return f"data:text/calendar,{quote(self.content, safe=URI_COMPONENT_SAFE)}"
