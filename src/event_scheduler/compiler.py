"""Compile a normalized LLM response into a calendar artifact.

``get_event_information`` results become a Google Calendar deep link:

- **dates** -- ``START/END``.  Google treats the end of an all-day range
  as exclusive, so an all-day end date (bare ``YYYYMMDD``) is moved one day
  forward, even when it equals the start date (``20240610/20240610``
  becomes ``20240610/20240611``).  A missing end date falls back to the
  start date unchanged.
- **text / location / details** -- percent-encoded individually.  The
  details carry a trailer linking back to the page the text came from.
- **recur** -- ``RRULE:FREQ=..;INTERVAL=..;BYDAY=..;UNTIL=..``, encoded.
- **recurrence** -- ``EXDATE:..`` as a separate, unencoded parameter.  The
  calendar service expects the two-parameter form rather than one merged
  rule line.

``generate_ical_file`` results pass through as a
:class:`~event_scheduler.models.CalendarFile`.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from urllib.parse import quote

from event_scheduler.exceptions import MalformedResponseError
from event_scheduler.models.artifact import (
    URI_COMPONENT_SAFE,
    CalendarFile,
    CalendarLink,
)
from event_scheduler.models.event import (
    GENERATE_ICAL_FILE,
    GET_EVENT_INFORMATION,
    EventInformation,
    ICalFile,
    NormalizedResponse,
    Recurrence,
)

logger = logging.getLogger(__name__)

CALENDAR_RENDER_URL = "https://www.google.com/calendar/render"

DESCRIPTION_SEPARATOR = "\n<br/><br/><br/>\n"
_BACKLINK_TEMPLATE = '<a href="{page_url}">Created from this web page</a>'

_ALL_DAY_PATTERN = re.compile(r"[0-9]{8}")
_COMPACT_DATE_FORMAT = "%Y%m%d"


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------


def is_all_day(value: str | None) -> bool:
    """Return ``True`` if *value* is a bare ``YYYYMMDD`` date."""
    return bool(value) and _ALL_DAY_PATTERN.fullmatch(value) is not None


def next_day(value: str) -> str:
    """Return the ``YYYYMMDD`` date one calendar day after *value*.

    Raises:
        MalformedResponseError: If *value* is not a real calendar date.
    """
    try:
        parsed = datetime.strptime(value, _COMPACT_DATE_FORMAT)
    except ValueError as exc:
        raise MalformedResponseError(
            f"Invalid all-day date {value!r}: {exc}", raw_response=value
        ) from exc
    return (parsed + timedelta(days=1)).strftime(_COMPACT_DATE_FORMAT)


def resolve_end_date(start_date: str, end_date: str | None) -> str:
    """Return the end value for the ``dates`` range.

    All-day end dates are made exclusive; a missing end date becomes the
    start date with no adjustment.
    """
    if not end_date:
        return start_date
    if is_all_day(end_date):
        return next_day(end_date)
    return end_date


# ---------------------------------------------------------------------------
# Recurrence
# ---------------------------------------------------------------------------


def _strip_dashes(value: str) -> str:
    return value.replace("-", "")


def build_rrule(recurrence: Recurrence | None) -> str | None:
    """Build the ``RRULE:`` line (not yet percent-encoded).

    Components are emitted in the order ``FREQ``, ``INTERVAL``, ``BYDAY``,
    ``UNTIL``, each only when its field is set.

    Returns:
        The rule string, or ``None`` if no component applies.
    """
    if recurrence is None:
        return None

    parts: list[str] = []
    if recurrence.frequency:
        parts.append(f"FREQ={recurrence.frequency.upper()}")
    if recurrence.interval:
        parts.append(f"INTERVAL={recurrence.interval}")
    if recurrence.days:
        parts.append(f"BYDAY={','.join(recurrence.days)}")
    if recurrence.end_date:
        parts.append(f"UNTIL={_strip_dashes(recurrence.end_date)}")

    if not parts:
        return None
    return "RRULE:" + ";".join(parts)


def build_exdate(recurrence: Recurrence | None) -> str | None:
    """Build the ``EXDATE:`` value for excluded dates, or ``None``."""
    if recurrence is None or not recurrence.exceptions:
        return None
    return "EXDATE:" + ",".join(_strip_dashes(d) for d in recurrence.exceptions)


# ---------------------------------------------------------------------------
# Link and file compilation
# ---------------------------------------------------------------------------


def encode_component(value: str) -> str:
    """Percent-encode *value* like JavaScript's ``encodeURIComponent``."""
    return quote(value, safe=URI_COMPONENT_SAFE)


def description_trailer(page_url: str) -> str:
    """Return the (unencoded) text appended to every event description."""
    return DESCRIPTION_SEPARATOR + _BACKLINK_TEMPLATE.format(page_url=page_url)


def build_calendar_url(event: EventInformation, page_url: str) -> str:
    """Build a Google Calendar deep link for *event*.

    Args:
        event: The extracted event.
        page_url: URL of the page the text was selected on.

    Returns:
        The complete link.

    Raises:
        MalformedResponseError: If an all-day end date is not a real date.
    """
    start_date = event.start_date
    end_date = resolve_end_date(start_date, event.end_date)

    title = encode_component(event.title)
    location = encode_component(event.location)
    details = encode_component(event.description) + encode_component(
        description_trailer(page_url)
    )

    url = (
        f"{CALENDAR_RENDER_URL}?action=TEMPLATE"
        f"&text={title}"
        f"&dates={start_date}/{end_date}"
        f"&details={details}"
        f"&location={location}"
    )

    rrule = build_rrule(event.recurrence)
    if rrule is not None:
        url += f"&recur={encode_component(rrule)}"

    exdate = build_exdate(event.recurrence)
    if exdate is not None:
        url += f"&recurrence={exdate}"

    logger.info("Calendar URL: %s", url)
    return url


def build_calendar_file(ical_file: ICalFile) -> CalendarFile:
    """Wrap a generated ``.ics`` document for the download sink."""
    logger.info("Calendar file %s (%d chars)", ical_file.filename, len(ical_file.ical))
    return CalendarFile(content=ical_file.ical, filename=ical_file.filename)


def compile_response(
    response: NormalizedResponse,
    page_url: str,
) -> CalendarLink | CalendarFile:
    """Turn a normalized response into its artifact.

    Raises:
        MalformedResponseError: If ``function_used`` is not a known function
            or its payload has the wrong type.
    """
    tag = response.function_used
    event = response.event

    if tag == GET_EVENT_INFORMATION and isinstance(event, EventInformation):
        return CalendarLink(url=build_calendar_url(event, page_url))
    if tag == GENERATE_ICAL_FILE and isinstance(event, ICalFile):
        return build_calendar_file(event)

    raise MalformedResponseError(
        f"Unexpected function {tag!r} with {type(event).__name__} payload",
        raw_response=response,
    )
