"""Mode selector: turn selected text and a mode into request parameters.

Three modes decide which function the LLM is steered to call:

- ``newTab`` -- ``get_event_information`` (one event, opened as a link).
- ``ical`` -- ``generate_ical_file`` (a complete ``.ics`` document).
- ``auto`` -- both are offered and the LLM picks one from the content.

The result is a vendor-neutral :class:`~event_scheduler.models.RequestParams`;
provider adapters translate it into their own request format.
"""

from __future__ import annotations

from datetime import date

from event_scheduler.config import ConfigError
from event_scheduler.models.event import GENERATE_ICAL_FILE, GET_EVENT_INFORMATION
from event_scheduler.models.request import FunctionSpec, RequestParams

MODE_NEW_TAB = "newTab"
MODE_ICAL = "ical"
MODE_AUTO = "auto"

MODES: tuple[str, ...] = (MODE_NEW_TAB, MODE_ICAL, MODE_AUTO)
DEFAULT_MODE = MODE_NEW_TAB

_WEEKDAY_CODES = ["MO", "TU", "WE", "TH", "FR", "SA", "SU"]

EVENT_INFORMATION_FUNCTION = FunctionSpec(
    name=GET_EVENT_INFORMATION,
    description=(
        "Extract the details of a single calendar event, optionally "
        "recurring, from the given text."
    ),
    parameters={
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "Short title of the event.",
            },
            "location": {
                "type": "string",
                "description": "Where the event takes place, empty if unknown.",
            },
            "description": {
                "type": "string",
                "description": "A brief summary of the event.",
            },
            "start_date": {
                "type": "string",
                "description": (
                    "Start as YYYYMMDD for all-day events, otherwise "
                    "YYYYMMDDTHHMMSS."
                ),
            },
            "end_date": {
                "type": "string",
                "description": (
                    "End as YYYYMMDD for all-day events (the last day of the "
                    "event), otherwise YYYYMMDDTHHMMSS."
                ),
            },
            "recurrence": {
                "type": "object",
                "description": "Only for recurring events.",
                "properties": {
                    "frequency": {
                        "type": "string",
                        "enum": ["daily", "weekly", "monthly", "yearly"],
                    },
                    "interval": {"type": "integer"},
                    "days": {
                        "type": "array",
                        "items": {"type": "string", "enum": _WEEKDAY_CODES},
                    },
                    "end_date": {
                        "type": "string",
                        "description": "Last date of the series as YYYY-MM-DD.",
                    },
                    "exceptions": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Excluded dates as YYYY-MM-DD.",
                    },
                },
            },
        },
        "required": ["title", "start_date"],
    },
)

ICAL_FILE_FUNCTION = FunctionSpec(
    name=GENERATE_ICAL_FILE,
    description=(
        "Generate a complete iCalendar (.ics) file containing every event "
        "described in the given text."
    ),
    parameters={
        "type": "object",
        "properties": {
            "ical": {
                "type": "string",
                "description": "The full contents of a valid .ics file.",
            },
            "filename": {
                "type": "string",
                "description": "A short descriptive file name ending in .ics.",
            },
        },
        "required": ["ical", "filename"],
    },
)


def build_system_prompt(mode: str, today: date | None = None) -> str:
    """Build the system prompt for *mode*.

    Args:
        mode: One of :data:`MODES`.
        today: The current date, used by the LLM to resolve relative
            dates such as "next Friday".  Defaults to :meth:`date.today`.

    Returns:
        The system prompt string.
    """
    current = (today or date.today()).isoformat()
    prompt = f"""\
You are an assistant that turns text selected on a web page into calendar data.
Today's date is {current}. Resolve relative dates against it.
"""
    if mode == MODE_NEW_TAB:
        prompt += (
            f"Call {GET_EVENT_INFORMATION} with the details of the event "
            "described in the text.\n"
        )
    elif mode == MODE_ICAL:
        prompt += (
            f"Call {GENERATE_ICAL_FILE} with an iCalendar file covering the "
            "events described in the text.\n"
        )
    else:
        prompt += (
            f"If the text describes one event, or one event that repeats on a "
            f"regular schedule, call {GET_EVENT_INFORMATION}. If it describes "
            f"several unrelated events or a schedule that cannot be expressed "
            f"as a single recurrence rule, call {GENERATE_ICAL_FILE}.\n"
        )
    return prompt


def select_request_params(
    selected_text: str,
    mode: str | None = None,
    today: date | None = None,
) -> RequestParams:
    """Produce request parameters for *selected_text* in *mode*.

    Args:
        selected_text: The text the user selected.
        mode: ``"newTab"``, ``"ical"`` or ``"auto"``.  ``None`` selects
            :data:`DEFAULT_MODE`.
        today: Override for the current date (useful for testing).

    Returns:
        A :class:`RequestParams` for the provider adapter.

    Raises:
        ConfigError: If *mode* is not one of :data:`MODES`.
    """
    mode = mode or DEFAULT_MODE

    if mode == MODE_NEW_TAB:
        functions = (EVENT_INFORMATION_FUNCTION,)
        forced = GET_EVENT_INFORMATION
    elif mode == MODE_ICAL:
        functions = (ICAL_FILE_FUNCTION,)
        forced = GENERATE_ICAL_FILE
    elif mode == MODE_AUTO:
        functions = (EVENT_INFORMATION_FUNCTION, ICAL_FILE_FUNCTION)
        forced = None
    else:
        valid = ", ".join(MODES)
        raise ConfigError(f"Unknown mode {mode!r}; expected one of: {valid}")

    return RequestParams(
        mode=mode,
        system_prompt=build_system_prompt(mode, today),
        user_prompt=selected_text,
        functions=functions,
        forced_function=forced,
    )
