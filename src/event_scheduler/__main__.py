"""Entry point for ``python -m event_scheduler``.

Turns selected text into a Google Calendar link or an ``.ics`` file using
the configured LLM.  The text comes from the positional argument or, when
omitted, from stdin.  Uses stdlib :mod:`argparse` for argument parsing.

Exit codes:
    0 -- An artifact was produced.
    1 -- The pipeline failed (missing/invalid key, unsupported model,
         provider or network error, bad configuration).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import dataclasses
import sys

from event_scheduler.config import ConfigError, load_settings
from event_scheduler.dispatch import supported_models
from event_scheduler.log import setup_logging
from event_scheduler.pipeline import ConsoleSinks, run_pipeline
from event_scheduler.prompts import MODES


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="event-scheduler",
        description="Create a calendar event from a piece of text.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Text describing the event (read from stdin when omitted).",
    )
    parser.add_argument(
        "--page-url",
        default="",
        help="URL of the page the text came from, linked in the description.",
    )
    parser.add_argument(
        "--model",
        choices=supported_models(),
        default=None,
        help="Override EVENT_SCHEDULER_MODEL.",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="Override EVENT_SCHEDULER_MODE.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for generated .ics files (default: EVENT_SCHEDULER_OUTPUT_DIR or .).",
    )
    parser.add_argument(
        "--print-only",
        action="store_true",
        default=False,
        help="Print the calendar link instead of opening it in a browser.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the event-scheduler CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logging("DEBUG" if args.verbose else "INFO")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        setup_logging("DEBUG" if args.verbose else settings.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    overrides = {
        key: value
        for key, value in (
            ("model", args.model),
            ("mode", args.mode),
            ("output_dir", args.output_dir),
        )
        if value is not None
    }
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    text = args.text if args.text is not None else sys.stdin.read()
    if not text.strip():
        print("Error: no text given", file=sys.stderr)
        return 1

    sinks = ConsoleSinks(output_dir=settings.output_dir, print_only=args.print_only)
    result = run_pipeline(
        selected_text=text,
        page_url=args.page_url,
        settings=settings,
        sinks=sinks,
    )
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
