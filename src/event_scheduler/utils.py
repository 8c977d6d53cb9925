"""Small helpers shared across event-scheduler modules."""

from __future__ import annotations


def mask_key(key: str | None) -> str:
    """Mask an API key for safe logging and ``repr`` output.

    Args:
        key: The API key to mask, or ``None``.

    Returns:
        ``"<unset>"`` for a missing key, ``"***"`` for short keys, otherwise
        the first and last four characters around an ellipsis.
    """
    if not key:
        return "<unset>"
    if len(key) <= 8:
        return "***"
    return f"{key[:4]}...{key[-4:]}"
