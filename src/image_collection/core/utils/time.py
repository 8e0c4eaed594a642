"""Timestamp helpers for record modification stamps."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 form.

    Example:
        2024-01-15T10:42:31.123456+00:00

    Records store ``updated_at`` in this form so that string comparison
    orders stamps chronologically.
    """
    return utc_now().isoformat()
