"""Time utilities for consistent timestamp handling."""

from datetime import datetime, timezone

from tufan.infra.settings import load_settings


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def local_now() -> datetime:
    """Return the current instant in the resort's timezone (timezone-aware).

    Uses TUFAN_TIMEZONE when configured, otherwise the machine's local zone.
    """
    tz = load_settings().tzinfo
    if tz is None:
        return utc_now().astimezone()
    return utc_now().astimezone(tz)
