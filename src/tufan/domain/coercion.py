"""Numeric coercion for amounts arriving from backend JSON.

Every monetary or percentage field goes through ``to_number`` before any
arithmetic. Backend payloads carry amounts as numbers, numeric strings
("1500.00" from DECIMAL columns), null, or garbage.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_CENT = Decimal("0.01")


def to_number(value: Any, default: float = 0.0) -> float:
    """Convert ``value`` to a finite float, or return ``default``.

    Args:
        value: Anything: number, numeric string, None, bool, object.
        default: Returned when ``value`` has no finite numeric reading.

    Returns:
        A finite float. Never NaN or infinity.
    """
    # bool is an int subclass; True is not an amount
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return default
        return number if math.isfinite(number) else default

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
        return number if math.isfinite(number) else default

    return default


def is_valid_amount(value: Any) -> bool:
    """True if ``value`` reads as a finite, non-negative number."""
    return to_number(value, default=-1.0) >= 0


def round_currency(value: Any) -> float:
    """Round to 2 decimal places, halves away from zero (0.125 -> 0.13)."""
    number = to_number(value)
    try:
        quantized = Decimal(repr(number)).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits to quantize; nothing left to round
        return number
    return float(quantized)


def to_datetime(value: Any) -> datetime | None:
    """Read a date/datetime/ISO-8601 string, or return None.

    Plain dates become midnight. Strings may be a bare date ("2025-01-01")
    or a full timestamp ("2025-01-01T10:30:00.000Z"). Timezone info is kept
    when present.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
