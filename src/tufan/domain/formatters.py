"""Display strings for amounts, percentages and dates.

Currency symbol and digit grouping come from ResortSettings; the resort
defaults to Taka with South Asian grouping (৳1,50,000).
"""

from __future__ import annotations

from typing import Any

from tufan.domain.coercion import round_currency, to_datetime, to_number
from tufan.infra.settings import load_settings


def _group_digits(digits: str, style: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    if style == "western":
        size = 3
    else:
        # lakh/crore: last three digits, then pairs
        size = 2
    groups = []
    while len(head) > size:
        groups.insert(0, head[-size:])
        head = head[:-size]
    groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number(value: Any) -> str:
    """Thousands-grouped number with up to two decimals ("1,50,000.5")."""
    amount = round_currency(value)
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    text = _group_digits(whole, load_settings().number_grouping)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}{text}"


def format_currency(value: Any) -> str:
    """Amount with the resort's currency symbol, e.g. ৳1,500."""
    return f"{load_settings().currency_symbol}{format_number(value)}"


def format_percentage(value: Any) -> str:
    # adding 0.0 turns a rounded -0.0 into 0.0
    number = round_currency(value) + 0.0
    text = f"{number:.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


def format_date(value: Any) -> str:
    """DD/MM/YYYY, or '' when the value is not a date."""
    parsed = to_datetime(value)
    if parsed is None:
        return ""
    return parsed.strftime("%d/%m/%Y")


def format_payment_due(remaining_payment: Any) -> str:
    """Remaining balance tagged for the bookings table: '৳0 (Paid)' or '৳500 (DUE)'."""
    remaining = to_number(remaining_payment)
    if remaining <= 0:
        return f"{format_currency(0)} (Paid)"
    return f"{format_currency(remaining)} (DUE)"


def format_invoice_number(booking_id: Any, prefix: str = "BOOKING") -> str:
    """BOOKING-00042 style invoice reference."""
    return f"{prefix}-{abs(int(to_number(booking_id))):05d}"
