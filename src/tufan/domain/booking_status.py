"""Real-time status of convention hall bookings.

The programStatus stored by the backend goes stale: a booking stays
"confirmed" after its slot has ended until someone edits it. These
resolvers compute what the dashboard should show right now from the
stored status plus the clock. They never write anything back.

Slot end thresholds (local hour at which the slot counts as over):

    morning     12
    afternoon   18
    evening     23
    full-day    23
    (unknown)   23   -- never mark an unknown slot passed early
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tufan.domain.coercion import to_datetime, to_number
from tufan.domain.finance import PaymentStatus
from tufan.infra.time import local_now

logger = logging.getLogger(__name__)


# ── Enums ─────────────────────────────────────────────────


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    FULL_DAY = "full-day"


class ProgramStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


DEFAULT_SLOT_END_HOUR = 23

SLOT_END_HOURS: dict[str, int] = {
    TimeSlot.MORNING.value: 12,
    TimeSlot.AFTERNOON.value: 18,
    TimeSlot.EVENING.value: 23,
    TimeSlot.FULL_DAY.value: 23,
}


def parse_time_slot(value: Any) -> TimeSlot | None:
    """Map a stored slot string onto TimeSlot, or None if unrecognized."""
    if isinstance(value, TimeSlot):
        return value
    if not isinstance(value, str):
        return None
    slot = value.strip().lower()
    if slot == "full day":
        return TimeSlot.FULL_DAY
    try:
        return TimeSlot(slot)
    except ValueError:
        return None


def parse_program_status(value: Any) -> ProgramStatus:
    """Map a stored programStatus onto ProgramStatus; unknown text is pending."""
    if isinstance(value, ProgramStatus):
        return value
    if isinstance(value, str):
        try:
            return ProgramStatus(value.strip().lower())
        except ValueError:
            pass
    logger.warning(
        "unrecognized program status, treating as pending",
        extra={"extra_fields": {"program_status": str(value)[:32]}},
    )
    return ProgramStatus.PENDING


def parse_payment_status(value: Any) -> PaymentStatus:
    """Map a stored paymentStatus onto PaymentStatus; unknown text is pending."""
    if isinstance(value, PaymentStatus):
        return value
    if isinstance(value, str):
        try:
            return PaymentStatus(value.strip().lower())
        except ValueError:
            pass
    logger.warning(
        "unrecognized payment status, treating as pending",
        extra={"extra_fields": {"payment_status": str(value)[:32]}},
    )
    return PaymentStatus.PENDING


# ── Schemas ───────────────────────────────────────────────


class ConventionHall(BaseModel):
    """The hall embedded in a booking payload (``conventionHall``)."""

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    name: str | None = None


class ConventionBooking(BaseModel):
    """Fields of a convention booking payload that status resolution and
    reporting read.

    Accepts the backend's camelCase JSON as-is; other keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event_date: Any = Field(default=None, alias="eventDate")
    event_type: Any = Field(default=None, alias="eventType")
    convention_hall: ConventionHall | None = Field(default=None, alias="conventionHall")
    time_slot: Any = Field(default="", alias="timeSlot")
    program_status: Any = Field(default=ProgramStatus.PENDING.value, alias="programStatus")
    remaining_payment: Any = Field(default=0, alias="remainingPayment")
    payment_status: Any = Field(default=PaymentStatus.PENDING.value, alias="paymentStatus")

    total_amount: Any = Field(default=0, alias="totalAmount")
    advance_payment: Any = Field(default=0, alias="advancePayment")
    number_of_guests: Any = Field(default=0, alias="numberOfGuests")


class PaymentDue(BaseModel):
    """Display-ready payment state. ``model_dump(by_alias=True)`` gives
    the ``{status, displayText, isDue}`` shape the dashboard renders."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: PaymentStatus
    display_text: str = Field(alias="displayText")
    is_due: bool = Field(alias="isDue")


BookingLike = ConventionBooking | Mapping[str, Any]


def as_booking(booking: BookingLike) -> ConventionBooking:
    """Validate a raw booking dict into a ConventionBooking."""
    if isinstance(booking, ConventionBooking):
        return booking
    return ConventionBooking.model_validate(dict(booking))


# ── Resolvers ─────────────────────────────────────────────


def is_event_passed(event_date: Any, time_slot: Any, *, now: datetime | None = None) -> bool:
    """Return True if the event's slot has already ended.

    Calendar days are compared first: an earlier day has passed, a later
    day has not. On the event day itself the current hour is checked
    against the slot's end threshold.

    Args:
        event_date: date, datetime or ISO string. Only the calendar day
            matters. Aware values are moved into ``now``'s timezone first.
        time_slot: morning / afternoon / evening / full-day, any case.
        now: Evaluation instant. Defaults to ``local_now()``.

    Returns:
        True if passed. A missing or unparseable date counts as not passed.
    """
    if now is None:
        now = local_now()

    event = to_datetime(event_date)
    if event is None:
        logger.warning(
            "unparseable event date, treating event as upcoming",
            extra={"extra_fields": {"event_date_type": type(event_date).__name__}},
        )
        return False

    if event.tzinfo is not None and now.tzinfo is not None:
        event = event.astimezone(now.tzinfo)

    event_day = event.date()
    today = now.date()

    if event_day < today:
        return True
    if event_day > today:
        return False

    parsed_slot = parse_time_slot(time_slot)
    slot = parsed_slot.value if parsed_slot is not None else ""
    end_hour = SLOT_END_HOURS.get(slot, DEFAULT_SLOT_END_HOUR)
    return now.hour >= end_hour


def get_real_time_program_status(
    booking: BookingLike, *, now: datetime | None = None
) -> ProgramStatus:
    """Program status the dashboard should display right now.

    Cancelled stays cancelled. Otherwise a booking whose slot has ended
    shows as completed, whatever was stored. Anything else shows the
    stored status.
    """
    booking = as_booking(booking)
    stored = parse_program_status(booking.program_status)

    if stored == ProgramStatus.CANCELLED:
        return ProgramStatus.CANCELLED

    if is_event_passed(booking.event_date, booking.time_slot, now=now):
        return ProgramStatus.COMPLETED

    return stored


def get_real_time_payment_status(booking: BookingLike) -> PaymentDue:
    """Payment state from the outstanding balance and stored paymentStatus.

    No balance left means paid, regardless of the stored flag. With a
    balance, a stored "partial" shows as partial; everything else is
    pending. Both carry ``is_due=True``.
    """
    booking = as_booking(booking)
    remaining = to_number(booking.remaining_payment)

    if remaining <= 0:
        return PaymentDue(status=PaymentStatus.PAID, display_text="Paid", is_due=False)

    if parse_payment_status(booking.payment_status) == PaymentStatus.PARTIAL:
        return PaymentDue(
            status=PaymentStatus.PARTIAL, display_text="Partial (Due)", is_due=True
        )

    return PaymentDue(status=PaymentStatus.PENDING, display_text="Pending (Due)", is_due=True)
