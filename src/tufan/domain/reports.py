"""Convention booking report aggregates.

Statuses are filtered and counted with the real-time resolvers rather than
the stored fields, so a stale "confirmed" booking from last week is reported
as completed, matching what the bookings table shows.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tufan.domain.booking_status import (
    BookingLike,
    ConventionBooking,
    ProgramStatus,
    TimeSlot,
    as_booking,
    get_real_time_payment_status,
    get_real_time_program_status,
    parse_payment_status,
    parse_program_status,
    parse_time_slot,
)
from tufan.domain.coercion import round_currency, to_datetime, to_number
from tufan.domain.finance import PaymentStatus
from tufan.infra.time import local_now

logger = logging.getLogger(__name__)


# ── Schemas ───────────────────────────────────────────────


class HallStats(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hall_id: Any = Field(alias="hallId")
    hall_name: str = Field(alias="hallName")
    bookings: int
    revenue: float
    guests: int


class BookingStats(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_bookings: int = Field(alias="totalBookings")
    total_revenue: float = Field(alias="totalRevenue")
    total_advance_payment: float = Field(alias="totalAdvancePayment")
    pending_payment: float = Field(alias="pendingPayment")
    total_guests: int = Field(alias="totalGuests")
    payment_status_counts: dict[PaymentStatus, int] = Field(alias="paymentStatusCounts")
    program_status_counts: dict[ProgramStatus, int] = Field(alias="programStatusCounts")
    time_slot_counts: dict[TimeSlot, int] = Field(alias="timeSlotCounts")
    event_type_counts: dict[str, int] = Field(alias="eventTypeCounts")
    hall_stats: list[HallStats] = Field(alias="hallWiseStats")


# ── Filtering ─────────────────────────────────────────────


def _as_day(value: Any) -> date | None:
    parsed = to_datetime(value)
    return parsed.date() if parsed is not None else None


def filter_convention_bookings(
    bookings: Iterable[BookingLike],
    *,
    start_date: Any = None,
    end_date: Any = None,
    payment_status: PaymentStatus | str | None = None,
    program_status: ProgramStatus | str | None = None,
    hall_id: Any = None,
    time_slot: TimeSlot | str | None = None,
    now: datetime | None = None,
) -> list[ConventionBooking]:
    """Keep the bookings matching every given criterion.

    Args:
        bookings: ConventionBooking models or raw backend dicts.
        start_date: Inclusive lower bound on the event's calendar day.
        end_date: Inclusive upper bound on the event's calendar day.
        payment_status: Real-time payment status to keep.
        program_status: Real-time program status to keep.
        hall_id: Keep bookings for this hall (compared as text, so 3 == "3").
        time_slot: Keep bookings in this slot ("Full Day" matches full-day).
        now: Clock for the program status check. Defaults to ``local_now()``.

    Returns:
        Matching bookings as models. With a date bound set, bookings whose
        event date cannot be read are dropped.
    """
    start = _as_day(start_date)
    end = _as_day(end_date)
    wanted_payment = parse_payment_status(payment_status) if payment_status else None
    wanted_program = parse_program_status(program_status) if program_status else None
    wanted_slot = parse_time_slot(time_slot) if time_slot else None

    if wanted_program is not None and now is None:
        now = local_now()

    matched = []
    for raw in bookings:
        booking = as_booking(raw)

        if start is not None or end is not None:
            day = _as_day(booking.event_date)
            if day is None:
                continue
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue

        if wanted_payment is not None:
            if get_real_time_payment_status(booking).status != wanted_payment:
                continue

        if wanted_program is not None:
            if get_real_time_program_status(booking, now=now) != wanted_program:
                continue

        if hall_id is not None:
            hall = booking.convention_hall
            if hall is None or str(hall.id) != str(hall_id):
                continue

        if time_slot:
            if wanted_slot is None or parse_time_slot(booking.time_slot) != wanted_slot:
                continue

        matched.append(booking)

    return matched


# ── Aggregates ────────────────────────────────────────────


def summarize_convention_bookings(
    bookings: Iterable[BookingLike],
    *,
    now: datetime | None = None,
    **filters: Any,
) -> BookingStats:
    """Aggregate revenue, guests and status counts over a booking list.

    Args:
        bookings: ConventionBooking models or raw backend dicts.
        now: Evaluation instant shared by every booking. Defaults to
            ``local_now()`` so the whole report sees one clock reading.
        **filters: Passed to ``filter_convention_bookings`` (start_date,
            end_date, payment_status, program_status, hall_id, time_slot).

    Returns:
        BookingStats with every enum key present in the status and slot
        count maps. Event types and halls appear only when booked.
    """
    if now is None:
        now = local_now()

    selected = filter_convention_bookings(bookings, now=now, **filters)

    payment_counts = {status: 0 for status in PaymentStatus}
    program_counts = {status: 0 for status in ProgramStatus}
    slot_counts = {slot: 0 for slot in TimeSlot}
    event_type_counts: dict[str, int] = {}
    halls: dict[str, dict[str, Any]] = {}

    revenue = 0.0
    advance = 0.0
    guests = 0

    for booking in selected:
        amount = max(0.0, to_number(booking.total_amount))
        head_count = max(0, int(to_number(booking.number_of_guests)))
        revenue += amount
        advance += max(0.0, to_number(booking.advance_payment))
        guests += head_count

        payment_counts[get_real_time_payment_status(booking).status] += 1
        program_counts[get_real_time_program_status(booking, now=now)] += 1

        slot = parse_time_slot(booking.time_slot)
        if slot is not None:
            slot_counts[slot] += 1

        event_type = str(booking.event_type or "").strip()
        if event_type:
            event_type_counts[event_type] = event_type_counts.get(event_type, 0) + 1

        hall = booking.convention_hall
        if hall is not None and hall.id is not None:
            entry = halls.setdefault(
                str(hall.id),
                {"hall_id": hall.id, "hall_name": hall.name or "", "bookings": 0,
                 "revenue": 0.0, "guests": 0},
            )
            entry["bookings"] += 1
            entry["revenue"] += amount
            entry["guests"] += head_count

    logger.info(
        "convention booking report built",
        extra={"extra_fields": {"total_bookings": len(selected), "halls": len(halls)}},
    )

    return BookingStats(
        total_bookings=len(selected),
        total_revenue=round_currency(revenue),
        total_advance_payment=round_currency(advance),
        pending_payment=round_currency(max(0.0, revenue - advance)),
        total_guests=guests,
        payment_status_counts=payment_counts,
        program_status_counts=program_counts,
        time_slot_counts=slot_counts,
        event_type_counts=event_type_counts,
        hall_stats=[
            HallStats(**{**entry, "revenue": round_currency(entry["revenue"])})
            for entry in halls.values()
        ],
    )
