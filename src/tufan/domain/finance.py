"""Invoice arithmetic for room and convention bookings.

Pure calculation functions. No I/O here; the caller fetches the booking
and passes raw amounts in. Every amount is coerced with ``to_number`` first
and every monetary result is finite, non-negative and rounded to cents.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tufan.domain.coercion import round_currency, to_datetime, to_number

logger = logging.getLogger(__name__)


# ── Enums ─────────────────────────────────────────────────


class DiscountType(str, Enum):
    NONE = "none"
    PERCENTAGE = "percentage"
    FLAT = "flat"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


def _discount_type(value: DiscountType | str | None) -> DiscountType:
    if isinstance(value, DiscountType):
        return value
    try:
        return DiscountType(str(value).strip().lower())
    except ValueError:
        return DiscountType.NONE


# ── Calculations ──────────────────────────────────────────


def calculate_percentage(value: Any, percentage: Any) -> float:
    """Return ``percentage`` percent of ``value`` (10% of 1000 -> 100)."""
    return to_number(value) * to_number(percentage) / 100


def calculate_discount(
    base_amount: Any,
    discount_type: DiscountType | str | None,
    discount_percentage: Any = 0,
    discount_amount: Any = 0,
) -> float:
    """Calculate the discount to subtract from a base charge.

    Args:
        base_amount: Pre-discount charge (e.g. nights x nightly rate).
        discount_type: "percentage", "flat" or "none". Anything else is "none".
        discount_percentage: 0-100, used only for "percentage".
        discount_amount: Flat amount, used only for "flat".

    Returns:
        Discount clamped to [0, base_amount].
    """
    base = max(0.0, to_number(base_amount))
    kind = _discount_type(discount_type)

    if kind == DiscountType.PERCENTAGE:
        raw = calculate_percentage(base, discount_percentage)
    elif kind == DiscountType.FLAT:
        raw = to_number(discount_amount)
    else:
        return 0.0

    return round_currency(min(max(0.0, raw), base))


def calculate_grand_total(
    base_amount: Any,
    discount_type: DiscountType | str | None = DiscountType.NONE,
    discount_percentage: Any = 0,
    discount_amount: Any = 0,
    extra_charges: Any = 0,
) -> float:
    """Final payable amount: base - discount + extra charges, floored at 0."""
    base = max(0.0, to_number(base_amount))
    discount = calculate_discount(base, discount_type, discount_percentage, discount_amount)
    extra = max(0.0, to_number(extra_charges))
    return round_currency(max(0.0, base - discount + extra))


def calculate_remaining_payment(grand_total: Any, advance_payment: Any) -> float:
    """Outstanding balance after the advance; never negative."""
    return round_currency(max(0.0, to_number(grand_total) - to_number(advance_payment)))


def get_payment_status(total_amount: Any, paid_amount: Any) -> PaymentStatus:
    """Classify payment progress from amounts alone.

    Nothing paid is pending, paying the total (or more) is paid, anything
    in between is partial.
    """
    total = to_number(total_amount)
    paid = to_number(paid_amount)

    if paid <= 0:
        return PaymentStatus.PENDING
    if paid >= total:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL


def calculate_nights(check_in: Any, check_out: Any) -> int:
    """Whole nights between two calendar dates.

    Both values are reduced to their calendar date first, so time-of-day
    carried in timestamps does not change the count. A check-out on or
    before check-in yields 0.
    """
    start = to_datetime(check_in)
    end = to_datetime(check_out)
    if start is None or end is None:
        logger.warning(
            "unparseable stay dates, counting 0 nights",
            extra={
                "extra_fields": {
                    "check_in_type": type(check_in).__name__,
                    "check_out_type": type(check_out).__name__,
                },
            },
        )
        return 0

    return max(0, (end.date() - start.date()).days)


# ── Invoice ───────────────────────────────────────────────


class InvoiceAmounts(BaseModel):
    """Raw invoice amounts as stored on a booking.

    Amounts are left untyped on purpose: backend payloads send numbers,
    numeric strings or null, and coercion happens in the calculators.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Room bookings store the pre-discount charge as totalAmount
    base_amount: Any = Field(
        default=0,
        validation_alias=AliasChoices("baseAmount", "totalAmount", "base_amount"),
    )
    discount_type: Any = Field(default=DiscountType.NONE.value, alias="discountType")
    discount_percentage: Any = Field(default=0, alias="discountPercentage")
    discount_amount: Any = Field(default=0, alias="discountAmount")
    extra_charges: Any = Field(default=0, alias="extraCharges")
    advance_payment: Any = Field(default=0, alias="advancePayment")
    check_in_date: Any = Field(default=None, alias="checkInDate")
    check_out_date: Any = Field(default=None, alias="checkOutDate")


class InvoiceSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    nights: int
    base_amount: float = Field(alias="baseAmount")
    discount: float
    after_discount: float = Field(alias="afterDiscount")
    extra_charges: float = Field(alias="extraCharges")
    grand_total: float = Field(alias="grandTotal")
    advance_payment: float = Field(alias="advancePayment")
    remaining_payment: float = Field(alias="remainingPayment")
    payment_status: PaymentStatus = Field(alias="paymentStatus")


def calculate_invoice(amounts: InvoiceAmounts | Mapping[str, Any]) -> InvoiceSummary:
    """Compute every figure shown on a booking invoice.

    Accepts an ``InvoiceAmounts`` or the raw booking dict (camelCase or
    snake_case keys).
    """
    if not isinstance(amounts, InvoiceAmounts):
        amounts = InvoiceAmounts.model_validate(dict(amounts))

    base = round_currency(max(0.0, to_number(amounts.base_amount)))
    discount = calculate_discount(
        base,
        amounts.discount_type,
        amounts.discount_percentage,
        amounts.discount_amount,
    )
    extra = round_currency(max(0.0, to_number(amounts.extra_charges)))
    grand_total = calculate_grand_total(
        base,
        amounts.discount_type,
        amounts.discount_percentage,
        amounts.discount_amount,
        extra,
    )
    advance = round_currency(max(0.0, to_number(amounts.advance_payment)))

    # Stays without dates (convention bookings) show no night count
    nights = 0
    if amounts.check_in_date is not None or amounts.check_out_date is not None:
        nights = calculate_nights(amounts.check_in_date, amounts.check_out_date)

    return InvoiceSummary(
        nights=nights,
        base_amount=base,
        discount=discount,
        after_discount=round_currency(base - discount),
        extra_charges=extra,
        grand_total=grand_total,
        advance_payment=advance,
        remaining_payment=calculate_remaining_payment(grand_total, advance),
        payment_status=get_payment_status(grand_total, advance),
    )
