"""Tests for numeric and date coercion."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tufan.domain.coercion import is_valid_amount, round_currency, to_datetime, to_number


class TestToNumber:
    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "12abc", "nan", "NaN", "inf", "-Infinity",
         float("nan"), float("inf"), True, False, [], {}, object()],
    )
    def test_garbage_coerces_to_zero(self, value):
        result = to_number(value)

        assert result == 0
        assert isinstance(result, float)

    def test_numbers_pass_through(self):
        assert to_number(1500) == 1500
        assert to_number(12.5) == 12.5
        assert to_number(-40) == -40
        assert to_number(Decimal("99.95")) == 99.95

    def test_numeric_strings(self):
        assert to_number("1500.00") == 1500
        assert to_number(" 42 ") == 42
        assert to_number("-7.5") == -7.5
        assert to_number("1e3") == 1000

    def test_negatives_are_not_rejected(self):
        assert to_number("-100") == -100

    def test_explicit_default(self):
        assert to_number("invalid", 10) == 10
        assert to_number(None, default=5.5) == 5.5
        assert to_number("3", 10) == 3

    def test_decimal_nan_uses_default(self):
        assert to_number(Decimal("NaN"), 7) == 7


class TestIsValidAmount:
    def test_valid(self):
        assert is_valid_amount(0)
        assert is_valid_amount("250.50")
        assert is_valid_amount(10)

    def test_invalid(self):
        assert not is_valid_amount(-1)
        assert not is_valid_amount("-0.01")
        assert not is_valid_amount(None)
        assert not is_valid_amount("abc")
        assert not is_valid_amount(float("inf"))


class TestRoundCurrency:
    def test_two_decimals(self):
        assert round_currency(333.3333) == 333.33
        assert round_currency(10) == 10

    def test_half_rounds_away_from_zero(self):
        assert round_currency(0.125) == 0.13
        assert round_currency(2.675) == 2.68
        assert round_currency(-0.125) == -0.13

    def test_garbage_is_zero(self):
        assert round_currency("oops") == 0

    def test_huge_values_survive(self):
        assert round_currency(1e30) == 1e30


class TestToDatetime:
    def test_bare_date_string_is_midnight(self):
        assert to_datetime("2025-01-03") == datetime(2025, 1, 3)

    def test_zulu_timestamp_is_aware(self):
        parsed = to_datetime("2025-01-03T10:30:00.000Z")

        assert parsed == datetime(2025, 1, 3, 10, 30, tzinfo=timezone.utc)

    def test_offset_timestamp(self):
        parsed = to_datetime("2025-01-03T23:00:00+06:00")

        assert parsed.utcoffset() == timedelta(hours=6)
        assert parsed.hour == 23

    def test_date_and_datetime_objects(self):
        assert to_datetime(date(2025, 1, 3)) == datetime(2025, 1, 3)
        stamp = datetime(2025, 1, 3, 8, 15)
        assert to_datetime(stamp) is stamp

    @pytest.mark.parametrize("value", [None, "", "tomorrow", "03/01/2025", 20250103])
    def test_unparseable_is_none(self, value):
        assert to_datetime(value) is None
