"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from pricecalc.domain.exceptions import InvalidInputError, ValidationError
from pricecalc.domain.model.value_objects import (
    Money,
    Percentage,
    Quantity,
    round_money,
    to_decimal,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_keeps_decimal_digits(self):
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_invalid_input_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Money.of("abc")

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidInputError):
            Money.of("NaN")

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(InvalidInputError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("1234.5")) == "$1,234.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") >= Money.of("10")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_zero_allowed(self):
        assert Quantity(0).value == 0

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidInputError, match="must be an integer"):
            Quantity(1.5)

    def test_bool_rejected(self):
        with pytest.raises(InvalidInputError):
            Quantity(True)


# ── Percentage ───────────────────────────────────────────────────────────────


class TestPercentage:

    def test_bounds_inclusive(self):
        assert Percentage.of(0).value == Decimal("0")
        assert Percentage.of(100).value == Decimal("100")

    @pytest.mark.parametrize("value", ["-0.01", "100.01", "250"])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(InvalidInputError, match="between 0 and 100"):
            Percentage.of(value)

    def test_apply_to(self):
        assert Percentage.of("12.5").apply_to(Decimal("80")) == Decimal("10")

    def test_str(self):
        assert str(Percentage.of("10")) == "10%"
        assert str(Percentage.of("12.50")) == "12.5%"


# ── Helpers ──────────────────────────────────────────────────────────────────


class TestHelpers:

    def test_round_money_half_up(self):
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_money(Decimal("2.344")) == Decimal("2.34")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(InvalidInputError, match="Invalid price"):
            to_decimal("ten", "price")

    def test_round_money_beyond_context_precision(self):
        assert round_money(Decimal("1e30")) == Decimal("1e30")
        assert round_money(Decimal("123456789012345678901234567890.125")) == Decimal(
            "123456789012345678901234567890.13"
        )

    def test_large_money_str(self):
        assert str(Money(Decimal("1e27"))) == "$1,000,000,000,000,000,000,000,000,000.00"
