"""Unit tests for currency conversion, formatting and settings lookups."""

from decimal import Decimal

import pytest

from pricecalc.domain.model.charges import AdditionalCharge
from pricecalc.domain.model.currency import CurrencySetting, CurrencySettings
from pricecalc.domain.model.line_item import LineItem, Shipping
from pricecalc.domain.service.currency_converter import (
    active_currencies,
    calculation_to_display,
    format_amount,
    format_with_currency,
    get_currency,
    lookup_rate,
    prepare_currency_data,
    to_base,
    to_display,
)
from pricecalc.domain.service.price_calculator import PriceCalculator


@pytest.fixture
def settings() -> CurrencySettings:
    return CurrencySettings(
        supported_currencies=[
            CurrencySetting("USD", "$", Decimal("1"), name="US Dollar"),
            CurrencySetting("ZWL", "Z$", Decimal("25.5"), name="Zimbabwe Dollar"),
            CurrencySetting("ZAR", "R", Decimal("18.2"), is_active=False),
        ],
        default_display_currency="ZWL",
    )


# ── to_display / to_base ────────────────────────────────────────────────────


class TestToDisplay:

    def test_converts_and_rounds(self):
        assert to_display(Decimal("10"), Decimal("1.2345")) == Decimal("12.35")

    def test_accepts_floats(self):
        assert to_display(10.5, 2) == Decimal("21.00")

    @pytest.mark.parametrize("rate", [None, 0, "abc", float("nan"), -3])
    def test_unusable_rate_means_no_conversion(self, rate):
        assert to_display(Decimal("10.005"), rate) == Decimal("10.01")

    @pytest.mark.parametrize("amount", [None, 0, "", float("nan"), "abc"])
    def test_missing_amount_yields_zero(self, amount):
        assert to_display(amount, 5) == Decimal("0.00")

    def test_amount_beyond_context_precision(self):
        assert to_display(Decimal("1e30"), 1) == Decimal("1e30")
        assert to_display(1e30, "2") == Decimal("2e30")

    def test_overflow_yields_zero(self):
        assert to_display(Decimal("9e999999"), 10) == Decimal("0.00")


class TestToBase:

    def test_converts_and_rounds(self):
        assert to_base(Decimal("100"), Decimal("3")) == Decimal("33.33")

    @pytest.mark.parametrize("rate", [None, 0, "abc", float("nan")])
    def test_unusable_rate_returns_amount_unchanged(self, rate):
        assert to_base(Decimal("12.345"), rate) == Decimal("12.345")

    def test_missing_amount_yields_zero(self):
        assert to_base(None, 5) == Decimal("0.00")

    @pytest.mark.parametrize(
        "amount, rate",
        [("19.99", "25.5"), ("0.01", "1.5"), ("1234.56", "0.92"), ("100", "3")],
    )
    def test_round_trip_within_one_cent(self, amount, rate):
        original = Decimal(amount)
        back = to_base(to_display(original, rate), rate)
        assert abs(back - original) <= Decimal("0.01")


# ── format_amount ───────────────────────────────────────────────────────────


class TestFormatAmount:

    def test_thousands_and_two_decimals(self):
        assert format_amount(1234.5, "$") == "$1,234.50"

    def test_nan_renders_zero(self):
        assert format_amount(float("nan"), "$") == "$0.00"

    def test_missing_renders_zero(self):
        assert format_amount(None, "Z$") == "Z$0.00"

    def test_large_amount(self):
        assert format_amount(Decimal("1234567.891"), "R") == "R1,234,567.89"

    def test_default_symbol(self):
        assert format_amount(5) == "$5.00"

    def test_amount_beyond_context_precision(self):
        assert (
            format_amount(Decimal("1e27"), "$")
            == "$1,000,000,000,000,000,000,000,000,000.00"
        )


# ── Settings lookups ────────────────────────────────────────────────────────


class TestLookupRate:

    def test_base_currency_is_one(self, settings):
        assert lookup_rate(settings, "USD") == 1

    def test_known_active_currency(self, settings):
        assert lookup_rate(settings, "ZWL") == Decimal("25.5")

    def test_code_is_case_insensitive(self, settings):
        assert lookup_rate(settings, "zwl") == Decimal("25.5")

    def test_unknown_currency_is_one(self, settings):
        assert lookup_rate(settings, "ZZZ") == 1

    def test_inactive_currency_is_one(self, settings):
        assert lookup_rate(settings, "ZAR") == 1

    def test_no_settings_is_one(self):
        assert lookup_rate(None, "ZWL") == 1

    def test_broken_stored_rate_is_one(self):
        broken = CurrencySettings(
            supported_currencies=[CurrencySetting("EUR", "€", Decimal("0"))]
        )
        assert lookup_rate(broken, "EUR") == 1

    @pytest.mark.parametrize("code", [None, 840, "", "  ", b"ZWL"])
    def test_non_string_or_blank_code_is_one(self, settings, code):
        assert lookup_rate(settings, code) == 1
        assert lookup_rate(None, code) == 1


class TestSettingsHelpers:

    def test_get_currency_skips_inactive(self, settings):
        assert get_currency(settings, "ZWL").symbol == "Z$"
        assert get_currency(settings, "ZAR") is None

    def test_active_currencies(self, settings):
        assert [c.code for c in active_currencies(settings)] == ["USD", "ZWL"]
        assert active_currencies(None) == []

    def test_prepare_currency_data(self, settings):
        data = prepare_currency_data(settings, "zwl")
        assert data.base_currency == "USD"
        assert data.display_currency == "ZWL"
        assert data.exchange_rate == Decimal("25.5")
        assert data.exchange_rate_date.tzinfo is not None

    def test_prepare_currency_data_defaults_to_base(self, settings):
        data = prepare_currency_data(settings)
        assert data.display_currency == "USD"
        assert data.exchange_rate == 1

    def test_format_with_currency_uses_default_display(self, settings):
        assert format_with_currency(10, settings) == "Z$255.00"

    def test_format_with_unknown_currency_falls_back_to_dollars(self, settings):
        assert format_with_currency(10, settings, "ZZZ") == "$10.00"

    def test_non_string_codes_are_unknown(self, settings):
        assert get_currency(settings, 840) is None
        assert get_currency(settings, None) is None
        assert settings.find(840) is None
        assert prepare_currency_data(settings, 840).display_currency == "USD"
        assert format_with_currency(10, settings, 840) == "$10.00"


class TestCalculationToDisplay:

    def test_converts_every_amount(self):
        calculation = PriceCalculator().calculate(
            [LineItem.create("Widget", 2, "10", tax_rate_percent="10")],
            discounts=[AdditionalCharge.discount("Promo", 10)],
            shipping=Shipping.of("5"),
        )
        display = calculation_to_display(calculation, Decimal("2"))
        assert display.subtotal == Decimal("40.00")
        assert display.total_discount == Decimal("4.00")
        assert display.total_tax == Decimal("4.00")
        assert display.shipping_cost == Decimal("10.00")
        assert display.grand_total == Decimal("50.00")
        assert display.items[0].unit_price == Decimal("20.00")
        assert display.items[0].line_total == Decimal("44.00")
