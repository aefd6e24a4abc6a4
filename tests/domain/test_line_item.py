"""Unit tests for line items, aggregate charges and shipping."""

from decimal import Decimal

import pytest

from pricecalc.domain.exceptions import InvalidInputError
from pricecalc.domain.model.charges import AdditionalCharge, ChargeKind, ChargeType
from pricecalc.domain.model.line_item import LineItem, Shipping
from pricecalc.domain.model.product import Product
from pricecalc.domain.model.value_objects import Money, Percentage, Quantity


class TestLineItemCreate:

    def test_happy_path(self):
        item = LineItem.create("Widget", 2, "10.00", discount_percent=5, tax_rate_percent="15")
        assert item.name == "Widget"
        assert item.quantity.value == 2
        assert item.unit_price == Money.of("10.00")
        assert item.discount == Percentage.of(5)
        assert item.tax_rate == Percentage.of(15)
        assert item.subtotal == Decimal("20.00")

    def test_name_is_stripped(self):
        assert LineItem.create("  Widget ", 1, 1).name == "Widget"

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidInputError, match="name is required"):
            LineItem.create("  ", 1, 1)

    def test_negative_quantity_rejected(self):
        with pytest.raises(InvalidInputError):
            LineItem.create("Widget", -1, 10)

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidInputError):
            LineItem.create("Widget", 1, "-10")

    def test_discount_over_100_rejected(self):
        with pytest.raises(InvalidInputError):
            LineItem.create("Widget", 1, 10, discount_percent=101)

    def test_negative_tax_rejected(self):
        with pytest.raises(InvalidInputError):
            LineItem.create("Widget", 1, 10, tax_rate_percent=-5)


class TestLineItemDirectConstruction:

    def test_raw_quantity_rejected(self):
        with pytest.raises(InvalidInputError, match="quantity must be a Quantity"):
            LineItem(name="Widget", quantity=-1, unit_price=Money.of(10))

    def test_raw_unit_price_rejected(self):
        with pytest.raises(InvalidInputError, match="unit_price must be a Money"):
            LineItem(name="Widget", quantity=Quantity(1), unit_price="10")

    def test_raw_discount_rejected(self):
        with pytest.raises(InvalidInputError, match="discount must be a Percentage"):
            LineItem(
                name="Widget",
                quantity=Quantity(1),
                unit_price=Money.of(10),
                discount=Decimal("150"),
            )

    def test_value_objects_accepted(self):
        item = LineItem(name="Widget", quantity=Quantity(2), unit_price=Money.of(3))
        assert item.subtotal == Decimal("6")


class TestLineItemFromProduct:

    def _product(self) -> Product:
        return Product(
            id="1",
            name="Widget",
            price=Money.of("15.00"),
            discount=Percentage.of(10),
            tax_rate=Percentage.of(15),
            sku="W-1",
        )

    def test_uses_catalog_defaults(self):
        item = LineItem.from_product(self._product(), 3)
        assert item.unit_price == Money.of("15.00")
        assert item.discount == Percentage.of(10)
        assert item.tax_rate == Percentage.of(15)
        assert item.sku == "W-1"

    def test_explicit_rates_override_defaults(self):
        item = LineItem.from_product(self._product(), 3, discount_percent=0, tax_rate_percent="5")
        assert item.discount.is_zero
        assert item.tax_rate == Percentage.of(5)


class TestAdditionalCharge:

    def test_percentage_discount(self):
        charge = AdditionalCharge.discount("Loyalty", 10)
        assert charge.kind is ChargeKind.DISCOUNT
        assert charge.amount_on(Decimal("200")) == Decimal("20")

    def test_fixed_discount_ignores_base(self):
        charge = AdditionalCharge.fixed_discount("Coupon", "5.00")
        assert charge.charge_type is ChargeType.FIXED
        assert charge.amount_on(Decimal("200")) == Decimal("5.00")
        assert charge.value == Decimal("5.00")

    def test_tax(self):
        charge = AdditionalCharge.tax("VAT", 15)
        assert charge.kind is ChargeKind.TAX
        assert charge.amount_on(Decimal("100")) == Decimal("15")

    def test_fixed_tax_rejected(self):
        with pytest.raises(InvalidInputError, match="must be a percentage"):
            AdditionalCharge(
                name="Levy",
                kind=ChargeKind.TAX,
                charge_type=ChargeType.FIXED,
                fixed_amount=Money.of(1),
            )

    def test_fixed_discount_requires_amount(self):
        with pytest.raises(InvalidInputError, match="requires an amount"):
            AdditionalCharge(name="Coupon", kind=ChargeKind.DISCOUNT, charge_type=ChargeType.FIXED)

    def test_rate_out_of_range_rejected(self):
        with pytest.raises(InvalidInputError):
            AdditionalCharge.tax("VAT", 120)

    def test_raw_rate_rejected(self):
        with pytest.raises(InvalidInputError, match="rate must be a Percentage"):
            AdditionalCharge(name="VAT", kind=ChargeKind.TAX, rate=150)

    def test_unknown_kind_rejected(self):
        with pytest.raises(InvalidInputError, match="Invalid charge kind"):
            AdditionalCharge(name="VAT", kind="tax", rate=Percentage.of(15))

    def test_raw_fixed_amount_rejected(self):
        with pytest.raises(InvalidInputError, match="amount must be Money"):
            AdditionalCharge(
                name="Coupon",
                kind=ChargeKind.DISCOUNT,
                charge_type=ChargeType.FIXED,
                fixed_amount=Decimal("5"),
            )


class TestShipping:

    def test_defaults_to_zero(self):
        assert Shipping().cost == Money.zero()

    def test_negative_cost_rejected(self):
        with pytest.raises(InvalidInputError):
            Shipping.of("-1")

    def test_raw_cost_rejected(self):
        with pytest.raises(InvalidInputError, match="must be Money"):
            Shipping(cost=Decimal("4.50"))
