"""Line items and shipping — the inputs of a price calculation.

Both are immutable: they are built once per calculation, validated on
construction, and discarded once the caller has the totals it needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from pricecalc.domain.exceptions import InvalidInputError
from pricecalc.domain.model.product import Product
from pricecalc.domain.model.value_objects import Money, Percentage, Quantity

Number = str | float | int | Decimal


@dataclass(frozen=True)
class LineItem:
    """One product/quantity/price/discount/tax entry of a document.

    ``discount`` is taken off the line's pre-tax amount; ``tax_rate`` is
    applied to what remains after the discount.
    """

    name: str
    quantity: Quantity
    unit_price: Money
    discount: Percentage = field(default_factory=Percentage.zero)
    tax_rate: Percentage = field(default_factory=Percentage.zero)
    sku: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        for label, value, expected in (
            ("quantity", self.quantity, Quantity),
            ("unit_price", self.unit_price, Money),
            ("discount", self.discount, Percentage),
            ("tax_rate", self.tax_rate, Percentage),
        ):
            if not isinstance(value, expected):
                raise InvalidInputError(
                    f"Line item {label} must be a {expected.__name__}, got {value!r}"
                )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        name: str,
        quantity: int,
        unit_price: Number,
        discount_percent: Number = 0,
        tax_rate_percent: Number = 0,
        sku: str | None = None,
        description: str = "",
    ) -> LineItem:
        """Build a line item from primitive values, enforcing all invariants."""
        if not name or not name.strip():
            raise InvalidInputError("Line item name is required")
        return LineItem(
            name=name.strip(),
            quantity=Quantity(quantity),
            unit_price=Money.of(unit_price),
            discount=Percentage.of(discount_percent),
            tax_rate=Percentage.of(tax_rate_percent),
            sku=sku,
            description=description,
        )

    @staticmethod
    def from_product(
        product: Product,
        quantity: int,
        discount_percent: Number | None = None,
        tax_rate_percent: Number | None = None,
    ) -> LineItem:
        """Build a line item priced from the catalog.

        Explicit discount/tax values override the product's defaults.
        """
        return LineItem(
            name=product.name,
            quantity=Quantity(quantity),
            unit_price=product.price,  # price snapshot
            discount=(
                product.discount
                if discount_percent is None
                else Percentage.of(discount_percent)
            ),
            tax_rate=(
                product.tax_rate
                if tax_rate_percent is None
                else Percentage.of(tax_rate_percent)
            ),
            sku=product.sku,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Decimal:
        return (self.unit_price * self.quantity.value).amount


@dataclass(frozen=True)
class Shipping:
    """Shipping charge, added after all discounts and taxes. Never taxed."""

    cost: Money = field(default_factory=Money.zero)
    method: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.cost, Money):
            raise InvalidInputError(
                f"Shipping cost must be Money, got {self.cost!r}"
            )

    @staticmethod
    def of(cost: Number = 0, method: str | None = None) -> Shipping:
        return Shipping(cost=Money.of(cost), method=method)
