"""Results of a price calculation.

Everything here is a frozen snapshot holding unrounded Decimals.
Call ``rounded()`` at the display/serialization boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from pricecalc.domain.exceptions import InvalidInputError
from pricecalc.domain.model.value_objects import ZERO, Percentage, round_money


@dataclass(frozen=True)
class LineCalculation:
    name: str
    quantity: int
    unit_price: Decimal
    discount_percent: Decimal
    tax_rate_percent: Decimal
    line_subtotal: Decimal
    line_discount_amount: Decimal
    line_after_discount: Decimal
    line_tax_amount: Decimal
    line_total: Decimal
    sku: str | None = None
    description: str = ""

    def rounded(self) -> LineCalculation:
        return replace(
            self,
            unit_price=round_money(self.unit_price),
            line_subtotal=round_money(self.line_subtotal),
            line_discount_amount=round_money(self.line_discount_amount),
            line_after_discount=round_money(self.line_after_discount),
            line_tax_amount=round_money(self.line_tax_amount),
            line_total=round_money(self.line_total),
        )


@dataclass(frozen=True)
class TaxBreakdownEntry:
    """Tax collected at one rate, or by one aggregate tax."""

    name: str
    rate: Decimal
    amount: Decimal
    items: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class DiscountBreakdownEntry:
    """Discount granted on one line, or by one aggregate discount."""

    name: str
    charge_type: str  # "percentage" or "fixed"
    value: Decimal
    amount: Decimal
    description: str = ""


@dataclass(frozen=True)
class PriceCalculation:
    """Fully itemized monetary breakdown of a document.

    ``subtotal`` is the sum of ``unit_price * quantity`` before any
    discount. ``grand_total`` is
    ``subtotal - total_line_discount - additional_discount_amount
    + total_line_tax + additional_tax_amount + shipping_cost``.
    """

    items: tuple[LineCalculation, ...]
    subtotal: Decimal
    total_line_discount: Decimal
    total_line_tax: Decimal
    pre_discount_base: Decimal
    additional_discount_amount: Decimal
    additional_tax_amount: Decimal
    shipping_cost: Decimal
    grand_total: Decimal
    tax_breakdown: tuple[TaxBreakdownEntry, ...] = ()
    discount_breakdown: tuple[DiscountBreakdownEntry, ...] = ()

    @property
    def total_discount(self) -> Decimal:
        return self.total_line_discount + self.additional_discount_amount

    @property
    def total_tax(self) -> Decimal:
        return self.total_line_tax + self.additional_tax_amount

    @property
    def is_empty(self) -> bool:
        return not self.items and self.grand_total == ZERO

    def rounded(self) -> PriceCalculation:
        """Copy with every monetary field rounded to cents."""
        return replace(
            self,
            items=tuple(item.rounded() for item in self.items),
            subtotal=round_money(self.subtotal),
            total_line_discount=round_money(self.total_line_discount),
            total_line_tax=round_money(self.total_line_tax),
            pre_discount_base=round_money(self.pre_discount_base),
            additional_discount_amount=round_money(self.additional_discount_amount),
            additional_tax_amount=round_money(self.additional_tax_amount),
            shipping_cost=round_money(self.shipping_cost),
            grand_total=round_money(self.grand_total),
            tax_breakdown=tuple(
                replace(entry, amount=round_money(entry.amount))
                for entry in self.tax_breakdown
            ),
            discount_breakdown=tuple(
                replace(entry, amount=round_money(entry.amount))
                for entry in self.discount_breakdown
            ),
        )


@dataclass(frozen=True)
class ProfitMargin:
    cost_price: Decimal
    selling_price: Decimal
    profit: Decimal
    margin: Decimal  # percent of selling price
    markup: Decimal  # percent of cost price


@dataclass(frozen=True)
class BulkDiscountTier:
    """Discount granted once a line reaches ``min_quantity`` units."""

    min_quantity: int
    discount: Percentage

    def __post_init__(self) -> None:
        if isinstance(self.min_quantity, bool) or not isinstance(self.min_quantity, int):
            raise InvalidInputError(
                f"Tier minimum quantity must be an integer, got {self.min_quantity!r}"
            )
        if not isinstance(self.discount, Percentage):
            raise InvalidInputError(
                f"Tier discount must be a Percentage, got {self.discount!r}"
            )
        if self.min_quantity < 0:
            raise InvalidInputError(
                f"Tier minimum quantity cannot be negative, got {self.min_quantity}"
            )

    @staticmethod
    def of(
        min_quantity: int, discount_percent: str | float | int | Decimal
    ) -> BulkDiscountTier:
        return BulkDiscountTier(min_quantity, Percentage.of(discount_percent))


@dataclass(frozen=True)
class BulkDiscount:
    original_price: Decimal
    discount_rate: Decimal
    discount_amount: Decimal
    final_price: Decimal
