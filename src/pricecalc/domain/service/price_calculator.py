"""Domain service: PriceCalculator.

Turns line items, aggregate discounts/taxes and shipping into a fully
itemized PriceCalculation. Stateless and free of I/O, so a single
instance can be shared by any number of concurrent callers.

Order of operations:

1. Each line: subtotal -> line discount -> line tax on the discounted amount.
2. ``pre_discount_base`` = subtotal minus all line discounts.
3. Aggregate discounts are taken from ``pre_discount_base``.
4. Aggregate taxes apply to ``pre_discount_base`` minus aggregate discounts.
5. Shipping is added last and is never discounted or taxed.

No rounding happens here; see ``PriceCalculation.rounded()``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from decimal import Decimal, DecimalException

from pricecalc.domain.exceptions import InvalidInputError
from pricecalc.domain.model.calculation import (
    BulkDiscount,
    BulkDiscountTier,
    DiscountBreakdownEntry,
    LineCalculation,
    PriceCalculation,
    ProfitMargin,
    TaxBreakdownEntry,
)
from pricecalc.domain.model.charges import AdditionalCharge, ChargeKind
from pricecalc.domain.model.line_item import LineItem, Shipping
from pricecalc.domain.model.value_objects import (
    HUNDRED,
    ZERO,
    Money,
    Percentage,
    Quantity,
)


@contextmanager
def _checked_arithmetic() -> Iterator[None]:
    """Report Decimal overflow and invalid operations as bad input."""
    try:
        yield
    except DecimalException as exc:
        raise InvalidInputError(f"Amount out of range: {exc!r}") from exc


class PriceCalculator:

    def calculate(
        self,
        items: Iterable[LineItem],
        discounts: Iterable[AdditionalCharge] = (),
        taxes: Iterable[AdditionalCharge] = (),
        shipping: Shipping | None = None,
    ) -> PriceCalculation:
        """Compute the full breakdown for a document.

        Raises InvalidInputError before computing anything if an input
        is of the wrong type or kind.
        """
        items = list(items)
        discounts = list(discounts)
        taxes = list(taxes)
        shipping = shipping if shipping is not None else Shipping()

        self._validate(items, discounts, taxes, shipping)

        with _checked_arithmetic():
            return self._calculate(items, discounts, taxes, shipping)

    def _calculate(
        self,
        items: list[LineItem],
        discounts: list[AdditionalCharge],
        taxes: list[AdditionalCharge],
        shipping: Shipping,
    ) -> PriceCalculation:
        lines = [self.calculate_item(item) for item in items]

        subtotal = sum((line.line_subtotal for line in lines), ZERO)
        total_line_discount = sum((line.line_discount_amount for line in lines), ZERO)
        total_line_tax = sum((line.line_tax_amount for line in lines), ZERO)
        pre_discount_base = subtotal - total_line_discount

        discount_breakdown = self._line_discount_entries(lines)
        additional_discount_amount = ZERO
        for discount in discounts:
            amount = discount.amount_on(pre_discount_base)
            additional_discount_amount += amount
            discount_breakdown.append(
                DiscountBreakdownEntry(
                    name=discount.name or self._default_discount_name(discount),
                    charge_type=discount.charge_type.value,
                    value=discount.value,
                    amount=amount,
                    description=discount.description,
                )
            )

        taxable_base = pre_discount_base - additional_discount_amount
        tax_breakdown = self._line_tax_groups(lines)
        additional_tax_amount = ZERO
        for tax in taxes:
            amount = tax.amount_on(taxable_base)
            additional_tax_amount += amount
            tax_breakdown.append(
                TaxBreakdownEntry(
                    name=tax.name or f"{tax.rate} Tax",
                    rate=tax.rate.value,
                    amount=amount,
                    items=("All Items",),
                    description=tax.description,
                )
            )

        shipping_cost = shipping.cost.amount
        grand_total = (
            pre_discount_base
            - additional_discount_amount
            + total_line_tax
            + additional_tax_amount
            + shipping_cost
        )

        return PriceCalculation(
            items=tuple(lines),
            subtotal=subtotal,
            total_line_discount=total_line_discount,
            total_line_tax=total_line_tax,
            pre_discount_base=pre_discount_base,
            additional_discount_amount=additional_discount_amount,
            additional_tax_amount=additional_tax_amount,
            shipping_cost=shipping_cost,
            grand_total=grand_total,
            tax_breakdown=tuple(tax_breakdown),
            discount_breakdown=tuple(discount_breakdown),
        )

    def calculate_item(self, item: LineItem) -> LineCalculation:
        """Discount then tax a single line."""
        if not isinstance(item, LineItem):
            raise InvalidInputError(
                f"Expected a LineItem, got {type(item).__name__}"
            )
        with _checked_arithmetic():
            line_subtotal = item.subtotal
            discount_amount = item.discount.apply_to(line_subtotal)
            after_discount = line_subtotal - discount_amount
            tax_amount = item.tax_rate.apply_to(after_discount)
        return LineCalculation(
            name=item.name,
            quantity=item.quantity.value,
            unit_price=item.unit_price.amount,
            discount_percent=item.discount.value,
            tax_rate_percent=item.tax_rate.value,
            line_subtotal=line_subtotal,
            line_discount_amount=discount_amount,
            line_after_discount=after_discount,
            line_tax_amount=tax_amount,
            line_total=after_discount + tax_amount,
            sku=item.sku,
            description=item.description,
        )

    # --- Pricing helpers ------------------------------------------------------

    @staticmethod
    def profit_margin(cost_price: Money, selling_price: Money) -> ProfitMargin:
        """Profit, margin (% of selling price) and markup (% of cost)."""
        cost = cost_price.amount
        selling = selling_price.amount
        with _checked_arithmetic():
            profit = selling - cost
            margin = profit / selling * HUNDRED if cost > ZERO and selling > ZERO else ZERO
            markup = profit / cost * HUNDRED if cost > ZERO else ZERO
        return ProfitMargin(
            cost_price=cost,
            selling_price=selling,
            profit=profit,
            margin=margin,
            markup=markup,
        )

    @staticmethod
    def bulk_discount(
        quantity: Quantity,
        base_price: Money,
        tiers: Sequence[BulkDiscountTier] = (),
    ) -> BulkDiscount:
        """Apply the best quantity tier whose threshold *quantity* reaches."""
        applicable = [t for t in tiers if quantity.value >= t.min_quantity]
        rate = (
            max(applicable, key=lambda t: t.min_quantity).discount.value
            if applicable
            else ZERO
        )
        with _checked_arithmetic():
            original = (base_price * quantity.value).amount
            discount_amount = original * rate / HUNDRED
        return BulkDiscount(
            original_price=original,
            discount_rate=rate,
            discount_amount=discount_amount,
            final_price=original - discount_amount,
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _validate(
        items: list,
        discounts: list,
        taxes: list,
        shipping: Shipping,
    ) -> None:
        for item in items:
            if not isinstance(item, LineItem):
                raise InvalidInputError(
                    f"Expected a LineItem, got {type(item).__name__}"
                )
        for charge in discounts:
            if not isinstance(charge, AdditionalCharge) or charge.kind is not ChargeKind.DISCOUNT:
                raise InvalidInputError(f"Not a discount: {charge!r}")
        for charge in taxes:
            if not isinstance(charge, AdditionalCharge) or charge.kind is not ChargeKind.TAX:
                raise InvalidInputError(f"Not a tax: {charge!r}")
        if not isinstance(shipping, Shipping):
            raise InvalidInputError(
                f"Expected Shipping, got {type(shipping).__name__}"
            )

    @staticmethod
    def _line_discount_entries(
        lines: list[LineCalculation],
    ) -> list[DiscountBreakdownEntry]:
        return [
            DiscountBreakdownEntry(
                name=f"{line.name} Discount",
                charge_type="percentage",
                value=line.discount_percent,
                amount=line.line_discount_amount,
                description=f"{line.discount_percent}% discount applied to {line.name}",
            )
            for line in lines
            if line.discount_percent > ZERO
        ]

    @staticmethod
    def _line_tax_groups(lines: list[LineCalculation]) -> list[TaxBreakdownEntry]:
        """Group line taxes by rate, keeping first-seen order."""
        groups: dict[Decimal, tuple[Decimal, list[str]]] = {}
        for line in lines:
            if line.tax_rate_percent <= ZERO:
                continue
            amount, names = groups.get(line.tax_rate_percent, (ZERO, []))
            names.append(line.name)
            groups[line.tax_rate_percent] = (amount + line.line_tax_amount, names)

        return [
            TaxBreakdownEntry(
                name=f"{Percentage(rate)} Tax",
                rate=rate,
                amount=amount,
                items=tuple(names),
                description=f"Tax applied to items with {Percentage(rate)} rate",
            )
            for rate, (amount, names) in groups.items()
        ]

    @staticmethod
    def _default_discount_name(discount: AdditionalCharge) -> str:
        if discount.is_fixed:
            return f"{discount.fixed_amount} Discount"
        return f"{discount.rate} Discount"
