"""Aggregate-level discounts and taxes.

An AdditionalCharge applies once to the whole document rather than to
a single line. Discounts may be a percentage of the post-line-discount
subtotal or a fixed amount; taxes are always a percentage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from pricecalc.domain.exceptions import InvalidInputError
from pricecalc.domain.model.value_objects import Money, Percentage


class ChargeKind(Enum):
    DISCOUNT = "discount"
    TAX = "tax"


class ChargeType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class AdditionalCharge:
    """A document-level discount or tax.

    Percentage charges use ``rate``; a FIXED discount uses ``fixed_amount``
    instead and ignores the rate.
    """

    name: str
    kind: ChargeKind
    rate: Percentage = field(default_factory=Percentage.zero)
    charge_type: ChargeType = ChargeType.PERCENTAGE
    fixed_amount: Money | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ChargeKind):
            raise InvalidInputError(f"Invalid charge kind: {self.kind!r}")
        if not isinstance(self.charge_type, ChargeType):
            raise InvalidInputError(f"Invalid charge type: {self.charge_type!r}")
        if not isinstance(self.rate, Percentage):
            raise InvalidInputError(
                f"Charge '{self.name}' rate must be a Percentage, got {self.rate!r}"
            )
        if self.fixed_amount is not None and not isinstance(self.fixed_amount, Money):
            raise InvalidInputError(
                f"Charge '{self.name}' amount must be Money, got {self.fixed_amount!r}"
            )
        if self.charge_type is ChargeType.FIXED:
            if self.kind is ChargeKind.TAX:
                raise InvalidInputError(f"Tax '{self.name}' must be a percentage")
            if self.fixed_amount is None:
                raise InvalidInputError(
                    f"Fixed discount '{self.name}' requires an amount"
                )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def discount(
        name: str, rate_percent: str | float | int | Decimal, description: str = ""
    ) -> AdditionalCharge:
        return AdditionalCharge(
            name=name,
            kind=ChargeKind.DISCOUNT,
            rate=Percentage.of(rate_percent),
            description=description,
        )

    @staticmethod
    def fixed_discount(
        name: str, amount: str | float | int | Decimal, description: str = ""
    ) -> AdditionalCharge:
        return AdditionalCharge(
            name=name,
            kind=ChargeKind.DISCOUNT,
            charge_type=ChargeType.FIXED,
            fixed_amount=Money.of(amount),
            description=description,
        )

    @staticmethod
    def tax(
        name: str, rate_percent: str | float | int | Decimal, description: str = ""
    ) -> AdditionalCharge:
        return AdditionalCharge(
            name=name,
            kind=ChargeKind.TAX,
            rate=Percentage.of(rate_percent),
            description=description,
        )

    # --- Behaviour ------------------------------------------------------------

    @property
    def is_fixed(self) -> bool:
        return self.charge_type is ChargeType.FIXED

    @property
    def value(self) -> Decimal:
        """The configured rate or fixed amount, as entered."""
        if self.is_fixed:
            return self.fixed_amount.amount  # type: ignore[union-attr]
        return self.rate.value

    def amount_on(self, base: Decimal) -> Decimal:
        """Amount this charge contributes when applied to *base*."""
        if self.is_fixed:
            return self.fixed_amount.amount  # type: ignore[union-attr]
        return self.rate.apply_to(base)
