"""Product aggregate.

Products live in the catalog independently of any quote. A product
carries the default pricing used when a line item refers to it by
name: selling price, cost price, default discount and tax rate.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pricecalc.domain.exceptions import ValidationError
from pricecalc.domain.model.value_objects import Money, Percentage


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price updates are a legitimate
    mutation on the aggregate.
    """

    id: str
    name: str
    price: Money
    cost_price: Money = field(default_factory=Money.zero)
    discount: Percentage = field(default_factory=Percentage.zero)
    tax_rate: Percentage = field(default_factory=Percentage.zero)
    sku: str | None = None

    def update_price(self, new_price: Money) -> None:
        """Change the selling price.

        Quotes already calculated keep the price they were built with.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
