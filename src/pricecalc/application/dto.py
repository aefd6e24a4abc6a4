"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QuoteItemSpec:
    """Input: one requested line.

    Either ``product_name`` refers to a catalog product, or ``unit_price``
    prices an ad-hoc line named ``product_name``. Discount and tax rate
    override the catalog defaults when given.
    """

    product_name: str
    quantity: int
    unit_price: str | None = None
    discount_percent: str | None = None
    tax_rate_percent: str | None = None


@dataclass(frozen=True)
class ChargeSpec:
    """Input: an aggregate discount or tax.

    ``value`` is a percentage unless ``fixed`` is set (discounts only).
    """

    name: str
    value: str
    fixed: bool = False


@dataclass(frozen=True)
class QuoteLineDTO:
    """Output: a single line as displayed to the user."""

    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    discount: str  # e.g. "10%"
    tax_rate: str
    line_total: str


@dataclass(frozen=True)
class BreakdownDTO:
    name: str
    amount: str


@dataclass(frozen=True)
class QuoteDTO:
    """Output: a complete quote in the requested display currency."""

    currency: str
    exchange_rate: str
    items: list[QuoteLineDTO]
    subtotal: str
    discount: str
    tax: str
    shipping: str
    total: str
    discount_breakdown: list[BreakdownDTO]
    tax_breakdown: list[BreakdownDTO]


@dataclass(frozen=True)
class CurrencyDTO:
    code: str
    name: str
    symbol: str
    exchange_rate: str
    is_active: bool
    is_base: bool


@dataclass(frozen=True)
class ProfitMarginDTO:
    product_name: str
    cost_price: str
    selling_price: str
    profit: str
    margin: str  # e.g. "25.00%"
    markup: str


@dataclass(frozen=True)
class BulkTierSpec:
    """Input: ``discount_percent`` off once ``min_quantity`` units are ordered."""

    min_quantity: int
    discount_percent: str


@dataclass(frozen=True)
class BulkPriceDTO:
    product_name: str
    quantity: int
    original_price: str
    discount_rate: str  # e.g. "10%"
    discount_amount: str
    final_price: str
