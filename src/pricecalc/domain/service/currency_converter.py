"""Domain service: currency conversion and formatting.

These functions sit on display paths, so they never raise. Missing,
zero or non-numeric exchange rates degrade to 1 (no conversion), and
missing, non-numeric or out-of-range amounts degrade to 0. Callers
that need strict validation must check their inputs first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Any

from pricecalc.domain.model.calculation import PriceCalculation
from pricecalc.domain.model.currency import (
    BASE_CURRENCY,
    CurrencySetting,
    CurrencySettings,
)
from pricecalc.domain.model.value_objects import ZERO, round_money

logger = logging.getLogger(__name__)

ONE = Decimal("1")


def _coerce(value: Any) -> Decimal | None:
    """Decimal for any finite numeric input, None otherwise."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    return result if result.is_finite() else None


def _usable_rate(exchange_rate: Any) -> Decimal | None:
    rate = _coerce(exchange_rate)
    if rate is None or rate <= ZERO:
        logger.debug("Ignoring unusable exchange rate %r", exchange_rate)
        return None
    return rate


def _normalize_code(code: Any) -> str | None:
    """Upper-cased currency code, or None for blank and non-string codes."""
    if not isinstance(code, str) or not code.strip():
        if code is not None:
            logger.debug("Ignoring invalid currency code %r", code)
        return None
    return code.strip().upper()


def _rounded_or_zero(compute) -> Decimal:
    """Round *compute()* to cents; results outside Decimal's range become 0."""
    try:
        return round_money(compute())
    except DecimalException as exc:
        logger.debug("Amount out of range, using 0: %r", exc)
        return round_money(ZERO)


# --- Conversion -----------------------------------------------------------------


def to_display(amount_base: Any, exchange_rate: Any = ONE) -> Decimal:
    """Convert a base-currency amount to the display currency."""
    amount = _coerce(amount_base)
    if amount is None or amount == ZERO:
        return round_money(ZERO)
    rate = _usable_rate(exchange_rate) or ONE
    return _rounded_or_zero(lambda: amount * rate)


def to_base(amount_display: Any, exchange_rate: Any = ONE) -> Decimal:
    """Convert a display-currency amount back to the base currency.

    With an unusable rate the amount is returned unchanged.
    """
    amount = _coerce(amount_display)
    if amount is None or amount == ZERO:
        return round_money(ZERO)
    rate = _usable_rate(exchange_rate)
    if rate is None:
        return amount
    return _rounded_or_zero(lambda: amount / rate)


def format_amount(amount: Any, symbol: str = "$") -> str:
    """Render as ``<symbol>1,234.50``."""
    value = _coerce(amount)
    if value is None:
        value = ZERO
    return f"{symbol}{_rounded_or_zero(lambda: value):,.2f}"


# --- Settings lookups -------------------------------------------------------------


def get_currency(settings: CurrencySettings | None, code: Any) -> CurrencySetting | None:
    """Active currency entry for *code*, or None."""
    code = _normalize_code(code)
    if settings is None or code is None:
        return None
    for currency in settings.supported_currencies or []:
        if currency.code == code and currency.is_active:
            return currency
    return None


def active_currencies(settings: CurrencySettings | None) -> list[CurrencySetting]:
    if settings is None:
        return []
    return [c for c in settings.supported_currencies or [] if c.is_active]


def lookup_rate(settings: CurrencySettings | None, code: Any) -> Decimal:
    """Exchange rate for *code*; 1 for the base currency or anything unknown."""
    base = settings.base_currency if settings is not None else BASE_CURRENCY
    code = _normalize_code(code)
    if code is None or code == base:
        return ONE
    currency = get_currency(settings, code)
    if currency is None:
        logger.debug("Currency %r not configured, using rate 1", code)
        return ONE
    return _usable_rate(currency.exchange_rate) or ONE


@dataclass(frozen=True)
class CurrencyData:
    """Currency snapshot to store alongside an invoice or quotation."""

    base_currency: str
    display_currency: str
    exchange_rate: Decimal
    exchange_rate_date: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


def prepare_currency_data(
    settings: CurrencySettings | None,
    display_currency: str | None = None,
) -> CurrencyData:
    base = settings.base_currency if settings is not None else BASE_CURRENCY
    code = _normalize_code(display_currency) or base
    return CurrencyData(
        base_currency=base,
        display_currency=code,
        exchange_rate=lookup_rate(settings, code),
    )


def format_with_currency(
    amount_base: Any,
    settings: CurrencySettings | None,
    display_currency: str | None = None,
) -> str:
    """Convert a base amount and format it with the currency's symbol.

    Unknown currencies fall back to unconverted dollars.
    """
    code = display_currency or (
        settings.default_display_currency if settings is not None else BASE_CURRENCY
    )
    currency = get_currency(settings, code)
    if currency is None:
        return format_amount(amount_base, "$")
    return format_amount(to_display(amount_base, currency.exchange_rate), currency.symbol)


# --- Whole documents --------------------------------------------------------------


@dataclass(frozen=True)
class DisplayLine:
    name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class DisplayAmounts:
    """A PriceCalculation's totals expressed in a display currency."""

    subtotal: Decimal
    total_discount: Decimal
    total_tax: Decimal
    shipping_cost: Decimal
    grand_total: Decimal
    items: tuple[DisplayLine, ...]


def calculation_to_display(
    calculation: PriceCalculation, exchange_rate: Any = ONE
) -> DisplayAmounts:
    return DisplayAmounts(
        subtotal=to_display(calculation.subtotal, exchange_rate),
        total_discount=to_display(calculation.total_discount, exchange_rate),
        total_tax=to_display(calculation.total_tax, exchange_rate),
        shipping_cost=to_display(calculation.shipping_cost, exchange_rate),
        grand_total=to_display(calculation.grand_total, exchange_rate),
        items=tuple(
            DisplayLine(
                name=line.name,
                quantity=line.quantity,
                unit_price=to_display(line.unit_price, exchange_rate),
                line_total=to_display(line.line_total, exchange_rate),
            )
            for line in calculation.items
        ),
    )
