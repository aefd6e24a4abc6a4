"""Currency settings aggregate.

All amounts are stored in the base currency (USD). A display currency
is derived at render time with ``1 base unit = exchange_rate display
units``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal

from pricecalc.domain.exceptions import EntityNotFoundError, ValidationError

BASE_CURRENCY = "USD"


@dataclass(frozen=True)
class CurrencySetting:
    code: str
    symbol: str
    exchange_rate: Decimal
    is_active: bool = True
    name: str = ""


@dataclass
class CurrencySettings:
    """The company's supported currencies.

    Invariant: currency codes are unique and stored upper-case.
    """

    base_currency: str = BASE_CURRENCY
    supported_currencies: list[CurrencySetting] = field(default_factory=list)
    default_display_currency: str = BASE_CURRENCY

    def find(self, code: str) -> CurrencySetting | None:
        """Return the entry for *code*, active or not."""
        if not isinstance(code, str):
            return None
        code = code.strip().upper()
        for currency in self.supported_currencies:
            if currency.code == code:
                return currency
        return None

    def set_rate(
        self,
        code: str,
        exchange_rate: Decimal,
        symbol: str | None = None,
        name: str = "",
    ) -> CurrencySetting:
        """Update the rate of *code*, or add it when a symbol is given."""
        code = code.strip().upper()
        if not code:
            raise ValidationError("Currency code is required")
        if exchange_rate <= 0:
            raise ValidationError("Exchange rate must be greater than zero")
        if code == self.base_currency and exchange_rate != 1:
            raise ValidationError(
                f"Exchange rate of base currency {code} is always 1"
            )

        existing = self.find(code)
        if existing is None:
            if not symbol:
                raise EntityNotFoundError(
                    f"Currency '{code}' not found (pass a symbol to add it)"
                )
            updated = CurrencySetting(
                code=code, symbol=symbol, exchange_rate=exchange_rate, name=name
            )
            self.supported_currencies.append(updated)
            return updated

        updated = replace(
            existing,
            exchange_rate=exchange_rate,
            symbol=symbol or existing.symbol,
            name=name or existing.name,
            is_active=True,
        )
        index = self.supported_currencies.index(existing)
        self.supported_currencies[index] = updated
        return updated

    def deactivate(self, code: str) -> None:
        existing = self.find(code)
        if existing is None:
            raise EntityNotFoundError(f"Currency '{str(code).upper()}' not found")
        if existing.code == self.base_currency:
            raise ValidationError("The base currency cannot be deactivated")
        index = self.supported_currencies.index(existing)
        self.supported_currencies[index] = replace(existing, is_active=False)


def default_settings() -> CurrencySettings:
    return CurrencySettings(
        supported_currencies=[
            CurrencySetting(
                code=BASE_CURRENCY,
                symbol="$",
                exchange_rate=Decimal("1"),
                name="US Dollar",
            )
        ]
    )
