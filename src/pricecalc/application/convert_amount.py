"""Application service: Convert Amount use case (query)."""

from __future__ import annotations

from pricecalc.domain.repository.currency_settings_repository import (
    CurrencySettingsRepository,
)
from pricecalc.domain.service.currency_converter import (
    format_amount,
    get_currency,
    lookup_rate,
    to_base,
    to_display,
)


class ConvertAmountHandler:

    def __init__(self, currency_repo: CurrencySettingsRepository) -> None:
        self._currency_repo = currency_repo

    def handle(self, amount: str, currency_code: str, to_base_currency: bool = False) -> str:
        """Convert *amount* and return it formatted.

        By default *amount* is in the base currency and is converted to
        *currency_code*; with ``to_base_currency`` the direction is reversed.
        Unknown currencies convert at a rate of 1.
        """
        settings = self._currency_repo.get()
        rate = lookup_rate(settings, currency_code)

        if to_base_currency:
            base = get_currency(settings, settings.base_currency)
            return format_amount(to_base(amount, rate), base.symbol if base else "$")

        currency = get_currency(settings, currency_code)
        return format_amount(to_display(amount, rate), currency.symbol if currency else "$")
