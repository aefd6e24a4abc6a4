"""Application service: List Currencies use case (query)."""

from __future__ import annotations

from pricecalc.application.dto import CurrencyDTO
from pricecalc.domain.repository.currency_settings_repository import (
    CurrencySettingsRepository,
)


class ListCurrenciesHandler:

    def __init__(self, currency_repo: CurrencySettingsRepository) -> None:
        self._currency_repo = currency_repo

    def handle(self, active_only: bool = False) -> list[CurrencyDTO]:
        settings = self._currency_repo.get()
        return [
            CurrencyDTO(
                code=c.code,
                name=c.name,
                symbol=c.symbol,
                exchange_rate=str(c.exchange_rate),
                is_active=c.is_active,
                is_base=c.code == settings.base_currency,
            )
            for c in settings.supported_currencies
            if c.is_active or not active_only
        ]
