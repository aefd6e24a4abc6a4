"""Application service: Set Exchange Rate use case."""

from __future__ import annotations

import logging

from pricecalc.domain.model.currency import CurrencySetting
from pricecalc.domain.model.value_objects import to_decimal
from pricecalc.domain.repository.currency_settings_repository import (
    CurrencySettingsRepository,
)

logger = logging.getLogger(__name__)


class SetExchangeRateHandler:

    def __init__(self, currency_repo: CurrencySettingsRepository) -> None:
        self._currency_repo = currency_repo

    def handle(
        self,
        code: str,
        exchange_rate: str,
        symbol: str | None = None,
        name: str = "",
    ) -> CurrencySetting:
        """Set ``1 base unit = exchange_rate`` units of *code*.

        Adds the currency when it is not configured yet and a symbol is given.
        """
        settings = self._currency_repo.get()
        updated = settings.set_rate(
            code, to_decimal(exchange_rate, "exchange rate"), symbol=symbol, name=name
        )
        self._currency_repo.save(settings)
        logger.info("Exchange rate for %s set to %s", updated.code, updated.exchange_rate)
        return updated


class DeactivateCurrencyHandler:

    def __init__(self, currency_repo: CurrencySettingsRepository) -> None:
        self._currency_repo = currency_repo

    def handle(self, code: str) -> None:
        settings = self._currency_repo.get()
        settings.deactivate(code)
        self._currency_repo.save(settings)
        logger.info("Currency %s deactivated", code.upper())
