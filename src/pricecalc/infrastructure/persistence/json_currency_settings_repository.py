"""JSON-file-backed implementation of CurrencySettingsRepository."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path

from pricecalc.domain.model.currency import (
    BASE_CURRENCY,
    CurrencySetting,
    CurrencySettings,
    default_settings,
)
from pricecalc.domain.repository.currency_settings_repository import (
    CurrencySettingsRepository,
)

logger = logging.getLogger(__name__)


class JsonCurrencySettingsRepository(CurrencySettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CurrencySettingsRepository interface ---------------------------------

    def get(self) -> CurrencySettings:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return self._to_domain(raw)

    def save(self, settings: CurrencySettings) -> None:
        self._file_path.write_text(
            json.dumps(self._to_raw(settings), indent=2) + "\n", encoding="utf-8"
        )
        logger.debug(
            "Saved currency settings (%d currencies)",
            len(settings.supported_currencies),
        )

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> CurrencySettings:
        return CurrencySettings(
            base_currency=raw.get("base_currency", BASE_CURRENCY),
            default_display_currency=raw.get(
                "default_display_currency", BASE_CURRENCY
            ),
            supported_currencies=[
                CurrencySetting(
                    code=item["code"].upper(),
                    symbol=item.get("symbol", ""),
                    exchange_rate=Decimal(str(item.get("exchange_rate", "1"))),
                    is_active=item.get("is_active", True),
                    name=item.get("name", ""),
                )
                for item in raw.get("supported_currencies", [])
            ],
        )

    @staticmethod
    def _to_raw(settings: CurrencySettings) -> dict:
        return {
            "base_currency": settings.base_currency,
            "default_display_currency": settings.default_display_currency,
            "supported_currencies": [
                {
                    "code": c.code,
                    "name": c.name,
                    "symbol": c.symbol,
                    "exchange_rate": str(c.exchange_rate),
                    "is_active": c.is_active,
                }
                for c in settings.supported_currencies
            ],
        }

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            logger.info("Creating default currency settings at %s", self._file_path)
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.save(default_settings())
