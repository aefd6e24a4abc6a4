"""Abstract repository for the CurrencySettings aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pricecalc.domain.model.currency import CurrencySettings


class CurrencySettingsRepository(ABC):

    @abstractmethod
    def get(self) -> CurrencySettings:
        """Return the stored settings (defaults when nothing is stored)."""

    @abstractmethod
    def save(self, settings: CurrencySettings) -> None:
        """Persist the settings, replacing what was stored."""
