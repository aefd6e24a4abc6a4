"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in memory. No file I/O, no side effects.
"""

from __future__ import annotations

import copy

from pricecalc.domain.model.currency import CurrencySettings, default_settings
from pricecalc.domain.model.product import Product
from pricecalc.domain.repository.currency_settings_repository import (
    CurrencySettingsRepository,
)
from pricecalc.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeCurrencySettingsRepository(CurrencySettingsRepository):

    def __init__(self, settings: CurrencySettings | None = None) -> None:
        self._settings = settings or default_settings()
        self.save_count = 0

    def get(self) -> CurrencySettings:
        # Hand out a copy, like a repository that re-reads its file.
        return copy.deepcopy(self._settings)

    def save(self, settings: CurrencySettings) -> None:
        self._settings = copy.deepcopy(settings)
        self.save_count += 1
