"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from pricecalc.infrastructure.persistence.json_currency_settings_repository import (
    JsonCurrencySettingsRepository,
)
from pricecalc.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

DATA_DIR_ENV = "PRICECALC_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    """``$PRICECALC_DATA_DIR`` if set, else ``<project root>/data``."""
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / "products.json")


def currency_settings_repository() -> JsonCurrencySettingsRepository:
    return JsonCurrencySettingsRepository(data_dir() / "currency_settings.json")
