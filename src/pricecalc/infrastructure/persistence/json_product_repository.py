"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path

from pricecalc.domain.model.product import Product
from pricecalc.domain.model.value_objects import Money, Percentage
from pricecalc.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)
        logger.debug("Saved product %s (%s)", product.id, product.name)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {item["id"]: self._to_domain(item) for item in raw}

    @staticmethod
    def _to_domain(item: dict) -> Product:
        currency = item.get("currency", "USD")
        return Product(
            id=item["id"],
            name=item["name"],
            price=Money(Decimal(item["price"]), currency),
            cost_price=Money(Decimal(item.get("cost_price", "0")), currency),
            discount=Percentage(Decimal(item.get("discount", "0"))),
            tax_rate=Percentage(Decimal(item.get("tax_rate", "0"))),
            sku=item.get("sku"),
        )

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "sku": p.sku,
                "price": str(p.price.amount),
                "cost_price": str(p.cost_price.amount),
                "discount": str(p.discount.value),
                "tax_rate": str(p.tax_rate.value),
                "currency": p.price.currency,
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            logger.info("Creating empty product catalog at %s", self._file_path)
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
