"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from pricecalc.domain.exceptions import ValidationError
from pricecalc.domain.model.product import Product
from pricecalc.domain.model.value_objects import Money, Percentage
from pricecalc.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        cost_price: str = "0",
        discount_percent: str = "0",
        tax_rate_percent: str = "0",
        sku: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name)
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            cost_price=Money.of(cost_price),
            discount=Percentage.of(discount_percent),
            tax_rate=Percentage.of(tax_rate_percent),
            sku=sku,
        )
        if product.price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        self._product_repo.save(product)
        logger.info("Added product #%s '%s' at %s", product.id, product.name, product.price)
        return product
