"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from pricecalc.domain.exceptions import EntityNotFoundError
from pricecalc.domain.model.value_objects import Money
from pricecalc.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, new_price: str) -> None:
        """Update a product's selling price."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        old_price = product.price
        product.update_price(Money.of(new_price))
        self._product_repo.save(product)
        logger.info(
            "Product #%s price changed from %s to %s", product_id, old_price, product.price
        )
