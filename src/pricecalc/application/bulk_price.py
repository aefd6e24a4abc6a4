"""Application service: Bulk Price use case (query).

Prices a quantity of a catalog product against a set of volume tiers.
"""

from __future__ import annotations

import logging

from pricecalc.application.dto import BulkPriceDTO, BulkTierSpec
from pricecalc.domain.exceptions import EntityNotFoundError
from pricecalc.domain.model.calculation import BulkDiscountTier
from pricecalc.domain.model.value_objects import Percentage, Quantity
from pricecalc.domain.repository.product_repository import ProductRepository
from pricecalc.domain.service.currency_converter import format_amount
from pricecalc.domain.service.price_calculator import PriceCalculator

logger = logging.getLogger(__name__)


class BulkPriceHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_name: str,
        quantity: int,
        tiers: list[BulkTierSpec] | None = None,
    ) -> BulkPriceDTO:
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        bulk_tiers = [
            BulkDiscountTier.of(tier.min_quantity, tier.discount_percent)
            for tier in tiers or []
        ]
        result = PriceCalculator.bulk_discount(Quantity(quantity), product.price, bulk_tiers)
        logger.info(
            "Bulk price for %d x '%s': %s%% off",
            quantity,
            product.name,
            result.discount_rate,
        )

        return BulkPriceDTO(
            product_name=product.name,
            quantity=quantity,
            original_price=format_amount(result.original_price),
            discount_rate=str(Percentage(result.discount_rate)),
            discount_amount=format_amount(result.discount_amount),
            final_price=format_amount(result.final_price),
        )
