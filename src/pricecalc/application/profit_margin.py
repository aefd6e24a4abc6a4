"""Application service: Profit Margin use case (query)."""

from __future__ import annotations

from pricecalc.application.dto import ProfitMarginDTO
from pricecalc.domain.exceptions import EntityNotFoundError
from pricecalc.domain.model.value_objects import round_money
from pricecalc.domain.repository.product_repository import ProductRepository
from pricecalc.domain.service.currency_converter import format_amount
from pricecalc.domain.service.price_calculator import PriceCalculator


class ProfitMarginHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_name: str) -> ProfitMarginDTO:
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        result = PriceCalculator.profit_margin(product.cost_price, product.price)
        return ProfitMarginDTO(
            product_name=product.name,
            cost_price=format_amount(result.cost_price),
            selling_price=format_amount(result.selling_price),
            profit=format_amount(result.profit),
            margin=f"{round_money(result.margin)}%",
            markup=f"{round_money(result.markup)}%",
        )
