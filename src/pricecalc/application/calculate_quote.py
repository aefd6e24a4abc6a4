"""Application service: Calculate Quote use case.

Orchestrates the flow between the catalog, the currency settings and
the PriceCalculator. Prices are resolved and computed in the base
currency and only converted and rounded when mapped to the DTO.
"""

from __future__ import annotations

import logging

from pricecalc.application.dto import (
    BreakdownDTO,
    ChargeSpec,
    QuoteDTO,
    QuoteItemSpec,
    QuoteLineDTO,
)
from pricecalc.domain.exceptions import EntityNotFoundError
from pricecalc.domain.model.calculation import PriceCalculation
from pricecalc.domain.model.charges import AdditionalCharge
from pricecalc.domain.model.currency import CurrencySettings
from pricecalc.domain.model.line_item import LineItem, Shipping
from pricecalc.domain.model.value_objects import Percentage
from pricecalc.domain.repository.currency_settings_repository import (
    CurrencySettingsRepository,
)
from pricecalc.domain.repository.product_repository import ProductRepository
from pricecalc.domain.service.currency_converter import (
    format_amount,
    get_currency,
    to_display,
)
from pricecalc.domain.service.price_calculator import PriceCalculator

logger = logging.getLogger(__name__)


class CalculateQuoteHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        currency_repo: CurrencySettingsRepository,
        calculator: PriceCalculator | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._currency_repo = currency_repo
        self._calculator = calculator or PriceCalculator()

    def handle(
        self,
        item_specs: list[QuoteItemSpec],
        discounts: list[ChargeSpec] | None = None,
        taxes: list[ChargeSpec] | None = None,
        shipping_cost: str = "0",
        currency: str | None = None,
    ) -> QuoteDTO:
        """Price a quote.

        Steps:
        1. Resolve each spec to a LineItem (catalog lookup or ad-hoc price).
        2. Build aggregate discounts/taxes and shipping.
        3. Let the PriceCalculator validate and compute everything.
        4. Convert to the display currency and return a DTO.
        """
        line_items = [self._to_line_item(spec) for spec in item_specs]
        discount_charges = [self._to_discount(spec) for spec in discounts or []]
        tax_charges = [AdditionalCharge.tax(spec.name, spec.value) for spec in taxes or []]

        calculation = self._calculator.calculate(
            line_items,
            discount_charges,
            tax_charges,
            Shipping.of(shipping_cost),
        )
        logger.info(
            "Calculated quote: %d lines, total %s (base)",
            len(calculation.items),
            calculation.rounded().grand_total,
        )

        settings = self._currency_repo.get()
        return self._to_dto(calculation, settings, currency)

    # --- Input mapping --------------------------------------------------------

    def _to_line_item(self, spec: QuoteItemSpec) -> LineItem:
        if spec.unit_price is not None:
            return LineItem.create(
                name=spec.product_name,
                quantity=spec.quantity,
                unit_price=spec.unit_price,
                discount_percent=spec.discount_percent or "0",
                tax_rate_percent=spec.tax_rate_percent or "0",
            )

        product = self._product_repo.get_by_name(spec.product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
        return LineItem.from_product(
            product,
            spec.quantity,
            discount_percent=spec.discount_percent,
            tax_rate_percent=spec.tax_rate_percent,
        )

    @staticmethod
    def _to_discount(spec: ChargeSpec) -> AdditionalCharge:
        if spec.fixed:
            return AdditionalCharge.fixed_discount(spec.name, spec.value)
        return AdditionalCharge.discount(spec.name, spec.value)

    # --- Output mapping -------------------------------------------------------

    @staticmethod
    def _to_dto(
        calculation: PriceCalculation,
        settings: CurrencySettings,
        currency_code: str | None,
    ) -> QuoteDTO:
        code = (currency_code or settings.default_display_currency).upper()
        currency = get_currency(settings, code)
        if currency is None:
            logger.warning(
                "Display currency %s is not configured, using %s",
                code,
                settings.base_currency,
            )
            currency = get_currency(settings, settings.base_currency)
        symbol = currency.symbol if currency is not None else "$"
        code = currency.code if currency is not None else settings.base_currency
        rate = currency.exchange_rate if currency is not None else 1

        def money(amount) -> str:
            return format_amount(to_display(amount, rate), symbol)

        return QuoteDTO(
            currency=code,
            exchange_rate=str(rate),
            items=[
                QuoteLineDTO(
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=money(line.unit_price),
                    discount=str(Percentage(line.discount_percent)),
                    tax_rate=str(Percentage(line.tax_rate_percent)),
                    line_total=money(line.line_total),
                )
                for line in calculation.items
            ],
            subtotal=money(calculation.subtotal),
            discount=money(calculation.total_discount),
            tax=money(calculation.total_tax),
            shipping=money(calculation.shipping_cost),
            total=money(calculation.grand_total),
            discount_breakdown=[
                BreakdownDTO(entry.name, money(entry.amount))
                for entry in calculation.discount_breakdown
            ],
            tax_breakdown=[
                BreakdownDTO(entry.name, money(entry.amount))
                for entry in calculation.tax_breakdown
            ],
        )
