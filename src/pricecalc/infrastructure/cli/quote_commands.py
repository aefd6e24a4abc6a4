"""CLI commands for pricing quotes."""

from __future__ import annotations

import click

from pricecalc.application.calculate_quote import CalculateQuoteHandler
from pricecalc.application.dto import ChargeSpec, QuoteDTO, QuoteItemSpec
from pricecalc.domain.exceptions import DomainException
from pricecalc.infrastructure.bootstrap import (
    currency_settings_repository,
    product_repository,
)


def _parse_quantity(name: str, qty_str: str) -> int:
    try:
        return int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for product '{name}'."
        )


def _parse_items(raw: str) -> list[QuoteItemSpec]:
    """Parse 'Widget:3,Gadget:5' into catalog QuoteItemSpecs."""
    specs: list[QuoteItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        specs.append(
            QuoteItemSpec(product_name=name.strip(), quantity=_parse_quantity(name, qty_str))
        )
    return specs


def _parse_line(raw: str) -> QuoteItemSpec:
    """Parse 'Name:Qty:Price[:Discount[:TaxRate]]' into an ad-hoc QuoteItemSpec."""
    parts = [p.strip() for p in raw.split(":")]
    if not 3 <= len(parts) <= 5:
        raise click.BadParameter(
            f"Invalid line format '{raw}'. Expected 'Name:Qty:Price[:Discount[:TaxRate]]'."
        )
    name, qty_str, price = parts[:3]
    return QuoteItemSpec(
        product_name=name,
        quantity=_parse_quantity(name, qty_str),
        unit_price=price,
        discount_percent=parts[3].rstrip("%") if len(parts) > 3 else None,
        tax_rate_percent=parts[4].rstrip("%") if len(parts) > 4 else None,
    )


def _parse_charge(raw: str, allow_fixed: bool) -> ChargeSpec:
    """Parse 'Name:10%' (percentage) or 'Name:5.00' (fixed amount)."""
    if ":" not in raw:
        raise click.BadParameter(f"Invalid format '{raw}'. Expected 'Name:Value'.")
    name, value = (p.strip() for p in raw.rsplit(":", 1))
    if value.endswith("%"):
        return ChargeSpec(name=name, value=value[:-1])
    if not allow_fixed:
        # taxes are always percentages
        return ChargeSpec(name=name, value=value)
    return ChargeSpec(name=name, value=value, fixed=True)


def _display_quote(dto: QuoteDTO, breakdown: bool) -> None:
    click.echo(f"Quote  (currency={dto.currency}, rate={dto.exchange_rate})")
    click.echo()
    click.echo(
        f"  {'Item':<20} {'Qty':>5} {'Price':>12} {'Disc':>6} {'Tax':>6} {'Total':>12}"
    )
    click.echo(f"  {'-'*66}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>12} "
            f"{item.discount:>6} {item.tax_rate:>6} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*66}")
    click.echo(f"  {'Subtotal':<20} {dto.subtotal:>46}")

    if breakdown:
        for entry in dto.discount_breakdown:
            click.echo(f"    {entry.name:<18} {'-' + entry.amount:>46}")
    click.echo(f"  {'Discount':<20} {'-' + dto.discount:>46}")

    if breakdown:
        for entry in dto.tax_breakdown:
            click.echo(f"    {entry.name:<18} {'+' + entry.amount:>46}")
    click.echo(f"  {'Tax':<20} {'+' + dto.tax:>46}")
    click.echo(f"  {'Shipping':<20} {'+' + dto.shipping:>46}")
    click.echo(f"  {'-'*66}")
    click.echo(f"  {'Total':<20} {dto.total:>46}")


@click.command("calculate")
@click.option("--items", default=None, help="Catalog items as 'Product:Qty,Product:Qty'.")
@click.option(
    "--line",
    "lines",
    multiple=True,
    help="Ad-hoc line as 'Name:Qty:Price[:Discount[:TaxRate]]'. Repeatable.",
)
@click.option(
    "--discount",
    "discounts",
    multiple=True,
    help="Aggregate discount as 'Name:10%' or fixed 'Name:5.00'. Repeatable.",
)
@click.option("--tax", "taxes", multiple=True, help="Aggregate tax as 'Name:15'. Repeatable.")
@click.option("--shipping", default="0", help="Shipping cost (untaxed).")
@click.option("--currency", default=None, help="Display currency code (e.g. ZWL).")
@click.option("--breakdown", is_flag=True, default=False, help="Show discount/tax breakdown.")
def quote_calculate(
    items: str | None,
    lines: tuple[str, ...],
    discounts: tuple[str, ...],
    taxes: tuple[str, ...],
    shipping: str,
    currency: str | None,
    breakdown: bool,
) -> None:
    """Calculate subtotal, discounts, taxes, shipping and total."""
    specs = _parse_items(items) if items else []
    specs.extend(_parse_line(raw) for raw in lines)

    handler = CalculateQuoteHandler(
        product_repo=product_repository(),
        currency_repo=currency_settings_repository(),
    )

    try:
        dto = handler.handle(
            item_specs=specs,
            discounts=[_parse_charge(raw, allow_fixed=True) for raw in discounts],
            taxes=[_parse_charge(raw, allow_fixed=False) for raw in taxes],
            shipping_cost=shipping,
            currency=currency,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_quote(dto, breakdown)
