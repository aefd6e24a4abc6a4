"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from pricecalc.application.add_product import AddProductHandler
from pricecalc.application.bulk_price import BulkPriceHandler
from pricecalc.application.dto import BulkTierSpec
from pricecalc.application.profit_margin import ProfitMarginHandler
from pricecalc.application.update_product import UpdateProductHandler
from pricecalc.domain.exceptions import DomainException
from pricecalc.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Selling price (e.g. 15.00).")
@click.option("--cost", default="0", help="Cost price.")
@click.option("--discount", default="0", help="Default discount percent.")
@click.option("--tax-rate", default="0", help="Default tax rate percent.")
@click.option("--sku", default=None, help="Stock keeping unit.")
def product_add(
    name: str, price: str, cost: str, discount: str, tax_rate: str, sku: str | None
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            price=price,
            cost_price=cost,
            discount_percent=discount,
            tax_rate_percent=tax_rate,
            sku=sku,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Disc':>6} {'Tax':>6}")
    click.echo("-" * 52)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {str(p.price):>10} {str(p.discount):>6} {str(p.tax_rate):>6}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to ${price}")


@click.command("margin")
@click.option("--name", required=True, help="Product name.")
def product_margin(name: str) -> None:
    """Show profit, margin and markup of a product."""
    handler = ProfitMarginHandler(product_repo=product_repository())

    try:
        dto = handler.handle(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.product_name}")
    click.echo(f"  Cost:    {dto.cost_price:>12}")
    click.echo(f"  Price:   {dto.selling_price:>12}")
    click.echo(f"  Profit:  {dto.profit:>12}")
    click.echo(f"  Margin:  {dto.margin:>12}")
    click.echo(f"  Markup:  {dto.markup:>12}")


def _parse_tier(raw: str) -> BulkTierSpec:
    """Parse 'MinQty:Percent' (e.g. '50:10%') into a BulkTierSpec."""
    if ":" not in raw:
        raise click.BadParameter(f"Invalid tier '{raw}'. Expected 'MinQuantity:Percent'.")
    min_qty, percent = (p.strip() for p in raw.split(":", 1))
    try:
        return BulkTierSpec(min_quantity=int(min_qty), discount_percent=percent.rstrip("%"))
    except ValueError:
        raise click.BadParameter(f"Invalid tier quantity '{min_qty}'.")


@click.command("bulk")
@click.option("--name", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Units ordered.")
@click.option(
    "--tier", "tiers", multiple=True, help="Volume tier as 'MinQty:Percent' (repeatable)."
)
def product_bulk(name: str, quantity: int, tiers: tuple[str, ...]) -> None:
    """Price a quantity of a product with volume discount tiers."""
    specs = [_parse_tier(raw) for raw in tiers]
    handler = BulkPriceHandler(product_repo=product_repository())

    try:
        dto = handler.handle(name, quantity, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.quantity} x {dto.product_name}")
    click.echo(f"  Price:     {dto.original_price:>12}")
    click.echo(f"  Discount:  {dto.discount_amount:>12}  ({dto.discount_rate})")
    click.echo(f"  Final:     {dto.final_price:>12}")
