import logging

import click

from pricecalc.infrastructure.cli.currency_commands import (
    currency_convert,
    currency_deactivate,
    currency_list,
    currency_set_rate,
)
from pricecalc.infrastructure.cli.product_commands import (
    product_add,
    product_bulk,
    product_list,
    product_margin,
    product_update,
)
from pricecalc.infrastructure.cli.quote_commands import quote_calculate


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """pricecalc — price, tax and discount calculator"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def quote() -> None:
    """Price quotes, invoices and orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def currency() -> None:
    """Manage display currencies and exchange rates."""


# Register subcommands
quote.add_command(quote_calculate)
product.add_command(product_add)
product.add_command(product_bulk)
product.add_command(product_list)
product.add_command(product_margin)
product.add_command(product_update)
currency.add_command(currency_convert)
currency.add_command(currency_deactivate)
currency.add_command(currency_list)
currency.add_command(currency_set_rate)
