"""CLI commands for currency settings and conversion."""

from __future__ import annotations

import click

from pricecalc.application.convert_amount import ConvertAmountHandler
from pricecalc.application.list_currencies import ListCurrenciesHandler
from pricecalc.application.set_exchange_rate import (
    DeactivateCurrencyHandler,
    SetExchangeRateHandler,
)
from pricecalc.domain.exceptions import DomainException
from pricecalc.infrastructure.bootstrap import currency_settings_repository


@click.command("list")
@click.option("--active", "active_only", is_flag=True, default=False, help="Only active currencies.")
def currency_list(active_only: bool) -> None:
    """List configured currencies."""
    handler = ListCurrenciesHandler(currency_repo=currency_settings_repository())
    currencies = handler.handle(active_only=active_only)

    if not currencies:
        click.echo("No currencies configured.")
        return

    click.echo(f"{'Code':<6} {'Symbol':<7} {'Rate':>12} {'Status':<8} Name")
    click.echo("-" * 50)
    for c in currencies:
        status = "base" if c.is_base else ("active" if c.is_active else "inactive")
        click.echo(f"{c.code:<6} {c.symbol:<7} {c.exchange_rate:>12} {status:<8} {c.name}")


@click.command("set-rate")
@click.option("--code", required=True, help="Currency code (e.g. ZWL).")
@click.option("--rate", required=True, help="Units of this currency per 1 base unit.")
@click.option("--symbol", default=None, help="Symbol; required when adding a currency.")
@click.option("--name", default="", help="Display name.")
def currency_set_rate(code: str, rate: str, symbol: str | None, name: str) -> None:
    """Set (or add) a currency's exchange rate."""
    handler = SetExchangeRateHandler(currency_repo=currency_settings_repository())

    try:
        updated = handler.handle(code=code, exchange_rate=rate, symbol=symbol, name=name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"1 base unit = {updated.exchange_rate} {updated.code}")


@click.command("deactivate")
@click.option("--code", required=True, help="Currency code.")
def currency_deactivate(code: str) -> None:
    """Stop offering a currency for display."""
    handler = DeactivateCurrencyHandler(currency_repo=currency_settings_repository())

    try:
        handler.handle(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Currency {code.upper()} deactivated.")


@click.command("convert")
@click.option("--amount", required=True, help="Amount to convert.")
@click.option("--code", required=True, help="Display currency code.")
@click.option("--to-base", is_flag=True, default=False, help="Convert from CODE back to the base currency.")
def currency_convert(amount: str, code: str, to_base: bool) -> None:
    """Convert an amount between the base and a display currency."""
    handler = ConvertAmountHandler(currency_repo=currency_settings_repository())
    click.echo(handler.handle(amount, code, to_base_currency=to_base))
