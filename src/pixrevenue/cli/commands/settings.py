"""Acquirer fee settings commands."""

import click

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.settings import SettingsService
from pixrevenue.utils.amount_parser import parse_amount
from pixrevenue.utils.formatting import format_currency


@click.group()
def settings_group():
    """Manage acquirer fee settings."""
    pass


@settings_group.command("list")
@click.pass_context
def list_settings(ctx):
    """List acquirer fees and the default acquirer."""
    service = SettingsService(ctx.obj["db"])
    fee_config = service.get_fee_config()

    click.echo("\nAcquirer Fees:")
    click.echo("-" * 50)
    click.echo(f"{'Acquirer':<16} {'Rate':>12} {'Fixed':>16}")
    click.echo("-" * 50)
    for name, fee in fee_config.fees.items():
        marker = " *" if name == fee_config.default_acquirer else ""
        click.echo(f"{name:<16} {str(fee.rate) + '%':>12} {format_currency(fee.fixed):>16}{marker}")
    click.echo(f"\nDefault acquirer: {fee_config.default_acquirer}")


@settings_group.command("set-fee")
@click.argument("acquirer", metavar="ACQUIRER")
@click.option("--rate", help="Percentage of the amount charged by the acquirer (e.g. 0.99)")
@click.option("--fixed", help="Fixed amount charged per transaction (e.g. 0,29)")
@click.pass_context
def set_fee(ctx, acquirer: str, rate: str | None, fixed: str | None):
    """Set the cost an acquirer charges per transaction.

    Examples:
        pixrevenue settings set-fee ativus --rate 0.5
        pixrevenue settings set-fee valorion --fixed 0,29
    """
    service = SettingsService(ctx.obj["db"])

    try:
        service.set_acquirer_fee(
            acquirer,
            rate=parse_amount(rate) if rate is not None else None,
            fixed=parse_amount(fixed) if fixed is not None else None,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated fees for '{acquirer.strip().lower()}'")


@settings_group.command("set-default")
@click.argument("acquirer", metavar="ACQUIRER")
@click.pass_context
def set_default(ctx, acquirer: str):
    """Choose the acquirer charged for transactions without a known acquirer."""
    service = SettingsService(ctx.obj["db"])

    try:
        service.set_default_acquirer(acquirer)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Default acquirer set to '{acquirer.strip().lower()}'")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
