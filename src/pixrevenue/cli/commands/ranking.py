"""User ranking command."""

import click

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.entities import RankingPeriod
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.ranking import DEFAULT_LIMIT
from pixrevenue.domain.revenue import RevenueService
from pixrevenue.utils.formatting import format_currency

PERIOD_CHOICES = {
    "all": RankingPeriod.ALL,
    "today": RankingPeriod.TODAY,
    "7days": RankingPeriod.SEVEN_DAYS,
    "30days": RankingPeriod.THIRTY_DAYS,
    "thisMonth": RankingPeriod.THIS_MONTH,
}


@click.command("ranking")
@click.option(
    "--period",
    type=click.Choice(list(PERIOD_CHOICES)),
    default="all",
    show_default=True,
    help="Period to rank users in",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=DEFAULT_LIMIT,
    show_default=True,
    help="Maximum number of users to show",
)
@click.pass_context
def ranking(ctx, period: str, limit: int):
    """Show the users that generated the most platform fee revenue.

    Examples:
        pixrevenue ranking
        pixrevenue ranking --period 7days --limit 5
    """
    service = RevenueService(ctx.obj["db"], bucketer=ctx.obj["bucketer"])

    try:
        entries = service.get_ranking(PERIOD_CHOICES[period], limit=limit, now=ctx.obj["now"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No paid transactions found.")
        return

    click.echo("\nTop Users by Revenue:")
    click.echo("-" * 84)
    click.echo(f"{'#':>3} {'User':<36} {'Revenue':>16} {'Count':>8} {'Average':>16}")
    click.echo("-" * 84)
    for position, entry in enumerate(entries, start=1):
        click.echo(
            f"{position:>3} {entry.identifier:<36} {format_currency(entry.total_profit):>16} "
            f"{entry.transaction_count:>8} {format_currency(entry.average_profit):>16}"
        )


def register_commands(cli):
    """Register ranking command with main CLI."""
    cli.add_command(ranking)
