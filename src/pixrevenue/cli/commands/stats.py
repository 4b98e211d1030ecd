"""Profit statistics commands."""

import time

import click
import structlog

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.entities import PeriodTag, ProfitStats
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.revenue import RevenueService
from pixrevenue.utils.formatting import format_currency, format_percent, margin_percentage

logger = structlog.get_logger()

PERIOD_LABELS = {
    PeriodTag.TODAY: "Today",
    PeriodTag.SEVEN_DAYS: "Last 7 days",
    PeriodTag.FIFTEEN_DAYS: "Last 15 days",
    PeriodTag.THIRTY_DAYS: "Last 30 days",
    PeriodTag.THIS_MONTH: "This month",
    PeriodTag.LAST_MONTH: "Last month",
    PeriodTag.THIS_YEAR: "This year",
    PeriodTag.TOTAL: "All time",
}

ACQUIRER_PERIOD_CHOICES = {
    "today": PeriodTag.TODAY,
    "7days": PeriodTag.SEVEN_DAYS,
    "thisMonth": PeriodTag.THIS_MONTH,
    "total": PeriodTag.TOTAL,
}


def _display_stats(stats: ProfitStats) -> None:
    """Print the period table and derived KPIs."""
    click.echo("\nProfit by Period:")
    click.echo("-" * 84)
    click.echo(f"{'Period':<16} {'Gross':>16} {'Acquirer cost':>16} {'Net':>16} {'Margin':>10}")
    click.echo("-" * 84)
    for tag in PeriodTag:
        gross = stats.gross.get(tag)
        cost = stats.acquirer_costs.get(tag)
        net = stats.net.get(tag)
        margin = format_percent(margin_percentage(net, gross), show_sign=False)
        click.echo(
            f"{PERIOD_LABELS[tag]:<16} {format_currency(gross):>16} "
            f"{format_currency(cost):>16} {format_currency(net):>16} {margin:>10}"
        )
    click.echo("-" * 84)

    click.echo(f"\nPaid transactions:      {stats.transaction_count}")
    click.echo(f"Average profit:         {format_currency(stats.average_profit)}")
    click.echo(f"Average daily profit:   {format_currency(stats.average_daily_profit)}")
    click.echo(f"30-day projection:      {format_currency(stats.monthly_projection)}")
    click.echo(
        f"7-day trend:            {format_percent(stats.trend_percentage)}"
        f" ({stats.days_with_data} day{'s' if stats.days_with_data != 1 else ''} with data)"
    )
    click.echo(f"Month over month:       {format_percent(stats.month_over_month_change)}")


@click.command("stats")
@click.option(
    "--watch",
    type=click.IntRange(min=1),
    default=None,
    help="Recompute every N seconds until interrupted (e.g. 60)",
)
@click.pass_context
def stats(ctx, watch: int | None):
    """Show profit statistics for every period.

    Examples:
        pixrevenue stats
        pixrevenue stats --watch 60
    """
    service = RevenueService(ctx.obj["db"], bucketer=ctx.obj["bucketer"])

    while True:
        try:
            profit_stats = service.get_profit_stats(now=ctx.obj["now"])
        except DomainError as e:
            handle_domain_error(ctx, e)
        _display_stats(profit_stats)

        if watch is None:
            return
        try:
            time.sleep(watch)
        except KeyboardInterrupt:
            logger.info("Stopped watching statistics")
            return
        logger.debug("Refreshing statistics", interval=watch)


@click.command("acquirers")
@click.option(
    "--period",
    type=click.Choice(list(ACQUIRER_PERIOD_CHOICES)),
    default="thisMonth",
    show_default=True,
    help="Period to show acquirer costs for",
)
@click.pass_context
def acquirers(ctx, period: str):
    """Show processed volume and cost per acquirer."""
    service = RevenueService(ctx.obj["db"], bucketer=ctx.obj["bucketer"])
    tag = ACQUIRER_PERIOD_CHOICES[period]

    try:
        profit_stats = service.get_profit_stats(now=ctx.obj["now"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not profit_stats.acquirer_breakdown:
        click.echo("No paid transactions found.")
        return

    click.echo(f"\nAcquirer Costs ({PERIOD_LABELS[tag]}):")
    click.echo("-" * 70)
    click.echo(f"{'Acquirer':<16} {'Count':>8} {'Volume':>20} {'Cost':>20}")
    click.echo("-" * 70)
    for name, data in profit_stats.acquirer_breakdown.items():
        entry = data.get(tag)
        click.echo(
            f"{name:<16} {entry.count:>8} {format_currency(entry.volume):>20} "
            f"{format_currency(entry.cost):>20}"
        )
    click.echo("-" * 70)
    click.echo(f"{'Total':<16} {'':>8} {'':>20} {format_currency(profit_stats.acquirer_costs.get(tag)):>20}")


def register_commands(cli):
    """Register statistics commands with main CLI."""
    cli.add_command(stats)
    cli.add_command(acquirers)
