"""Profit chart command."""

import click

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.entities import ChartPeriod
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.revenue import RevenueService
from pixrevenue.utils.formatting import format_currency

BAR_WIDTH = 30


def _bar(value, peak) -> str:
    if peak <= 0 or value <= 0:
        return ""
    return "#" * max(1, int(value / peak * BAR_WIDTH))


@click.command("chart")
@click.option(
    "--period",
    type=click.Choice([p.value for p in ChartPeriod]),
    default=ChartPeriod.SEVEN_DAYS.value,
    show_default=True,
    help="Chart range: hourly for today, daily otherwise",
)
@click.option("--monthly", is_flag=True, help="Show net profit per month of the current year")
@click.pass_context
def chart(ctx, period: str, monthly: bool):
    """Show net profit over time.

    Examples:
        pixrevenue chart --period today
        pixrevenue chart --period 30days
        pixrevenue chart --monthly
    """
    service = RevenueService(ctx.obj["db"], bucketer=ctx.obj["bucketer"])

    try:
        if monthly:
            points = service.get_monthly_chart(now=ctx.obj["now"])
        else:
            points = service.get_profit_chart(ChartPeriod(period), now=ctx.obj["now"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    peak = max((point.net_profit for point in points), default=0)

    click.echo(f"\n{'Date':<8} {'Generated':>10} {'Paid':>6} {'Net profit':>16}")
    click.echo("-" * (44 + BAR_WIDTH))
    for point in points:
        click.echo(
            f"{point.label:<8} {point.generated_count:>10} {point.paid_count:>6} "
            f"{format_currency(point.net_profit):>16}  {_bar(point.net_profit, peak)}"
        )


def register_commands(cli):
    """Register chart command with main CLI."""
    cli.add_command(chart)
