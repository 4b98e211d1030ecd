"""Custom date range command."""

import click

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.revenue import RevenueService
from pixrevenue.utils.date_parser import parse_date
from pixrevenue.utils.formatting import format_currency


@click.command("range")
@click.option("--start", "start_date", required=True, help="Start date (YYYY-MM-DD, DD/MM/YYYY or 'this month')")
@click.option("--end", "end_date", default="today", show_default=True, help="End date, inclusive")
@click.pass_context
def range_report(ctx, start_date: str, end_date: str):
    """Show totals and a daily breakdown for a custom date range.

    Examples:
        pixrevenue range --start 2024-05-01 --end 2024-05-15
        pixrevenue range --start "this month"
    """
    service = RevenueService(ctx.obj["db"], bucketer=ctx.obj["bucketer"])
    today = service.today(ctx.obj["now"])

    try:
        start = parse_date(start_date, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid start date: {e}", err=True)
        ctx.exit(1)

    try:
        end = parse_date(end_date, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid end date: {e}", err=True)
        ctx.exit(1)

    try:
        stats = service.get_range_stats(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nRevenue from {start.isoformat()} to {end.isoformat()}:")
    click.echo("-" * 60)
    click.echo(f"Percentage fees:   {format_currency(stats.percentage_revenue)}")
    click.echo(f"Fixed fees:        {format_currency(stats.fixed_revenue)}")
    click.echo(f"Gross revenue:     {format_currency(stats.gross)}")
    click.echo(f"Acquirer cost:     {format_currency(stats.acquirer_cost)}")
    click.echo(f"Net profit:        {format_currency(stats.net_profit)}")
    click.echo(f"Transactions:      {stats.transaction_count}")

    if not stats.daily_breakdown:
        return

    click.echo(f"\n{'Date':<12} {'Count':>6} {'Gross':>16} {'Net':>16}")
    click.echo("-" * 60)
    for day in stats.daily_breakdown:
        click.echo(
            f"{day.date.isoformat():<12} {day.count:>6} "
            f"{format_currency(day.gross):>16} {format_currency(day.net):>16}"
        )


def register_commands(cli):
    """Register range command with main CLI."""
    cli.add_command(range_report, name="range")
