"""Monthly goal commands."""

import click

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.goals import GoalService
from pixrevenue.domain.revenue import RevenueService
from pixrevenue.utils.amount_parser import parse_amount
from pixrevenue.utils.formatting import format_currency, format_percent


@click.group()
def goal_group():
    """Manage the monthly profit goal."""
    pass


@goal_group.command("show")
@click.pass_context
def show_goal(ctx):
    """Show progress of this month's net profit against the goal."""
    service = RevenueService(ctx.obj["db"], bucketer=ctx.obj["bucketer"])

    try:
        progress = service.get_goal_progress(now=ctx.obj["now"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if progress.progress_percent is None:
        click.echo("No monthly goal configured. Use 'pixrevenue goal set AMOUNT'.")
        click.echo(f"Net profit this month: {format_currency(progress.current)}")
        return

    click.echo(f"Monthly goal:  {format_currency(progress.goal)}")
    click.echo(f"This month:    {format_currency(progress.current)}")
    click.echo(f"Progress:      {format_percent(progress.progress_percent, show_sign=False)}")
    if progress.achieved:
        click.echo("Goal achieved!")
    else:
        click.echo(f"Remaining:     {format_currency(progress.remaining)}")


@goal_group.command("set")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def set_goal(ctx, amount: str):
    """Set the monthly profit goal.

    AMOUNT accepts formats like 50000, 50.000,00 or "R$ 50.000,00".

    Examples:
        pixrevenue goal set 50000
        pixrevenue goal set "R$ 75.000,00"
    """
    service = GoalService(ctx.obj["db"])

    try:
        new_goal = parse_amount(amount)
        service.save_monthly_goal(new_goal)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Monthly goal set to {format_currency(new_goal)}")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
