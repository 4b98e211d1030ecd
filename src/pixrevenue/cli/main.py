"""Main CLI entry point."""

import click
from pixrevenue.database.factories import create_sqlite_database
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.timezone import DEFAULT_TIMEZONE, TimeZoneBucketer
from pixrevenue.logging_config import LOG_LEVELS, configure_logging
from pixrevenue.utils.date_parser import parse_timestamp

# Import and register all commands at module level
from pixrevenue.cli.commands import (
    stats,
    ranking,
    goal,
    chart,
    range_cmd,
    settings,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PIXREVENUE_DB_PATH environment variable)",
    envvar="PIXREVENUE_DB_PATH",
)
@click.option(
    "--timezone",
    "timezone_name",
    default=DEFAULT_TIMEZONE,
    show_default=True,
    envvar="PIXREVENUE_TIMEZONE",
    help="Reference timezone for calendar days and hours",
)
@click.option(
    "--now",
    "now_str",
    help="Reference instant (ISO-8601) used instead of the current time",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="PIXREVENUE_LOG_LEVEL",
    help="Minimum level of log events written to stderr",
)
@click.option("--json-logs", is_flag=True, help="Write log events as JSON lines")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    timezone_name: str,
    now_str: str | None,
    log_level: str,
    json_logs: bool,
):
    """Pixrevenue - PIX platform revenue dashboard.

    Aggregates paid PIX transactions into profit statistics per period,
    acquirer costs, trends, goal progress and a user revenue ranking.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level, json_logs=json_logs)

    try:
        ctx.obj["bucketer"] = TimeZoneBucketer(timezone_name)
        ctx.obj["now"] = parse_timestamp(now_str) if now_str else None
    except (DomainError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
stats.register_commands(cli)
ranking.register_commands(cli)
goal.register_commands(cli)
chart.register_commands(cli)
range_cmd.register_commands(cli)
settings.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
