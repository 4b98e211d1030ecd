"""Transaction commands."""

import click

from pixrevenue.cli.error_handling import handle_domain_error
from pixrevenue.domain.entities import TransactionStatus
from pixrevenue.domain.errors import DomainError
from pixrevenue.domain.transaction import TransactionService
from pixrevenue.utils.amount_parser import parse_amount
from pixrevenue.utils.date_parser import parse_timestamp
from pixrevenue.utils.formatting import format_currency

STATUS_CHOICES = [status.value for status in TransactionStatus]


@click.group()
def transaction_group():
    """Record and inspect PIX transactions."""
    pass


@transaction_group.command("add")
@click.argument("amount", metavar="AMOUNT")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default="generated", show_default=True)
@click.option("--created-at", help="Creation time (ISO-8601); defaults to now")
@click.option("--paid-at", help="Payment time (ISO-8601); paid transactions only")
@click.option("--fee-percentage", help="Platform fee rate charged to the payer (e.g. 5)")
@click.option("--fee-fixed", help="Platform fixed fee charged to the payer (e.g. 0,99)")
@click.option("--acquirer", help="Acquirer that processed the charge (default acquirer if omitted)")
@click.option("--user", "user_email", help="Email of the account that owns the charge")
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    status: str,
    created_at: str | None,
    paid_at: str | None,
    fee_percentage: str | None,
    fee_fixed: str | None,
    acquirer: str | None,
    user_email: str | None,
):
    """Record a transaction.

    Examples:
        pixrevenue transaction add 100 --status paid --fee-percentage 5 --acquirer inter
        pixrevenue transaction add "R$ 49,90" --user seller@example.com
    """
    service = TransactionService(ctx.obj["db"])

    try:
        transaction_id = service.create_transaction(
            amount=parse_amount(amount),
            status=TransactionStatus(status),
            created_at=parse_timestamp(created_at) if created_at else ctx.obj["now"],
            paid_at=parse_timestamp(paid_at) if paid_at else None,
            fee_percentage=parse_amount(fee_percentage) if fee_percentage else None,
            fee_fixed=parse_amount(fee_fixed) if fee_fixed else None,
            acquirer=acquirer.strip().lower() if acquirer else None,
            user_email=user_email,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction (ID: {transaction_id})")


@transaction_group.command("pay")
@click.argument("transaction_id", type=int, metavar="TRANSACTION_ID")
@click.option("--paid-at", help="Payment time (ISO-8601); defaults to now")
@click.pass_context
def pay_transaction(ctx, transaction_id: int, paid_at: str | None):
    """Mark a transaction as paid."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.mark_paid(
            transaction_id,
            paid_at=parse_timestamp(paid_at) if paid_at else ctx.obj["now"],
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Marked transaction {transaction_id} as paid")


@transaction_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="Only show this status")
@click.pass_context
def list_transactions(ctx, status: str | None):
    """List transactions."""
    service = TransactionService(ctx.obj["db"])
    bucketer = ctx.obj["bucketer"]

    transactions = service.list_transactions(
        status=TransactionStatus(status) if status else None
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':>5} {'Created':<17} {'Status':<10} {'Amount':>14} {'Acquirer':<10} User")
    click.echo("-" * 90)
    for txn in transactions:
        created = (
            bucketer.to_local(txn.created_at).strftime("%Y-%m-%d %H:%M")
            if txn.created_at is not None
            else "?"
        )
        click.echo(
            f"{txn.id:>5} {created:<17} {txn.status.value:<10} "
            f"{format_currency(txn.amount):>14} {txn.acquirer or '-':<10} {txn.user_email or '-'}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
