"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the parsing of stored
timestamp strings, from both the engine and the schema.
"""

from datetime import datetime
from typing import Optional

import structlog

from pixrevenue.domain import entities as domain
from pixrevenue.database.models import PixTransaction as ORMTransaction
from pixrevenue.utils.date_parser import parse_timestamp

logger = structlog.get_logger()


def _parse_stored_timestamp(
    value: Optional[str], transaction_id: int, field_name: str
) -> Optional[datetime]:
    """Parse a stored timestamp; unparseable values become None."""
    if value is None or not value.strip():
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        logger.warning(
            "Unparseable transaction timestamp",
            transaction_id=transaction_id,
            field=field_name,
            value=value,
        )
        return None


def _parse_stored_status(
    value: Optional[str], transaction_id: int
) -> Optional[domain.TransactionStatus]:
    """Parse a stored status; values outside TransactionStatus become None."""
    try:
        return domain.TransactionStatus(value)
    except ValueError:
        logger.warning(
            "Unknown transaction status",
            transaction_id=transaction_id,
            value=value,
        )
        return None


def transaction_to_domain(
    orm_transaction: ORMTransaction,
) -> Optional[domain.Transaction]:
    """Convert SQLAlchemy PixTransaction model to domain Transaction entity.

    Returns None for rows whose status is not a known TransactionStatus.
    """
    status = _parse_stored_status(orm_transaction.status, orm_transaction.id)
    if status is None:
        return None
    return domain.Transaction(
        id=orm_transaction.id,
        amount=orm_transaction.amount,
        status=status,
        created_at=_parse_stored_timestamp(
            orm_transaction.created_at, orm_transaction.id, "created_at"
        ),
        paid_at=_parse_stored_timestamp(
            orm_transaction.paid_at, orm_transaction.id, "paid_at"
        ),
        fee_percentage=orm_transaction.fee_percentage,
        fee_fixed=orm_transaction.fee_fixed,
        acquirer=orm_transaction.acquirer,
        user_email=orm_transaction.user_email,
    )
