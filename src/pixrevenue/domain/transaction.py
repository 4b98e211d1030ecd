"""Transaction domain service."""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from pixrevenue.database.base import Database
from pixrevenue.domain.entities import Transaction, TransactionStatus
from pixrevenue.domain.errors import (
    NotFoundError,
    ValidationError,
    transaction_not_found,
)


class TransactionService:
    """Service for recording PIX transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        amount: Decimal,
        status: TransactionStatus = TransactionStatus.GENERATED,
        created_at: Optional[datetime] = None,
        paid_at: Optional[datetime] = None,
        fee_percentage: Optional[Decimal] = None,
        fee_fixed: Optional[Decimal] = None,
        acquirer: Optional[str] = None,
        user_email: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            amount: Charged amount in BRL
            status: Initial status
            created_at: Creation instant, defaults to now
            paid_at: Payment instant; defaults to created_at for paid status
            fee_percentage: Platform fee rate charged to the payer
            fee_fixed: Platform fixed fee charged to the payer
            acquirer: Acquirer identifier; None means the default acquirer
            user_email: Identifier of the account that owns the charge

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount or fees are negative, or paid_at is
                given for a transaction that is not paid
        """
        if amount <= 0:
            raise ValidationError(f"Amount must be positive (got {amount})")
        if fee_percentage is not None and fee_percentage < 0:
            raise ValidationError(f"Fee percentage must not be negative (got {fee_percentage})")
        if fee_fixed is not None and fee_fixed < 0:
            raise ValidationError(f"Fixed fee must not be negative (got {fee_fixed})")
        if paid_at is not None and status is not TransactionStatus.PAID:
            raise ValidationError("paid_at can only be set on paid transactions")

        created_at = created_at or datetime.now(UTC)
        if status is TransactionStatus.PAID and paid_at is None:
            paid_at = created_at

        return self.db.create_transaction(
            amount=amount,
            status=status,
            created_at=created_at,
            paid_at=paid_at,
            fee_percentage=fee_percentage,
            fee_fixed=fee_fixed,
            acquirer=acquirer or None,
            user_email=user_email or None,
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.get_transaction(transaction_id)

    def mark_paid(self, transaction_id: int, paid_at: Optional[datetime] = None) -> None:
        """Mark a transaction as paid.

        Raises:
            NotFoundError: If the transaction does not exist
            ConflictError: If it is already paid
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.mark_transaction_paid(transaction_id, paid_at or datetime.now(UTC))

    def list_transactions(
        self, status: Optional[TransactionStatus] = None
    ) -> list[Transaction]:
        return self.db.list_transactions(status=status)
