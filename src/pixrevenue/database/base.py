"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from pixrevenue.domain.entities import Transaction, TransactionStatus


class Database(ABC):
    """Abstract database interface for pixrevenue.

    Acts as the transaction source and the key-value settings store the
    revenue engine reads from.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
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
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, status: Optional[TransactionStatus] = None
    ) -> list[Transaction]:
        """List transactions in ID order, optionally filtered by status."""
        pass

    @abstractmethod
    def mark_transaction_paid(self, transaction_id: int, paid_at: datetime) -> None:
        """Set a transaction's status to paid."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> dict[str, str]:
        """Get all settings as a key-value mapping."""
        pass

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get a single setting value."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Create or update a setting.

        Raises:
            SettingsWriteError: If the value could not be persisted
        """
        pass
