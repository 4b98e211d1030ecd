"""Tests for the SQLAlchemy database implementation."""

from datetime import datetime, UTC
from decimal import Decimal

import pytest

from pixrevenue.database.models import PixTransaction
from pixrevenue.domain.entities import TransactionStatus
from pixrevenue.domain.errors import ConflictError, NotFoundError


class TestTransactions:
    """Tests for transaction storage."""

    def test_create_and_get(self, temp_db):
        created_at = datetime(2024, 5, 15, 15, 0, tzinfo=UTC)
        txn_id = temp_db.create_transaction(
            amount=Decimal("99.90"),
            status=TransactionStatus.PAID,
            created_at=created_at,
            paid_at=created_at,
            fee_percentage=Decimal("5"),
            acquirer="inter",
            user_email="seller@example.com",
        )
        txn = temp_db.get_transaction(txn_id)

        assert txn.amount == Decimal("99.90")
        assert txn.status is TransactionStatus.PAID
        assert txn.created_at == created_at
        assert txn.paid_at == created_at
        assert txn.fee_percentage == Decimal("5")
        assert txn.fee_fixed is None
        assert txn.acquirer == "inter"

    def test_get_missing_returns_none(self, temp_db):
        assert temp_db.get_transaction(999) is None

    def test_list_in_id_order_with_status_filter(self, temp_db):
        first = temp_db.create_transaction(amount=Decimal("10"))
        second = temp_db.create_transaction(amount=Decimal("20"), status=TransactionStatus.PAID)
        third = temp_db.create_transaction(amount=Decimal("30"), status=TransactionStatus.EXPIRED)

        assert [t.id for t in temp_db.list_transactions()] == [first, second, third]
        assert [t.id for t in temp_db.list_transactions(status=TransactionStatus.PAID)] == [second]

    def test_mark_paid(self, temp_db):
        txn_id = temp_db.create_transaction(amount=Decimal("10"))
        paid_at = datetime(2024, 5, 15, 16, 0, tzinfo=UTC)
        temp_db.mark_transaction_paid(txn_id, paid_at)

        txn = temp_db.get_transaction(txn_id)
        assert txn.status is TransactionStatus.PAID
        assert txn.paid_at == paid_at

    def test_mark_paid_missing(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.mark_transaction_paid(42, datetime.now(UTC))

    def test_mark_paid_twice(self, temp_db):
        txn_id = temp_db.create_transaction(amount=Decimal("10"), status=TransactionStatus.PAID)
        with pytest.raises(ConflictError):
            temp_db.mark_transaction_paid(txn_id, datetime.now(UTC))

    def test_corrupt_stored_timestamp_is_still_listed(self, temp_db):
        session = temp_db._get_session()
        session.add(PixTransaction(amount=Decimal("10"), status="paid", created_at="garbage"))
        session.commit()

        [txn] = temp_db.list_transactions()
        assert txn.created_at is None
        assert txn.is_paid

    def test_unknown_status_row_is_skipped(self, temp_db):
        session = temp_db._get_session()
        session.add(PixTransaction(amount=Decimal("10"), status="refunded", created_at="2024-05-15T12:00:00Z"))
        session.commit()
        paid_id = temp_db.create_transaction(amount=Decimal("20"), status=TransactionStatus.PAID)

        assert [t.id for t in temp_db.list_transactions()] == [paid_id]
        assert temp_db.get_transaction(paid_id - 1) is None


class TestSettings:
    """Tests for the key-value settings store."""

    def test_empty(self, temp_db):
        assert temp_db.get_settings() == {}
        assert temp_db.get_setting("anything") is None

    def test_set_and_update(self, temp_db):
        temp_db.set_setting("inter_fee_rate", "1.5")
        temp_db.set_setting("inter_fee_rate", "2")
        temp_db.set_setting("default_acquirer", "inter")

        assert temp_db.get_setting("inter_fee_rate") == "2"
        assert temp_db.get_settings() == {"default_acquirer": "inter", "inter_fee_rate": "2"}
