"""Tests for domain entities."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

import pytest

from pixrevenue.domain.entities import (
    AcquirerFee,
    AcquirerFeeConfig,
    AcquirerPeriodData,
    ChartPeriod,
    PeriodBreakdown,
    PeriodTag,
    RankingPeriod,
    Transaction,
    TransactionStatus,
)


def test_transaction_is_immutable():
    txn = Transaction(id=1, amount=Decimal("10"), status=TransactionStatus.PAID, created_at=None)
    with pytest.raises(AttributeError):
        txn.amount = Decimal("20")


def test_classification_instant_prefers_paid_at():
    created_at = datetime(2024, 5, 1, tzinfo=UTC)
    paid_at = created_at + timedelta(days=2)
    txn = Transaction(
        id=1,
        amount=Decimal("10"),
        status=TransactionStatus.PAID,
        created_at=created_at,
        paid_at=paid_at,
    )
    assert txn.classification_instant == paid_at

    unpaid = Transaction(id=2, amount=Decimal("10"), status=TransactionStatus.GENERATED, created_at=created_at)
    assert unpaid.classification_instant == created_at
    assert not unpaid.is_paid


def test_fee_config_resolve():
    config = AcquirerFeeConfig(
        fees={"inter": AcquirerFee(rate=Decimal("1"))},
        default_acquirer="spedpay",
    )
    assert config.resolve("inter") == ("inter", AcquirerFee(rate=Decimal("1")))
    assert config.resolve(None) == ("spedpay", AcquirerFee())
    assert config.resolve("other") == ("spedpay", AcquirerFee())


def test_period_breakdown_from_totals():
    breakdown = PeriodBreakdown.from_totals({PeriodTag.TODAY: Decimal("5"), PeriodTag.TOTAL: Decimal("9")})
    assert breakdown.today == Decimal("5")
    assert breakdown.get(PeriodTag.TOTAL) == Decimal("9")
    assert breakdown.get(PeriodTag.LAST_MONTH) == 0


def test_acquirer_period_data_rejects_untracked_period():
    with pytest.raises(KeyError):
        AcquirerPeriodData().get(PeriodTag.FIFTEEN_DAYS)


def test_period_selectors():
    assert RankingPeriod.ALL.tag is PeriodTag.TOTAL
    assert RankingPeriod.SEVEN_DAYS.tag is PeriodTag.SEVEN_DAYS
    assert ChartPeriod.TODAY.days == 1
    assert ChartPeriod.FOURTEEN_DAYS.days == 14
    assert PeriodTag.THIS_MONTH.field_name == "this_month"
