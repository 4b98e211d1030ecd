"""Tests for the revenue service over a real database."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from pixrevenue.database.models import PixTransaction
from pixrevenue.domain.entities import ChartPeriod, RankingPeriod, TransactionStatus


@pytest.fixture
def seeded(temp_db, settings_service, transaction_service, now):
    """Scenario data: 2% acquirer and 0.50 fixed acquirer, three paid charges."""
    settings_service.set_acquirer_fee("ativus", rate=Decimal("2"))
    settings_service.set_acquirer_fee("spedpay", fixed=Decimal("0.5"))
    for amount, acquirer in (("100", "ativus"), ("200", "spedpay"), ("50", "spedpay")):
        transaction_service.create_transaction(
            amount=Decimal(amount),
            status=TransactionStatus.PAID,
            created_at=now,
            fee_percentage=Decimal("5"),
            acquirer=acquirer,
            user_email="seller@example.com",
        )
    transaction_service.create_transaction(amount=Decimal("500"), created_at=now)
    return temp_db


def test_profit_stats(seeded, revenue_service, now):
    stats = revenue_service.get_profit_stats(now=now)

    assert stats.gross.today == Decimal("17.5")
    assert stats.acquirer_costs.today == Decimal("3")
    assert stats.today == Decimal("14.5")
    assert stats.transaction_count == 3
    assert stats.acquirer_breakdown["spedpay"].today.count == 2


def test_snapshot_reflects_latest_settings(seeded, revenue_service, settings_service, now):
    before = revenue_service.get_profit_stats(now=now)
    settings_service.set_acquirer_fee("ativus", rate=Decimal("0"))
    after = revenue_service.get_profit_stats(now=now)

    assert before.today == Decimal("14.5")
    assert after.today == Decimal("16.5")


def test_load_snapshot(seeded, revenue_service, goal_service, now):
    goal_service.save_monthly_goal(Decimal("5000"))
    snapshot = revenue_service.load_snapshot(now)

    assert len(snapshot.transactions) == 4
    assert snapshot.monthly_goal == Decimal("5000")
    assert snapshot.now == now
    assert snapshot.fee_config.fees["ativus"].rate == Decimal("2")


def test_ranking(seeded, revenue_service, now):
    [entry] = revenue_service.get_ranking(RankingPeriod.TODAY, now=now)
    assert entry.identifier == "seller@example.com"
    assert entry.total_profit == Decimal("17.5")


def test_goal_progress(seeded, revenue_service, goal_service, now):
    goal_service.save_monthly_goal(Decimal("29"))
    progress = revenue_service.get_goal_progress(now=now)

    assert progress.current == Decimal("14.5")
    assert progress.progress_percent == Decimal("50")
    assert progress.remaining == Decimal("14.5")


def test_goal_progress_without_goal(seeded, revenue_service, now):
    assert revenue_service.get_goal_progress(now=now).progress_percent is None


def test_profit_chart(seeded, revenue_service, now):
    points = revenue_service.get_profit_chart(ChartPeriod.TODAY, now=now)
    assert points[12].paid_count == 3
    assert points[12].generated_count == 4


def test_monthly_chart(seeded, revenue_service, now):
    points = revenue_service.get_monthly_chart(now=now)
    assert points[4].net_profit == Decimal("14.5")


def test_range_stats(seeded, revenue_service):
    stats = revenue_service.get_range_stats(date(2024, 5, 15), date(2024, 5, 15))
    assert stats.net_profit == Decimal("14.5")
    assert stats.transaction_count == 3


def test_today_uses_reference_timezone(revenue_service, now):
    late_evening = now + timedelta(hours=11)  # 23:00 local, 02:00 UTC next day
    assert revenue_service.today(late_evening) == date(2024, 5, 15)


def test_unknown_status_row_does_not_abort_stats(seeded, revenue_service, now):
    session = seeded._get_session()
    session.add(
        PixTransaction(
            amount=Decimal("1000"),
            status="refunded",
            created_at="2024-05-15T12:00:00-03:00",
            fee_percentage=Decimal("5"),
        )
    )
    session.commit()

    stats = revenue_service.get_profit_stats(now=now)
    assert stats.today == Decimal("14.5")
    assert stats.transaction_count == 3
