"""Revenue dashboard domain service."""

from datetime import date, datetime, UTC
from typing import Optional

import structlog

from pixrevenue.database.base import Database
from pixrevenue.domain.aggregation import Aggregator
from pixrevenue.domain.charts import ChartBuilder
from pixrevenue.domain.entities import (
    ChartPeriod,
    ChartPoint,
    GoalProgress,
    ProfitStats,
    RangeStats,
    RankingPeriod,
    Snapshot,
    UserProfitRanking,
)
from pixrevenue.domain.goals import goal_progress
from pixrevenue.domain.ranges import RangeReporter
from pixrevenue.domain.ranking import DEFAULT_LIMIT, RankingBuilder
from pixrevenue.domain.settings import resolve_fee_config, resolve_monthly_goal
from pixrevenue.domain.timezone import TimeZoneBucketer

logger = structlog.get_logger()


class RevenueService:
    """Service that runs the revenue engine over fresh snapshots.

    Every call loads a new snapshot (transactions, settings and "now") and
    recomputes from scratch; nothing is cached between calls.
    """

    def __init__(self, db: Database, bucketer: Optional[TimeZoneBucketer] = None):
        """Initialize revenue service.

        Args:
            db: Database instance
            bucketer: Reference-timezone bucketer; defaults to America/Sao_Paulo
        """
        self.db = db
        self.bucketer = bucketer or TimeZoneBucketer()
        self.aggregator = Aggregator(bucketer=self.bucketer)
        self.ranking_builder = RankingBuilder(bucketer=self.bucketer)
        self.chart_builder = ChartBuilder(bucketer=self.bucketer)
        self.range_reporter = RangeReporter(bucketer=self.bucketer)

    def load_snapshot(self, now: Optional[datetime] = None) -> Snapshot:
        """Read transactions and settings once for a refresh cycle."""
        settings = self.db.get_settings()
        snapshot = Snapshot(
            transactions=tuple(self.db.list_transactions()),
            fee_config=resolve_fee_config(settings),
            monthly_goal=resolve_monthly_goal(settings),
            now=now or datetime.now(UTC),
        )
        logger.debug(
            "Loaded revenue snapshot",
            transactions=len(snapshot.transactions),
            now=snapshot.now.isoformat(),
        )
        return snapshot

    def get_profit_stats(self, now: Optional[datetime] = None) -> ProfitStats:
        snapshot = self.load_snapshot(now)
        return self.aggregator.aggregate(
            snapshot.transactions, snapshot.fee_config, snapshot.now
        )

    def get_ranking(
        self,
        period: RankingPeriod = RankingPeriod.ALL,
        limit: int = DEFAULT_LIMIT,
        now: Optional[datetime] = None,
    ) -> list[UserProfitRanking]:
        snapshot = self.load_snapshot(now)
        return self.ranking_builder.rank(snapshot.transactions, period, snapshot.now, limit)

    def get_goal_progress(self, now: Optional[datetime] = None) -> GoalProgress:
        """Progress of this month's net profit against the configured goal."""
        snapshot = self.load_snapshot(now)
        stats = self.aggregator.aggregate(
            snapshot.transactions, snapshot.fee_config, snapshot.now
        )
        return goal_progress(stats.this_month, snapshot.monthly_goal)

    def get_profit_chart(
        self, period: ChartPeriod = ChartPeriod.SEVEN_DAYS, now: Optional[datetime] = None
    ) -> list[ChartPoint]:
        snapshot = self.load_snapshot(now)
        return self.chart_builder.profit_chart(
            snapshot.transactions, snapshot.fee_config, snapshot.now, period
        )

    def get_monthly_chart(self, now: Optional[datetime] = None) -> list[ChartPoint]:
        snapshot = self.load_snapshot(now)
        return self.chart_builder.monthly_chart(
            snapshot.transactions, snapshot.fee_config, snapshot.now
        )

    def get_range_stats(self, start_date: date, end_date: date) -> RangeStats:
        snapshot = self.load_snapshot()
        return self.range_reporter.range_stats(
            snapshot.transactions, snapshot.fee_config, start_date, end_date
        )

    def today(self, now: Optional[datetime] = None) -> date:
        """Current calendar date in the reference timezone."""
        return self.bucketer.local_date(now or datetime.now(UTC))
