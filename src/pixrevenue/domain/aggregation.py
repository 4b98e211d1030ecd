"""Single-pass revenue aggregation."""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Optional

import structlog

from pixrevenue.domain.entities import (
    ACQUIRER_PERIOD_TAGS,
    ZERO,
    AcquirerFeeConfig,
    AcquirerPeriodData,
    PeriodBreakdown,
    PeriodData,
    PeriodTag,
    ProfitStats,
    Transaction,
)
from pixrevenue.domain.fees import FeeCalculator
from pixrevenue.domain.periods import PeriodClassifier
from pixrevenue.domain.timezone import TimeZoneBucketer
from pixrevenue.domain.trends import MonthComparator, TrendProjector

logger = structlog.get_logger()


class _PeriodAccumulator:
    """Mutable running totals, private to one aggregation run."""

    def __init__(self):
        self.totals: dict[PeriodTag, Decimal] = defaultdict(lambda: ZERO)

    def add(self, tags: Iterable[PeriodTag], value: Decimal) -> None:
        for tag in tags:
            self.totals[tag] += value

    def freeze(self) -> PeriodBreakdown:
        return PeriodBreakdown.from_totals(self.totals)


class _AcquirerAccumulator:
    def __init__(self):
        self.counts: dict[PeriodTag, int] = defaultdict(int)
        self.costs: dict[PeriodTag, Decimal] = defaultdict(lambda: ZERO)
        self.volumes: dict[PeriodTag, Decimal] = defaultdict(lambda: ZERO)

    def add(self, tags: Iterable[PeriodTag], cost: Decimal, volume: Decimal) -> None:
        for tag in tags:
            self.counts[tag] += 1
            self.costs[tag] += cost
            self.volumes[tag] += volume

    def freeze(self) -> AcquirerPeriodData:
        return AcquirerPeriodData(
            **{
                tag.field_name: PeriodData(
                    count=self.counts[tag],
                    cost=self.costs[tag],
                    volume=self.volumes[tag],
                )
                for tag in ACQUIRER_PERIOD_TAGS
            }
        )


class Aggregator:
    """Turns a transaction snapshot into ProfitStats.

    Only paid transactions are considered. Each transaction is visited once:
    its fees are computed, it is classified into every window it belongs to,
    and its figures are added to each of those windows. Summation follows
    input order with Decimal arithmetic, so repeated runs over the same
    snapshot produce identical results.
    """

    def __init__(
        self,
        bucketer: Optional[TimeZoneBucketer] = None,
        trend_projector: Optional[TrendProjector] = None,
    ):
        self.bucketer = bucketer or TimeZoneBucketer()
        self.trend_projector = trend_projector or TrendProjector()

    def aggregate(
        self,
        transactions: Iterable[Transaction],
        fee_config: AcquirerFeeConfig,
        now: datetime,
    ) -> ProfitStats:
        """Aggregate paid transactions relative to ``now``.

        Args:
            transactions: Transactions of the snapshot, in any status
            fee_config: Acquirer fee table
            now: Reference instant of the snapshot

        Returns:
            ProfitStats for the snapshot
        """
        classifier = PeriodClassifier(now, self.bucketer)
        calculator = FeeCalculator(fee_config)

        net = _PeriodAccumulator()
        gross = _PeriodAccumulator()
        percentage_revenue = _PeriodAccumulator()
        fixed_revenue = _PeriodAccumulator()
        acquirer_costs = _PeriodAccumulator()
        acquirers: dict[str, _AcquirerAccumulator] = {}
        daily_net: dict[str, Decimal] = {}
        transaction_count = 0
        unclassified = 0

        for txn in transactions:
            if not txn.is_paid:
                continue

            transaction_count += 1
            fees = calculator.calculate(txn)
            instant = txn.classification_instant
            tags = classifier.classify(instant)
            if instant is None:
                unclassified += 1

            net.add(tags, fees.net)
            gross.add(tags, fees.gross)
            percentage_revenue.add(tags, fees.percentage_fee)
            fixed_revenue.add(tags, fees.fixed_fee)
            acquirer_costs.add(tags, fees.acquirer_cost)

            acquirer_tags = [tag for tag in ACQUIRER_PERIOD_TAGS if tag in tags]
            acquirers.setdefault(fees.acquirer, _AcquirerAccumulator()).add(
                acquirer_tags, fees.acquirer_cost, txn.amount
            )

            if PeriodTag.SEVEN_DAYS in tags:
                day = self.bucketer.date_key(instant)
                daily_net[day] = daily_net.get(day, ZERO) + fees.net

        net_breakdown = net.freeze()
        trend = self.trend_projector.project(net_breakdown.seven_days, daily_net)
        average_profit = (
            net_breakdown.total / transaction_count if transaction_count > 0 else ZERO
        )

        logger.debug(
            "Aggregated revenue snapshot",
            transactions=transaction_count,
            unclassified=unclassified,
            acquirers=sorted(acquirers),
        )

        return ProfitStats(
            net=net_breakdown,
            gross=gross.freeze(),
            percentage_revenue=percentage_revenue.freeze(),
            fixed_revenue=fixed_revenue.freeze(),
            acquirer_costs=acquirer_costs.freeze(),
            acquirer_breakdown=MappingProxyType(
                {name: acc.freeze() for name, acc in sorted(acquirers.items())}
            ),
            transaction_count=transaction_count,
            average_profit=average_profit,
            average_daily_profit=trend.average_daily_profit,
            monthly_projection=trend.monthly_projection,
            trend_percentage=trend.trend_percentage,
            month_over_month_change=MonthComparator.change(
                net_breakdown.this_month, net_breakdown.last_month
            ),
            days_with_data=trend.days_with_data,
        )


def aggregate(
    transactions: Iterable[Transaction],
    fee_config: AcquirerFeeConfig,
    now: datetime,
    bucketer: Optional[TimeZoneBucketer] = None,
) -> ProfitStats:
    """Aggregate a snapshot with a default Aggregator."""
    return Aggregator(bucketer=bucketer).aggregate(transactions, fee_config, now)
