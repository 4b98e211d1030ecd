"""Profit chart series."""

from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from pixrevenue.domain.entities import (
    ZERO,
    AcquirerFeeConfig,
    ChartPeriod,
    ChartPoint,
    Transaction,
)
from pixrevenue.domain.fees import FeeCalculator
from pixrevenue.domain.timezone import TimeZoneBucketer

MONTH_LABELS = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)


class ChartBuilder:
    """Builds net profit series bucketed by hour, day or month."""

    def __init__(self, bucketer: Optional[TimeZoneBucketer] = None):
        self.bucketer = bucketer or TimeZoneBucketer()

    def _bucket_key(self, instant: datetime, by_hour: bool) -> str:
        if by_hour:
            return str(self.bucketer.hour_of_day(instant))
        return self.bucketer.date_key(instant)

    def profit_chart(
        self,
        transactions: Iterable[Transaction],
        fee_config: AcquirerFeeConfig,
        now: datetime,
        period: ChartPeriod,
    ) -> list[ChartPoint]:
        """Build the profit chart for a period ending today.

        "today" yields 24 hourly points; the other periods yield one point
        per day, oldest first. Generated counts use created_at; paid counts
        and net profit use the paid instant.

        Args:
            transactions: Transactions of the snapshot, in any status
            fee_config: Acquirer fee table
            now: Reference instant of the snapshot
            period: Chart range

        Returns:
            Chart points in display order
        """
        calculator = FeeCalculator(fee_config)
        today = self.bucketer.local_date(now)
        by_hour = period is ChartPeriod.TODAY
        days = [today - timedelta(days=offset) for offset in range(period.days - 1, -1, -1)]
        day_keys = {day.isoformat() for day in days}

        generated: dict[str, int] = defaultdict(int)
        paid: dict[str, int] = defaultdict(int)
        net: dict[str, Decimal] = defaultdict(lambda: ZERO)

        for txn in transactions:
            if txn.created_at is not None and self.bucketer.date_key(txn.created_at) in day_keys:
                generated[self._bucket_key(txn.created_at, by_hour)] += 1

            if not txn.is_paid:
                continue
            instant = txn.classification_instant
            if instant is None or self.bucketer.date_key(instant) not in day_keys:
                continue
            key = self._bucket_key(instant, by_hour)
            paid[key] += 1
            net[key] += calculator.net_profit(txn)

        if by_hour:
            keys = [(str(hour), f"{hour:02d}:00") for hour in range(24)]
        else:
            keys = [(day.isoformat(), day.strftime("%d/%m")) for day in days]

        return [
            ChartPoint(
                label=label,
                key=key,
                net_profit=net[key],
                paid_count=paid[key],
                generated_count=generated[key],
            )
            for key, label in keys
        ]

    def monthly_chart(
        self,
        transactions: Iterable[Transaction],
        fee_config: AcquirerFeeConfig,
        now: datetime,
    ) -> list[ChartPoint]:
        """Net profit per calendar month of the current year."""
        calculator = FeeCalculator(fee_config)
        year = self.bucketer.local_date(now).year

        paid: dict[int, int] = defaultdict(int)
        net: dict[int, Decimal] = defaultdict(lambda: ZERO)

        for txn in transactions:
            if not txn.is_paid or txn.classification_instant is None:
                continue
            local = self.bucketer.to_local(txn.classification_instant)
            if local.year != year:
                continue
            paid[local.month] += 1
            net[local.month] += calculator.net_profit(txn)

        return [
            ChartPoint(
                label=MONTH_LABELS[month - 1],
                key=f"{year:04d}-{month:02d}",
                net_profit=net[month],
                paid_count=paid[month],
            )
            for month in range(1, 13)
        ]
