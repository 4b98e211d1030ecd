"""Custom date range reporting."""

from datetime import date
from typing import Iterable, Optional

from pixrevenue.domain.entities import (
    ZERO,
    AcquirerFeeConfig,
    DailyBreakdown,
    RangeStats,
    Transaction,
)
from pixrevenue.domain.errors import ValidationError, invalid_date_range
from pixrevenue.domain.fees import FeeCalculator
from pixrevenue.domain.timezone import TimeZoneBucketer


class RangeReporter:
    """Totals paid transactions over an inclusive calendar-date range."""

    def __init__(self, bucketer: Optional[TimeZoneBucketer] = None):
        self.bucketer = bucketer or TimeZoneBucketer()

    def range_stats(
        self,
        transactions: Iterable[Transaction],
        fee_config: AcquirerFeeConfig,
        start_date: date,
        end_date: date,
    ) -> RangeStats:
        """Compute totals and a per-day breakdown.

        Dates are reference-timezone calendar dates; both ends are included.
        Days without paid transactions are left out of the breakdown.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError(invalid_date_range(start_date, end_date))

        calculator = FeeCalculator(fee_config)
        gross = percentage = fixed = cost = ZERO
        count = 0
        daily: dict[date, list] = {}

        for txn in transactions:
            if not txn.is_paid or txn.classification_instant is None:
                continue
            day = self.bucketer.local_date(txn.classification_instant)
            if not start_date <= day <= end_date:
                continue

            fees = calculator.calculate(txn)
            gross += fees.gross
            percentage += fees.percentage_fee
            fixed += fees.fixed_fee
            cost += fees.acquirer_cost
            count += 1

            entry = daily.setdefault(day, [ZERO, ZERO, 0])
            entry[0] += fees.gross
            entry[1] += fees.net
            entry[2] += 1

        return RangeStats(
            start_date=start_date,
            end_date=end_date,
            gross=gross,
            percentage_revenue=percentage,
            fixed_revenue=fixed,
            acquirer_cost=cost,
            net_profit=gross - cost,
            transaction_count=count,
            daily_breakdown=tuple(
                DailyBreakdown(date=day, gross=values[0], net=values[1], count=values[2])
                for day, values in sorted(daily.items())
            ),
        )
