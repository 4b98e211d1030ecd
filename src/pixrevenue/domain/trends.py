"""Trend, projection and month-over-month figures."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from pixrevenue.domain.entities import ZERO

HUNDRED = Decimal("100")
WEEK_DAYS = Decimal("7")
PROJECTION_DAYS = Decimal("30")


@dataclass(frozen=True)
class TrendFigures:
    """Figures derived from the last seven days of net profit."""

    average_daily_profit: Decimal
    monthly_projection: Decimal
    trend_percentage: Decimal
    days_with_data: int


class TrendProjector:
    """Derives weekly averages and trend from a per-day net profit series."""

    def project(
        self, seven_days_net: Decimal, daily_net: Mapping[str, Decimal]
    ) -> TrendFigures:
        """Compute trend figures.

        Args:
            seven_days_net: Net profit of the rolling seven-day window
            daily_net: Net profit per reference-timezone date key, for days
                with at least one transaction in the window

        Returns:
            TrendFigures for the window
        """
        # Weekly average: always divided by 7, not by active days.
        average_daily = seven_days_net / WEEK_DAYS
        return TrendFigures(
            average_daily_profit=average_daily,
            monthly_projection=average_daily * PROJECTION_DAYS,
            trend_percentage=self.trend_percentage(daily_net),
            days_with_data=len(daily_net),
        )

    @staticmethod
    def trend_percentage(daily_net: Mapping[str, Decimal]) -> Decimal:
        """Compare the later half of the active days with the earlier half.

        With an odd number of days the extra day goes to the later half.
        Returns 0 when the earlier half does not sum to a positive value.
        """
        days = sorted(daily_net)
        half = len(days) // 2
        first_half = sum((daily_net[day] for day in days[:half]), ZERO)
        second_half = sum((daily_net[day] for day in days[half:]), ZERO)
        if first_half <= 0:
            return ZERO
        return (second_half - first_half) / first_half * HUNDRED


class MonthComparator:
    """Month-over-month change of net profit."""

    @staticmethod
    def change(this_month: Decimal, last_month: Decimal) -> Decimal:
        """Percentage change from last month to this month.

        A zero (or negative) previous month yields 100 when this month is
        positive and 0 otherwise.
        """
        if last_month > 0:
            return (this_month - last_month) / last_month * HUNDRED
        if this_month > 0:
            return HUNDRED
        return ZERO
