"""Period window classification."""

from datetime import datetime, timedelta
from typing import Optional

from dateutil import tz
from dateutil.relativedelta import relativedelta

from pixrevenue.domain.entities import PeriodTag
from pixrevenue.domain.timezone import TimeZoneBucketer

ROLLING_WINDOWS = {
    PeriodTag.SEVEN_DAYS: 7,
    PeriodTag.FIFTEEN_DAYS: 15,
    PeriodTag.THIRTY_DAYS: 30,
}

ALL_TIME = frozenset({PeriodTag.TOTAL})


class PeriodClassifier:
    """Classifies instants into overlapping period windows relative to ``now``.

    Window boundaries are computed once at construction so that classifying
    a transaction is a handful of comparisons.

    - today: same reference-timezone calendar date as ``now``
    - sevenDays/fifteenDays/thirtyDays: strictly after ``now - N days``,
      compared as UTC instants
    - thisMonth/thisYear: the calendar month/year containing ``now``
    - lastMonth: the full calendar month before ``now``'s month
    - total: always
    """

    def __init__(self, now: datetime, bucketer: Optional[TimeZoneBucketer] = None):
        self.bucketer = bucketer or TimeZoneBucketer()
        self.now = self.bucketer.to_local(now)
        self.now_utc = self.now.astimezone(tz.UTC)
        self.today_key = self.now.date().isoformat()

        # UTC instants: local datetimes sharing a tzinfo compare by wall clock.
        self.rolling_starts = {
            tag: self.now_utc - timedelta(days=days)
            for tag, days in ROLLING_WINDOWS.items()
        }

        first_of_month = self.now.date().replace(day=1)
        self.month_start = self.bucketer.start_of_day(first_of_month)
        self.next_month_start = self.bucketer.start_of_day(
            first_of_month + relativedelta(months=1)
        )
        self.last_month_start = self.bucketer.start_of_day(
            first_of_month - relativedelta(months=1)
        )

        first_of_year = first_of_month.replace(month=1)
        self.year_start = self.bucketer.start_of_day(first_of_year)
        self.next_year_start = self.bucketer.start_of_day(
            first_of_year + relativedelta(years=1)
        )

    def classify(self, instant: Optional[datetime]) -> frozenset[PeriodTag]:
        """Return every period tag the instant belongs to.

        An unknown instant only belongs to the all-time window.
        """
        if instant is None:
            return ALL_TIME

        local = self.bucketer.to_local(instant)
        tags = {PeriodTag.TOTAL}

        if local.date().isoformat() == self.today_key:
            tags.add(PeriodTag.TODAY)

        instant_utc = local.astimezone(tz.UTC)
        for tag, start in self.rolling_starts.items():
            if instant_utc > start:
                tags.add(tag)

        if self.month_start <= local < self.next_month_start:
            tags.add(PeriodTag.THIS_MONTH)
        elif self.last_month_start <= local < self.month_start:
            tags.add(PeriodTag.LAST_MONTH)

        if self.year_start <= local < self.next_year_start:
            tags.add(PeriodTag.THIS_YEAR)

        return frozenset(tags)

    def contains(self, instant: Optional[datetime], tag: PeriodTag) -> bool:
        """Check membership of a single window."""
        return tag in self.classify(instant)
