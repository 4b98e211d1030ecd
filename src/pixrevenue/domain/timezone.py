"""Reference-timezone calendar bucketing.

All "today", hour and month comparisons are made in one fixed reference
timezone so results do not depend on where the code runs.
"""

from datetime import date, datetime, time, tzinfo
from dateutil import tz

from pixrevenue.domain.errors import ValidationError, unknown_timezone

DEFAULT_TIMEZONE = "America/Sao_Paulo"


class TimeZoneBucketer:
    """Maps instants onto calendar dates and hours of a reference timezone."""

    def __init__(self, timezone_name: str = DEFAULT_TIMEZONE):
        """Initialize the bucketer.

        Args:
            timezone_name: IANA timezone name, e.g. "America/Sao_Paulo"

        Raises:
            ValidationError: If the timezone name cannot be resolved
        """
        zone = tz.gettz(timezone_name) if timezone_name else None
        if zone is None:
            raise ValidationError(unknown_timezone(timezone_name))
        self.timezone_name = timezone_name
        self.zone: tzinfo = zone

    def to_local(self, instant: datetime) -> datetime:
        """Convert an instant to the reference timezone.

        Naive datetimes are taken to be UTC.
        """
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=tz.UTC)
        return instant.astimezone(self.zone)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def date_key(self, instant: datetime) -> str:
        """Return the reference-timezone calendar date as YYYY-MM-DD."""
        return self.local_date(instant).isoformat()

    def hour_of_day(self, instant: datetime) -> int:
        """Return the reference-timezone hour (0..23)."""
        return self.to_local(instant).hour

    def start_of_day(self, day: date) -> datetime:
        """Return local midnight of a calendar day as an aware datetime."""
        return datetime.combine(day, time.min, tzinfo=self.zone)
