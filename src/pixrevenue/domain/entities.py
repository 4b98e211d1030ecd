"""Domain model entities for pixrevenue.

These are pure data classes representing the revenue engine's inputs and
results, independent of the database schema. Every derived value is rebuilt
from a snapshot on each refresh, so nothing here is mutated in place.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

ZERO = Decimal("0")

DEFAULT_ACQUIRER = "ativus"
UNKNOWN_USER = "unknown"


class TransactionStatus(str, Enum):
    """Lifecycle status of a PIX charge."""

    GENERATED = "generated"
    PAID = "paid"
    EXPIRED = "expired"


class PeriodTag(str, Enum):
    """Named, overlapping time windows used by the aggregation."""

    TODAY = "today"
    SEVEN_DAYS = "sevenDays"
    FIFTEEN_DAYS = "fifteenDays"
    THIRTY_DAYS = "thirtyDays"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    THIS_YEAR = "thisYear"
    TOTAL = "total"

    @property
    def field_name(self) -> str:
        """Attribute name of this tag on PeriodBreakdown."""
        return _PERIOD_FIELDS[self]


_PERIOD_FIELDS = {
    PeriodTag.TODAY: "today",
    PeriodTag.SEVEN_DAYS: "seven_days",
    PeriodTag.FIFTEEN_DAYS: "fifteen_days",
    PeriodTag.THIRTY_DAYS: "thirty_days",
    PeriodTag.THIS_MONTH: "this_month",
    PeriodTag.LAST_MONTH: "last_month",
    PeriodTag.THIS_YEAR: "this_year",
    PeriodTag.TOTAL: "total",
}

# Tags tracked per acquirer; narrower than the full breakdown.
ACQUIRER_PERIOD_TAGS = (
    PeriodTag.TODAY,
    PeriodTag.SEVEN_DAYS,
    PeriodTag.THIS_MONTH,
    PeriodTag.TOTAL,
)


class RankingPeriod(str, Enum):
    """Period selector accepted by the user ranking."""

    ALL = "all"
    TODAY = "today"
    SEVEN_DAYS = "sevenDays"
    THIRTY_DAYS = "thirtyDays"
    THIS_MONTH = "thisMonth"

    @property
    def tag(self) -> PeriodTag:
        if self is RankingPeriod.ALL:
            return PeriodTag.TOTAL
        return PeriodTag(self.value)


class ChartPeriod(str, Enum):
    """Range selector for the profit chart."""

    TODAY = "today"
    SEVEN_DAYS = "7days"
    FOURTEEN_DAYS = "14days"
    THIRTY_DAYS = "30days"

    @property
    def days(self) -> int:
        return {"today": 1, "7days": 7, "14days": 14, "30days": 30}[self.value]


@dataclass(frozen=True)
class Transaction:
    """PIX transaction domain entity.

    ``created_at`` is None when the source held a value that could not be
    parsed as a timestamp.
    """

    id: int
    amount: Decimal
    status: TransactionStatus
    created_at: Optional[datetime]
    paid_at: Optional[datetime] = None
    fee_percentage: Optional[Decimal] = None
    fee_fixed: Optional[Decimal] = None
    acquirer: Optional[str] = None
    user_email: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.status is TransactionStatus.PAID

    @property
    def classification_instant(self) -> Optional[datetime]:
        """Instant used to place the transaction in time windows."""
        if self.paid_at is not None:
            return self.paid_at
        return self.created_at


@dataclass(frozen=True)
class AcquirerFee:
    """Cost charged by an acquirer for processing one transaction."""

    rate: Decimal = ZERO
    fixed: Decimal = ZERO


@dataclass(frozen=True)
class AcquirerFeeConfig:
    """Fee table per acquirer with an explicit default entry.

    Transactions without an acquirer, or with one that is not in ``fees``,
    are charged under ``default_acquirer``. If the default acquirer itself
    has no configured fee, the cost is zero.
    """

    fees: Mapping[str, AcquirerFee] = field(default_factory=dict)
    default_acquirer: str = DEFAULT_ACQUIRER

    def resolve(self, acquirer: Optional[str]) -> tuple[str, AcquirerFee]:
        """Return the acquirer name the cost is charged under and its fee."""
        if acquirer and acquirer in self.fees:
            return acquirer, self.fees[acquirer]
        return self.default_acquirer, self.fees.get(self.default_acquirer, AcquirerFee())


@dataclass(frozen=True)
class PeriodBreakdown:
    """One aggregate quantity expressed over all eight period windows."""

    today: Decimal = ZERO
    seven_days: Decimal = ZERO
    fifteen_days: Decimal = ZERO
    thirty_days: Decimal = ZERO
    this_month: Decimal = ZERO
    last_month: Decimal = ZERO
    this_year: Decimal = ZERO
    total: Decimal = ZERO

    def get(self, tag: PeriodTag) -> Decimal:
        return getattr(self, tag.field_name)

    @classmethod
    def from_totals(cls, totals: Mapping[PeriodTag, Decimal]) -> "PeriodBreakdown":
        return cls(**{tag.field_name: totals.get(tag, ZERO) for tag in PeriodTag})


@dataclass(frozen=True)
class PeriodData:
    """Count, acquirer cost and processed volume for one acquirer and period."""

    count: int = 0
    cost: Decimal = ZERO
    volume: Decimal = ZERO


@dataclass(frozen=True)
class AcquirerPeriodData:
    """Per-acquirer figures for the subset of periods tracked per acquirer."""

    today: PeriodData = PeriodData()
    seven_days: PeriodData = PeriodData()
    this_month: PeriodData = PeriodData()
    total: PeriodData = PeriodData()

    def get(self, tag: PeriodTag) -> PeriodData:
        if tag not in ACQUIRER_PERIOD_TAGS:
            raise KeyError(f"Period '{tag.value}' is not tracked per acquirer")
        return getattr(self, tag.field_name)


@dataclass(frozen=True)
class ProfitStats:
    """Aggregate revenue result for one snapshot."""

    net: PeriodBreakdown = PeriodBreakdown()
    gross: PeriodBreakdown = PeriodBreakdown()
    percentage_revenue: PeriodBreakdown = PeriodBreakdown()
    fixed_revenue: PeriodBreakdown = PeriodBreakdown()
    acquirer_costs: PeriodBreakdown = PeriodBreakdown()
    acquirer_breakdown: Mapping[str, AcquirerPeriodData] = field(
        default_factory=lambda: MappingProxyType({})
    )
    transaction_count: int = 0
    average_profit: Decimal = ZERO
    average_daily_profit: Decimal = ZERO
    monthly_projection: Decimal = ZERO
    trend_percentage: Decimal = ZERO
    month_over_month_change: Decimal = ZERO
    days_with_data: int = 0

    @property
    def today(self) -> Decimal:
        return self.net.today

    @property
    def seven_days(self) -> Decimal:
        return self.net.seven_days

    @property
    def fifteen_days(self) -> Decimal:
        return self.net.fifteen_days

    @property
    def thirty_days(self) -> Decimal:
        return self.net.thirty_days

    @property
    def this_month(self) -> Decimal:
        return self.net.this_month

    @property
    def last_month(self) -> Decimal:
        return self.net.last_month

    @property
    def this_year(self) -> Decimal:
        return self.net.this_year

    @property
    def total(self) -> Decimal:
        return self.net.total


@dataclass(frozen=True)
class UserProfitRanking:
    """Revenue a single user generated for the platform in one period."""

    identifier: str
    total_profit: Decimal
    transaction_count: int
    average_profit: Decimal


@dataclass(frozen=True)
class GoalProgress:
    """Monthly goal progress.

    ``progress_percent`` is None when no goal is configured.
    """

    goal: Decimal
    current: Decimal
    progress_percent: Optional[Decimal]
    remaining: Decimal
    achieved: bool


@dataclass(frozen=True)
class ChartPoint:
    """One point of a profit chart."""

    label: str
    key: str
    net_profit: Decimal = ZERO
    paid_count: int = 0
    generated_count: int = 0


@dataclass(frozen=True)
class DailyBreakdown:
    """Totals for one calendar day of a custom range."""

    date: date
    gross: Decimal
    net: Decimal
    count: int


@dataclass(frozen=True)
class RangeStats:
    """Totals for an inclusive calendar-date range."""

    start_date: date
    end_date: date
    gross: Decimal
    percentage_revenue: Decimal
    fixed_revenue: Decimal
    acquirer_cost: Decimal
    net_profit: Decimal
    transaction_count: int
    daily_breakdown: tuple[DailyBreakdown, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    """Immutable input of one aggregation run."""

    transactions: tuple[Transaction, ...]
    fee_config: AcquirerFeeConfig
    monthly_goal: Decimal
    now: datetime
