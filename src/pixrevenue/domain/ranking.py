"""User revenue leaderboard."""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from pixrevenue.domain.entities import (
    UNKNOWN_USER,
    ZERO,
    RankingPeriod,
    Transaction,
    UserProfitRanking,
)
from pixrevenue.domain.errors import ValidationError
from pixrevenue.domain.fees import FeeCalculator
from pixrevenue.domain.periods import PeriodClassifier
from pixrevenue.domain.timezone import TimeZoneBucketer

DEFAULT_LIMIT = 10


class RankingBuilder:
    """Ranks users by the platform fee revenue they generated.

    The ranking uses gross profit (platform fee), not net margin, so it does
    not depend on acquirer fees.
    """

    def __init__(self, bucketer: Optional[TimeZoneBucketer] = None):
        self.bucketer = bucketer or TimeZoneBucketer()

    def rank(
        self,
        transactions: Iterable[Transaction],
        period: RankingPeriod,
        now: datetime,
        limit: int = DEFAULT_LIMIT,
    ) -> list[UserProfitRanking]:
        """Build the leaderboard for one period.

        Args:
            transactions: Transactions of the snapshot, in any status
            period: Period selector
            now: Reference instant of the snapshot
            limit: Maximum number of entries

        Returns:
            Entries sorted by total_profit, highest first. Users with equal
            totals keep the order in which they first appear.

        Raises:
            ValidationError: If limit is negative
        """
        if limit < 0:
            raise ValidationError(f"Ranking limit must not be negative (got {limit})")

        classifier = PeriodClassifier(now, self.bucketer)
        tag = period.tag
        totals: dict[str, Decimal] = {}
        counts: dict[str, int] = {}

        for txn in transactions:
            if not txn.is_paid:
                continue
            if tag not in classifier.classify(txn.classification_instant):
                continue
            identifier = txn.user_email or UNKNOWN_USER
            # Gross only: the acquirer table is irrelevant here.
            profit = FeeCalculator.percentage_fee(txn) + FeeCalculator.fixed_fee(txn)
            totals[identifier] = totals.get(identifier, ZERO) + profit
            counts[identifier] = counts.get(identifier, 0) + 1

        rankings = [
            UserProfitRanking(
                identifier=identifier,
                total_profit=total,
                transaction_count=counts[identifier],
                average_profit=total / counts[identifier],
            )
            for identifier, total in totals.items()
        ]
        rankings.sort(key=lambda entry: entry.total_profit, reverse=True)
        return rankings[:limit]
