"""Monthly profit goal tracking."""

from decimal import Decimal

import structlog

from pixrevenue.database.base import Database
from pixrevenue.domain.entities import ZERO, GoalProgress
from pixrevenue.domain.errors import ValidationError, negative_goal
from pixrevenue.domain.settings import MONTHLY_GOAL_KEY, resolve_monthly_goal

HUNDRED = Decimal("100")

logger = structlog.get_logger()


def goal_progress(this_month_net: Decimal, goal: Decimal) -> GoalProgress:
    """Compute progress of this month's net profit against a goal.

    Args:
        this_month_net: Net profit of the current calendar month
        goal: Monthly goal; zero means no goal is configured

    Returns:
        GoalProgress; progress_percent is None without a goal
    """
    progress = None
    if goal > 0:
        progress = min(this_month_net / goal * HUNDRED, HUNDRED)
    return GoalProgress(
        goal=goal,
        current=this_month_net,
        progress_percent=progress,
        remaining=max(goal - this_month_net, ZERO),
        achieved=goal > 0 and this_month_net >= goal,
    )


class GoalService:
    """Reads and writes the monthly goal through the settings store."""

    def __init__(self, db: Database):
        """Initialize goal service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_monthly_goal(self) -> Decimal:
        """Return the configured goal, or 0 if absent or unparseable."""
        return resolve_monthly_goal(self.db.get_settings())

    def save_monthly_goal(self, goal: Decimal) -> None:
        """Persist a new monthly goal.

        Raises:
            ValidationError: If the goal is negative
            SettingsWriteError: If the settings store rejects the write
        """
        if goal < 0:
            raise ValidationError(negative_goal(goal))
        self.db.set_setting(MONTHLY_GOAL_KEY, str(goal))
        logger.info("Monthly goal updated", goal=str(goal))

    def get_progress(self, this_month_net: Decimal) -> GoalProgress:
        return goal_progress(this_month_net, self.get_monthly_goal())
