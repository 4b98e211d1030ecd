"""Resolution of key-value admin settings into engine configuration."""

from decimal import Decimal
from typing import Mapping, Optional

import structlog

from pixrevenue.database.base import Database
from pixrevenue.domain.entities import (
    DEFAULT_ACQUIRER,
    ZERO,
    AcquirerFee,
    AcquirerFeeConfig,
)
from pixrevenue.domain.errors import ValidationError
from pixrevenue.utils.amount_parser import parse_amount

KNOWN_ACQUIRERS = ("ativus", "spedpay", "valorion", "inter")

FEE_RATE_SUFFIX = "_fee_rate"
FIXED_FEE_SUFFIX = "_fixed_fee"
DEFAULT_ACQUIRER_KEY = "default_acquirer"
MONTHLY_GOAL_KEY = "monthly_profit_goal"

logger = structlog.get_logger()


def fee_rate_key(acquirer: str) -> str:
    return f"{acquirer}{FEE_RATE_SUFFIX}"


def fixed_fee_key(acquirer: str) -> str:
    return f"{acquirer}{FIXED_FEE_SUFFIX}"


def parse_setting_decimal(key: str, value: Optional[str]) -> Decimal:
    """Parse a numeric setting, resolving absent or bad values to 0."""
    if value is None or not value.strip():
        return ZERO
    try:
        parsed = parse_amount(value)
    except ValueError:
        logger.warning("Ignoring unparseable numeric setting", key=key, value=value)
        return ZERO
    return parsed


def configured_acquirers(settings: Mapping[str, str]) -> list[str]:
    """Known acquirers plus any acquirer that has a fee key in settings."""
    acquirers = list(KNOWN_ACQUIRERS)
    for key in sorted(settings):
        for suffix in (FEE_RATE_SUFFIX, FIXED_FEE_SUFFIX):
            if key.endswith(suffix) and len(key) > len(suffix):
                name = key[: -len(suffix)]
                if name not in acquirers:
                    acquirers.append(name)
    return acquirers


def resolve_fee_config(settings: Mapping[str, str]) -> AcquirerFeeConfig:
    """Build the acquirer fee table from raw settings.

    Every known acquirer gets an entry; missing rate or fixed values are 0.
    Keys that do not describe an acquirer fee are ignored.
    """
    fees = {
        acquirer: AcquirerFee(
            rate=parse_setting_decimal(
                fee_rate_key(acquirer), settings.get(fee_rate_key(acquirer))
            ),
            fixed=parse_setting_decimal(
                fixed_fee_key(acquirer), settings.get(fixed_fee_key(acquirer))
            ),
        )
        for acquirer in configured_acquirers(settings)
    }
    default_acquirer = (settings.get(DEFAULT_ACQUIRER_KEY) or "").strip()
    return AcquirerFeeConfig(
        fees=fees,
        default_acquirer=default_acquirer or DEFAULT_ACQUIRER,
    )


def resolve_monthly_goal(settings: Mapping[str, str]) -> Decimal:
    goal = parse_setting_decimal(MONTHLY_GOAL_KEY, settings.get(MONTHLY_GOAL_KEY))
    return max(goal, ZERO)


class SettingsService:
    """Service for reading and editing acquirer fee settings."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_fee_config(self) -> AcquirerFeeConfig:
        return resolve_fee_config(self.db.get_settings())

    def list_settings(self) -> dict[str, str]:
        return self.db.get_settings()

    def set_acquirer_fee(
        self,
        acquirer: str,
        rate: Optional[Decimal] = None,
        fixed: Optional[Decimal] = None,
    ) -> None:
        """Update the fee rate and/or fixed fee of an acquirer.

        Raises:
            ValidationError: If the acquirer name is empty, nothing is given
                to update, or a value is negative
            SettingsWriteError: If the settings store rejects the write
        """
        acquirer = _normalize_acquirer(acquirer)
        if rate is None and fixed is None:
            raise ValidationError("Provide a rate, a fixed fee, or both")
        if rate is not None and rate < 0:
            raise ValidationError(f"Fee rate must not be negative (got {rate})")
        if fixed is not None and fixed < 0:
            raise ValidationError(f"Fixed fee must not be negative (got {fixed})")
        if rate is not None:
            self.db.set_setting(fee_rate_key(acquirer), str(rate))
        if fixed is not None:
            self.db.set_setting(fixed_fee_key(acquirer), str(fixed))
        logger.info(
            "Acquirer fee updated",
            acquirer=acquirer,
            rate=str(rate) if rate is not None else None,
            fixed=str(fixed) if fixed is not None else None,
        )

    def set_default_acquirer(self, acquirer: str) -> None:
        """Choose the acquirer charged for transactions without a known one."""
        acquirer = _normalize_acquirer(acquirer)
        self.db.set_setting(DEFAULT_ACQUIRER_KEY, acquirer)
        logger.info("Default acquirer updated", acquirer=acquirer)


def _normalize_acquirer(acquirer: str) -> str:
    name = (acquirer or "").strip().lower()
    if not name:
        raise ValidationError("Acquirer name must not be empty")
    return name
