"""Shared pytest fixtures for pixrevenue tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
from itertools import count
import pytest
from dateutil import tz

from pixrevenue.database.factories import create_sqlite_database
from pixrevenue.domain.entities import (
    AcquirerFee,
    AcquirerFeeConfig,
    Transaction,
    TransactionStatus,
)
from pixrevenue.domain.goals import GoalService
from pixrevenue.domain.revenue import RevenueService
from pixrevenue.domain.settings import SettingsService
from pixrevenue.domain.timezone import TimeZoneBucketer
from pixrevenue.domain.transaction import TransactionService

SAO_PAULO = tz.gettz("America/Sao_Paulo")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def now():
    """Fixed reference instant: 2024-05-15 12:00 in São Paulo (15:00 UTC)."""
    return datetime(2024, 5, 15, 12, 0, tzinfo=SAO_PAULO)


@pytest.fixture
def sao_paulo():
    return SAO_PAULO


@pytest.fixture
def bucketer():
    return TimeZoneBucketer("America/Sao_Paulo")


@pytest.fixture
def fee_config():
    """Scenario fee table: acquirer A costs 2%, acquirer B costs 0.50 fixed."""
    return AcquirerFeeConfig(
        fees={
            "a": AcquirerFee(rate=Decimal("2"), fixed=Decimal("0")),
            "b": AcquirerFee(rate=Decimal("0"), fixed=Decimal("0.5")),
        },
        default_acquirer="a",
    )


@pytest.fixture
def make_txn(now):
    """Factory for domain transactions; paid at ``now`` unless told otherwise."""
    ids = count(1)

    def _make(
        amount="100",
        status=TransactionStatus.PAID,
        created_at=None,
        paid_at=None,
        fee_percentage="5",
        fee_fixed=None,
        acquirer=None,
        user_email=None,
    ):
        created_at = created_at if created_at is not None else now
        if status is TransactionStatus.PAID and paid_at is None:
            paid_at = created_at
        return Transaction(
            id=next(ids),
            amount=Decimal(amount),
            status=status,
            created_at=created_at,
            paid_at=paid_at,
            fee_percentage=Decimal(fee_percentage) if fee_percentage is not None else None,
            fee_fixed=Decimal(fee_fixed) if fee_fixed is not None else None,
            acquirer=acquirer,
            user_email=user_email,
        )

    return _make


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def revenue_service(temp_db, bucketer):
    """Create a RevenueService with a temporary database."""
    return RevenueService(temp_db, bucketer=bucketer)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
