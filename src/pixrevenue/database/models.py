"""SQLAlchemy models for pixrevenue database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class PixTransaction(Base):
    """PIX transaction model.

    Timestamps are kept as the ISO-8601 strings received from the payment
    backend and parsed when mapped to domain entities.
    """

    __tablename__ = "pix_transactions"

    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default="generated")
    created_at = Column(String, nullable=False)
    paid_at = Column(String, nullable=True)
    fee_percentage = Column(Numeric(8, 4), nullable=True)
    fee_fixed = Column(Numeric(12, 2), nullable=True)
    acquirer = Column(String, nullable=True)
    user_email = Column(String, nullable=True, index=True)


class AdminSetting(Base):
    """Key-value admin setting."""

    __tablename__ = "admin_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
