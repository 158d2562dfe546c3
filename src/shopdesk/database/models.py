"""SQLAlchemy models for shopdesk database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    CheckConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Shop(Base):
    """Shop model."""

    __tablename__ = "shops"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Supply(Base):
    """Supply (inventory row) model."""

    __tablename__ = "supplies"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False, default=0)
    phone_number = Column(String, nullable=False)
    # Shops are referenced by name, not id.
    shop = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    orders = relationship("Order", back_populates="supply", cascade="all, delete-orphan")


class Order(Base):
    """Purchase order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    supply_id = Column(Integer, ForeignKey("supplies.id", ondelete="CASCADE"), nullable=True)
    supply_name = Column(String, nullable=False)
    order_date = Column(Date, nullable=False, index=True)
    ordered_by = Column(String, nullable=False)
    contact_person = Column(String, nullable=False)
    order_amount = Column(Numeric(10, 2), nullable=False, default=0)
    amount_delivered = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_date = Column(Date, nullable=True)
    status = Column(String, nullable=False)
    shop = Column(String, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('Pending', 'Partial', 'Delivered')", name="ck_orders_status"),
    )

    # Relationships
    supply = relationship("Supply", back_populates="orders")


class IncomeRecord(Base):
    """Daily cash-up model."""

    __tablename__ = "income_records"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    shop = Column(String, nullable=False, index=True)
    cash_amount = Column(Numeric(10, 2), nullable=False, default=0)
    card_machine_amount = Column(Numeric(10, 2), nullable=False, default=0)
    account_amount = Column(Numeric(10, 2), nullable=False, default=0)
    direct_deposit_amount = Column(Numeric(10, 2), nullable=False, default=0)
    daily_income = Column(Numeric(10, 2), nullable=False, default=0)
    expenses = Column(Numeric(10, 2), nullable=False, default=0)
    net_income = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class WeeklyBudget(Base):
    """Weekly budget model, one row per shop and Monday."""

    __tablename__ = "weekly_budgets"

    id = Column(Integer, primary_key=True)
    shop = Column(String, nullable=False)
    week_start_date = Column(Date, nullable=False)
    budget_amount = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("shop", "week_start_date", name="uq_budget_shop_week"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
