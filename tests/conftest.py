"""Shared pytest fixtures for shopdesk tests."""

import os
import tempfile
from datetime import date, datetime
from decimal import Decimal

import pytest

from shopdesk.database.factories import create_sqlite_database
from shopdesk.domain.budgets import BudgetService
from shopdesk.domain.calculations import compute_income, order_status
from shopdesk.domain.cashup import CashUpService
from shopdesk.domain.entities import IncomeRecord, Order, WeeklyBudget
from shopdesk.domain.orders import OrderService
from shopdesk.domain.reconciliation import ReconciliationService
from shopdesk.domain.reporting import ReportService
from shopdesk.domain.shops import ShopService
from shopdesk.domain.supplies import SupplyService

DEFAULT_SHOPS = ("A", "B", "C")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

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
def shop_service(temp_db):
    """Create a ShopService with the default shops A, B and C."""
    return ShopService(temp_db, default_shops=DEFAULT_SHOPS)


@pytest.fixture
def supply_service(temp_db):
    return SupplyService(temp_db)


@pytest.fixture
def order_service(temp_db):
    return OrderService(temp_db)


@pytest.fixture
def cashup_service(temp_db):
    return CashUpService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    return BudgetService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    return ReconciliationService(temp_db)


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


@pytest.fixture
def sample_supply(supply_service):
    """Create a supply owned by shop A."""
    supply_id = supply_service.create_supply(
        name="Bread flour", quantity=Decimal("12"), phone_number="0215550100", shop="A"
    )
    return supply_service.get_supply(supply_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def app(temp_db):
    """Flask app bound to the temporary database."""
    from shopdesk.web import create_app

    return create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "DATABASE_URL": None,
            "DATABASE_PATH": temp_db.database_path,
            "DEFAULT_SHOPS": DEFAULT_SHOPS,
            "BUDGET_SPEND_BASIS": "ordered",
            "CURRENCY": "ZAR",
        }
    )


@pytest.fixture
def client(app):
    return app.test_client()


def make_order(
    order_id: int,
    order_date: date,
    order_amount: str,
    amount_delivered: str = "0",
    delivery_date: date | None = None,
    shop: str = "A",
) -> Order:
    """Build an order entity without touching the database."""
    ordered = Decimal(order_amount)
    delivered = Decimal(amount_delivered)
    return Order(
        id=order_id,
        supply_id=1,
        supply_name=f"Supply {order_id}",
        order_date=order_date,
        ordered_by="Thandi",
        contact_person="0215550100",
        order_amount=ordered,
        amount_delivered=delivered,
        delivery_date=delivery_date,
        status=order_status(ordered, delivered),
        shop=shop,
        notes=None,
        created_at=datetime(2024, 1, 1),
    )


def make_budget(budget_id: int, shop: str, week_start_date: date, amount: str) -> WeeklyBudget:
    return WeeklyBudget(
        id=budget_id,
        shop=shop,
        week_start_date=week_start_date,
        budget_amount=Decimal(amount),
        created_at=datetime(2024, 1, 1),
    )


def make_record(record_id: int, day: date, shop: str = "A", cash: str = "100") -> IncomeRecord:
    daily, net = compute_income(Decimal(cash), Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))
    return IncomeRecord(
        id=record_id,
        date=day,
        shop=shop,
        cash_amount=Decimal(cash),
        card_machine_amount=Decimal("0"),
        account_amount=Decimal("0"),
        direct_deposit_amount=Decimal("0"),
        daily_income=daily,
        expenses=Decimal("0"),
        net_income=net,
        notes=None,
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )
