"""Tests for the SQLAlchemy accessor returning domain models."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from shopdesk.database import sqlalchemy_db
from shopdesk.domain import entities
from shopdesk.domain.errors import ConflictError, DataAccessError, NotFoundError, ValidationError


class TestDatabaseInterface:
    """The accessor returns domain entities and recomputes derived fields."""

    def test_shop_round_trip(self, temp_db):
        shop_id = temp_db.create_shop(name="Claremont")

        shop = temp_db.get_shop(shop_id)
        assert isinstance(shop, entities.Shop)
        assert shop.name == "Claremont"
        assert isinstance(shop.created_at, datetime)
        assert temp_db.get_shop_by_name("Claremont").id == shop_id

    def test_duplicate_shop_name_is_conflict(self, temp_db):
        temp_db.create_shop(name="Claremont")

        with pytest.raises(ConflictError):
            temp_db.create_shop(name="Claremont")

        # The session is usable again after the rollback
        assert [s.name for s in temp_db.list_shops()] == ["Claremont"]

    def test_order_status_is_derived_on_write(self, temp_db):
        supply_id = temp_db.create_supply("Milk", Decimal("4"), "021", "A")
        order_id = temp_db.create_order(
            supply_id=supply_id,
            supply_name="Milk",
            order_date=date(2024, 1, 15),
            ordered_by="Thandi",
            contact_person="021",
            order_amount=Decimal("100"),
            amount_delivered=Decimal("0"),
            delivery_date=None,
            shop="A",
        )

        order = temp_db.get_order(order_id)
        assert isinstance(order, entities.Order)
        assert order.status is entities.OrderStatus.PENDING
        assert isinstance(order.order_amount, Decimal)

        temp_db.update_order(order_id, amount_delivered=Decimal("100"))
        assert temp_db.get_order(order_id).status is entities.OrderStatus.DELIVERED

    def test_update_order_rejects_derived_fields(self, temp_db):
        with pytest.raises(ValidationError):
            temp_db.update_order(1, status="Delivered")

    def test_income_is_derived_on_write(self, temp_db):
        record_id = temp_db.create_income_record(
            record_date=date(2024, 1, 15),
            shop="A",
            cash_amount=Decimal("120.50"),
            card_machine_amount=Decimal("80"),
            account_amount=Decimal("10"),
            direct_deposit_amount=Decimal("5"),
            expenses=Decimal("60.25"),
        )

        record = temp_db.get_income_record(record_id)
        assert isinstance(record, entities.IncomeRecord)
        assert record.daily_income == Decimal("215.50")
        assert record.net_income == Decimal("155.25")

        temp_db.update_income_record(record_id, expenses=Decimal("0"))
        assert temp_db.get_income_record(record_id).net_income == Decimal("215.50")

    def test_shop_names_in_use(self, temp_db):
        temp_db.create_supply("Milk", Decimal("4"), "021", "B")
        temp_db.create_income_record(
            record_date=date(2024, 1, 15),
            shop="C",
            cash_amount=Decimal("1"),
            card_machine_amount=Decimal("0"),
            account_amount=Decimal("0"),
            direct_deposit_amount=Decimal("0"),
            expenses=Decimal("0"),
        )

        assert temp_db.list_shop_names_in_use() == ["B", "C"]

    def test_weekly_budget_upsert(self, temp_db):
        first = temp_db.upsert_weekly_budget("A", date(2024, 1, 15), Decimal("100"))
        second = temp_db.upsert_weekly_budget("A", date(2024, 1, 15), Decimal("250"))

        assert first == second
        budget = temp_db.get_weekly_budget("A", date(2024, 1, 15))
        assert isinstance(budget, entities.WeeklyBudget)
        assert budget.budget_amount == Decimal("250")

    def test_missing_rows_raise_not_found(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_shop(1)
        with pytest.raises(NotFoundError):
            temp_db.delete_order(1)
        with pytest.raises(NotFoundError):
            temp_db.update_income_record(1, notes="x")
        with pytest.raises(NotFoundError):
            temp_db.delete_weekly_budget(1)

    def test_not_null_violation_is_not_a_conflict(self, temp_db):
        with pytest.raises(ValidationError, match="invalid record") as excinfo:
            temp_db.create_supply("Milk", Decimal("4"), None, "A")

        assert not isinstance(excinfo.value, ConflictError)
        assert temp_db.list_supplies() == []

    def test_missing_driver_is_data_access_error(self, monkeypatch):
        def missing_driver(database_url):
            raise ModuleNotFoundError("No module named 'psycopg2'")

        monkeypatch.setattr(sqlalchemy_db, "create_session_factory", missing_driver)

        with pytest.raises(DataAccessError, match="psycopg2"):
            sqlalchemy_db.SQLAlchemyDatabase("postgresql+psycopg2://shop@localhost/shopdesk")
