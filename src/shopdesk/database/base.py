"""Abstract database interface.

Every operation either returns its result or raises: ``ConflictError`` for
constraint violations, ``NotFoundError`` for missing rows addressed by id and
``DataAccessError`` for any other backend failure.
"""

from abc import ABC, abstractmethod
from typing import Optional, Iterable
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain services
from shopdesk.domain.entities import (
    Shop,
    Supply,
    Order,
    IncomeRecord,
    WeeklyBudget,
)


class Database(ABC):
    """Abstract database interface for shopdesk."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Shop operations
    @abstractmethod
    def create_shop(self, name: str) -> int:
        """Create a shop. Returns shop ID."""
        pass

    @abstractmethod
    def get_shop(self, shop_id: int) -> Optional[Shop]:
        """Get shop by ID."""
        pass

    @abstractmethod
    def get_shop_by_name(self, name: str) -> Optional[Shop]:
        """Get shop by exact name."""
        pass

    @abstractmethod
    def list_shops(self) -> list[Shop]:
        """List all shops ordered by name."""
        pass

    @abstractmethod
    def delete_shop(self, shop_id: int) -> None:
        """Delete a shop row (records referencing it by name are kept)."""
        pass

    @abstractmethod
    def list_shop_names_in_use(self) -> list[str]:
        """Distinct shop names referenced by supplies, orders and income records."""
        pass

    # Supply operations
    @abstractmethod
    def create_supply(self, name: str, quantity: Decimal, phone_number: str, shop: str) -> int:
        """Create a supply. Returns supply ID."""
        pass

    @abstractmethod
    def get_supply(self, supply_id: int) -> Optional[Supply]:
        """Get supply by ID."""
        pass

    @abstractmethod
    def list_supplies(self, shop: Optional[str] = None) -> list[Supply]:
        """List supplies, optionally for one shop."""
        pass

    @abstractmethod
    def update_supply(
        self,
        supply_id: int,
        name: Optional[str] = None,
        quantity: Optional[Decimal] = None,
        phone_number: Optional[str] = None,
        shop: Optional[str] = None,
    ) -> None:
        """Patch supply fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_supply(self, supply_id: int) -> None:
        """Delete a supply and the orders linked to it."""
        pass

    # Order operations
    @abstractmethod
    def create_order(
        self,
        supply_id: Optional[int],
        supply_name: str,
        order_date: date,
        ordered_by: str,
        contact_person: str,
        order_amount: Decimal,
        amount_delivered: Decimal,
        delivery_date: Optional[date],
        shop: str,
        notes: Optional[str] = None,
    ) -> int:
        """Create an order. Status is derived from the amounts. Returns order ID."""
        pass

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID."""
        pass

    @abstractmethod
    def list_orders(
        self,
        shop: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        delivered_from: Optional[date] = None,
        delivered_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[Order]:
        """List orders, newest first.

        Args:
            shop: Optional shop name filter
            start_date: Inclusive lower bound on order date
            end_date: Inclusive upper bound on order date
            delivered_from: Inclusive lower bound on delivery date
            delivered_to: Inclusive upper bound on delivery date
            limit: Optional maximum number of rows
        """
        pass

    @abstractmethod
    def update_order(self, order_id: int, **fields) -> None:
        """Patch order fields. Status is recomputed from the resulting amounts."""
        pass

    @abstractmethod
    def delete_order(self, order_id: int) -> None:
        """Delete an order."""
        pass

    @abstractmethod
    def delete_orders(self, order_ids: Iterable[int]) -> int:
        """Delete all orders whose id is in ``order_ids``. Returns count deleted."""
        pass

    @abstractmethod
    def delete_orders_before(self, before: date, shop: Optional[str] = None) -> int:
        """Delete orders with order date strictly before ``before``. Returns count."""
        pass

    # Income record operations
    @abstractmethod
    def create_income_record(
        self,
        record_date: date,
        shop: str,
        cash_amount: Decimal,
        card_machine_amount: Decimal,
        account_amount: Decimal,
        direct_deposit_amount: Decimal,
        expenses: Decimal,
        notes: Optional[str] = None,
    ) -> int:
        """Create a cash-up. Daily and net income are derived. Returns record ID."""
        pass

    @abstractmethod
    def get_income_record(self, record_id: int) -> Optional[IncomeRecord]:
        """Get cash-up by ID."""
        pass

    @abstractmethod
    def list_income_records(
        self,
        shop: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[IncomeRecord]:
        """List cash-ups, newest first, with inclusive date bounds."""
        pass

    @abstractmethod
    def update_income_record(self, record_id: int, **fields) -> None:
        """Patch cash-up fields. Daily and net income are recomputed."""
        pass

    @abstractmethod
    def delete_income_record(self, record_id: int) -> None:
        """Delete a cash-up."""
        pass

    @abstractmethod
    def delete_income_records_in_range(
        self, start_date: date, end_date: date, shop: Optional[str] = None
    ) -> int:
        """Delete cash-ups dated inside the inclusive range. Returns count."""
        pass

    # Weekly budget operations
    @abstractmethod
    def upsert_weekly_budget(self, shop: str, week_start_date: date, budget_amount: Decimal) -> int:
        """Insert or update the budget keyed by (shop, week start). Returns budget ID."""
        pass

    @abstractmethod
    def get_weekly_budget(self, shop: str, week_start_date: date) -> Optional[WeeklyBudget]:
        """Get the budget for a shop and week start."""
        pass

    @abstractmethod
    def list_weekly_budgets(
        self, shop: Optional[str] = None, week_start_date: Optional[date] = None
    ) -> list[WeeklyBudget]:
        """List budgets, optionally filtered by shop and/or week start."""
        pass

    @abstractmethod
    def delete_weekly_budget(self, budget_id: int) -> None:
        """Delete a budget."""
        pass
