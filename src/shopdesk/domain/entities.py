"""Domain model entities for shopdesk.

These are pure data classes representing business concepts, independent of
database schema. Derived values (order status, daily and net income) are
carried as plain fields because the accessor recomputes them on every write.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from shopdesk.domain.errors import ValidationError

# Pseudo shop name meaning "every shop" in filters and views.
ALL_SHOPS = "All"


def shop_filter(shop: Optional[str]) -> Optional[str]:
    """Translate a shop selection into a database filter value (None = all)."""
    if shop is None or shop == ALL_SHOPS or not shop.strip():
        return None
    return shop


def matches_shop(record_shop: str, shop: Optional[str]) -> bool:
    """True if a record owned by ``record_shop`` belongs to the selection."""
    selected = shop_filter(shop)
    return selected is None or record_shop == selected


class OrderStatus(str, Enum):
    """Delivery status of an order."""

    PENDING = "Pending"
    PARTIAL = "Partial"
    DELIVERED = "Delivered"


class SpendBasis(str, Enum):
    """Which order amount counts as spend against a weekly budget."""

    ORDERED = "ordered"
    DELIVERED = "delivered"


def parse_spend_basis(value: Optional[str]) -> SpendBasis:
    """Spend basis from a configuration value; blank means ``ordered``."""
    text = (value or SpendBasis.ORDERED.value).strip().lower()
    try:
        return SpendBasis(text)
    except ValueError:
        choices = ", ".join(b.value for b in SpendBasis)
        raise ValidationError(f"Invalid budget spend basis '{value}': expected one of {choices}") from None


@dataclass(frozen=True)
class Shop:
    """Shop domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Supply:
    """Inventory row owned by a shop."""

    id: int
    name: str
    quantity: Decimal
    phone_number: str
    shop: str
    created_at: datetime


@dataclass(frozen=True)
class Order:
    """Purchase order domain entity."""

    id: int
    supply_id: Optional[int]
    supply_name: str
    order_date: date
    ordered_by: str
    contact_person: str
    order_amount: Decimal
    amount_delivered: Decimal
    delivery_date: Optional[date]
    status: OrderStatus
    shop: str
    notes: Optional[str]
    created_at: datetime

    @property
    def outstanding_amount(self) -> Decimal:
        """Amount still to be delivered (never negative)."""
        return max(Decimal("0"), self.order_amount - self.amount_delivered)


@dataclass(frozen=True)
class IncomeRecord:
    """Daily cash-up record for a shop."""

    id: int
    date: date
    shop: str
    cash_amount: Decimal
    card_machine_amount: Decimal
    account_amount: Decimal
    direct_deposit_amount: Decimal
    daily_income: Decimal
    expenses: Decimal
    net_income: Decimal
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class WeeklyBudget:
    """Spending ceiling for a shop for one Monday-start week."""

    id: int
    shop: str
    week_start_date: date
    budget_amount: Decimal
    created_at: datetime
