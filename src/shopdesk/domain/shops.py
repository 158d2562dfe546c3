"""Shop domain service."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from shopdesk.database.base import Database
from shopdesk.domain.calculations import ZERO
from shopdesk.domain.cashup import summarize
from shopdesk.domain.entities import ALL_SHOPS, Order, OrderStatus, Shop
from shopdesk.domain.errors import (
    ConflictError,
    DataAccessError,
    NotFoundError,
    ValidationError,
    duplicate_shop_name,
    shop_not_found,
)
from shopdesk.utils.week import WeekWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopOverview:
    """Figures shown on a single shop's detail page."""

    name: str
    supply_count: int
    total_quantity: Decimal
    pending_orders: tuple[Order, ...]
    today_net_income: Decimal
    week_net_income: Decimal

    @property
    def pending_order_amount(self) -> Decimal:
        return sum((o.outstanding_amount for o in self.pending_orders), ZERO)


class ShopService:
    """Service for managing shops."""

    def __init__(self, db: Database, default_shops: Iterable[str] = ()):
        """Initialize shop service.

        Args:
            db: Database instance
            default_shops: Names used when no shop list can be loaded
        """
        self.db = db
        self.default_shops = list(default_shops)

    def create_shop(self, name: str) -> int:
        """Create a new shop.

        Args:
            name: Shop name (surrounding whitespace is ignored)

        Returns:
            Shop ID

        Raises:
            ValidationError: If the name is empty or reserved
            ConflictError: If a shop with the same name exists (case-insensitive)
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Shop name is required")
        if name.lower() == ALL_SHOPS.lower():
            raise ValidationError(f"'{ALL_SHOPS}' is reserved and cannot be used as a shop name")

        for shop in self.db.list_shops():
            if shop.name.lower() == name.lower():
                raise ConflictError(duplicate_shop_name(name))

        try:
            return self.db.create_shop(name=name)
        except ConflictError:
            raise ConflictError(duplicate_shop_name(name)) from None

    def get_shop_by_name(self, name: str) -> Optional[Shop]:
        return self.db.get_shop_by_name(name)

    def list_shops(self) -> list[Shop]:
        """List all shop rows.

        Returns:
            List of shop entities ordered by name
        """
        return self.db.list_shops()

    def delete_shop(self, name: str) -> None:
        """Delete a shop row by name.

        Supplies, orders and cash-ups that reference the name are kept.

        Raises:
            NotFoundError: If no shop has that name
        """
        shop = self.db.get_shop_by_name(name)
        if shop is None:
            raise NotFoundError(shop_not_found(name))
        self.db.delete_shop(shop.id)

    def list_shop_names(self) -> list[str]:
        """Names of every known shop, sorted.

        Combines the shops table with names already used by supplies, orders
        and cash-ups. Falls back to the configured defaults when the backend
        fails or nothing has been recorded yet.
        """
        try:
            names = {shop.name for shop in self.db.list_shops()}
            names.update(self.db.list_shop_names_in_use())
        except DataAccessError:
            logger.warning("Could not load shops; using defaults %s", self.default_shops)
            return list(self.default_shops)

        names.discard("")
        if not names:
            return list(self.default_shops)
        return sorted(names)

    def get_shop_overview(self, name: str, today: Optional[date] = None) -> ShopOverview:
        """Build the detail figures for one shop.

        Args:
            name: Shop name
            today: Reference day (defaults to today)

        Raises:
            NotFoundError: If the shop is unknown
        """
        if today is None:
            today = date.today()
        if name not in self.list_shop_names():
            raise NotFoundError(shop_not_found(name))

        supplies = self.db.list_supplies(shop=name)
        pending = [
            order for order in self.db.list_orders(shop=name)
            if order.status is not OrderStatus.DELIVERED
        ]
        window = WeekWindow.containing(today)
        week_records = self.db.list_income_records(shop=name, start_date=window.start, end_date=window.end)

        return ShopOverview(
            name=name,
            supply_count=len(supplies),
            total_quantity=sum((s.quantity for s in supplies), ZERO),
            pending_orders=tuple(pending),
            today_net_income=summarize(r for r in week_records if r.date == today).net,
            week_net_income=summarize(week_records).net,
        )
