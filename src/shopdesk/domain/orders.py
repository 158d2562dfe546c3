"""Purchase order domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from shopdesk.database.base import Database
from shopdesk.domain.calculations import ZERO
from shopdesk.domain.entities import Order, shop_filter
from shopdesk.domain.errors import (
    ConfirmationError,
    NotFoundError,
    ValidationError,
    confirmation_mismatch,
    order_not_found,
    supply_not_found,
)

logger = logging.getLogger(__name__)

# Exact phrase a user must type before purging old orders.
PURGE_CONFIRMATION_PHRASE = "DELETE ALL"


def _check_amounts(order_amount: Optional[Decimal], amount_delivered: Optional[Decimal]) -> None:
    if order_amount is not None and order_amount < 0:
        raise ValidationError("Order amount cannot be negative")
    if amount_delivered is not None and amount_delivered < 0:
        raise ValidationError("Amount delivered cannot be negative")


class OrderService:
    """Service for placing and tracking orders."""

    def __init__(self, db: Database):
        """Initialize order service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_order(
        self,
        supply_id: int,
        order_date: date,
        ordered_by: str,
        order_amount: Decimal,
        amount_delivered: Decimal = ZERO,
        delivery_date: Optional[date] = None,
        contact_person: Optional[str] = None,
        shop: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Place an order for an existing supply.

        The supply name is copied onto the order; shop and contact person
        default to the supply's shop and phone number. Status is derived from
        the amounts by the accessor.

        Args:
            supply_id: Supply being ordered
            order_date: Date the order was placed
            ordered_by: Person placing the order
            order_amount: Amount ordered
            amount_delivered: Amount delivered so far
            delivery_date: Date of delivery, if any
            contact_person: Supplier contact (defaults to the supply's phone number)
            shop: Ordering shop (defaults to the supply's shop)
            notes: Optional free text

        Returns:
            Order ID

        Raises:
            NotFoundError: If the supply does not exist
            ValidationError: If a required field is missing or an amount is negative
        """
        supply = self.db.get_supply(supply_id)
        if supply is None:
            raise NotFoundError(supply_not_found(supply_id))
        if order_date is None:
            raise ValidationError("Order date is required")
        ordered_by = (ordered_by or "").strip()
        if not ordered_by:
            raise ValidationError("Ordered by is required")
        if order_amount is None:
            raise ValidationError("Order amount is required")
        if amount_delivered is None:
            amount_delivered = ZERO
        _check_amounts(order_amount, amount_delivered)

        order_id = self.db.create_order(
            supply_id=supply.id,
            supply_name=supply.name,
            order_date=order_date,
            ordered_by=ordered_by,
            contact_person=(contact_person or "").strip() or supply.phone_number,
            order_amount=order_amount,
            amount_delivered=amount_delivered,
            delivery_date=delivery_date,
            shop=shop_filter(shop) or supply.shop,
            notes=notes or None,
        )
        logger.info("Created order %s for supply %s", order_id, supply.id)
        return order_id

    def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID.

        Returns:
            Order entity or None if not found
        """
        return self.db.get_order(order_id)

    def list_orders(
        self,
        shop: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[Order]:
        """List orders newest first, filtered by shop and order date."""
        return self.db.list_orders(
            shop=shop_filter(shop), start_date=start_date, end_date=end_date, limit=limit
        )

    def update_order(self, order_id: int, **fields) -> None:
        """Update order fields; status is recomputed from the resulting amounts.

        Changing ``supply_id`` re-copies the supply name onto the order.

        Raises:
            NotFoundError: If the order or the new supply does not exist
            ValidationError: If an amount is negative
        """
        if self.db.get_order(order_id) is None:
            raise NotFoundError(order_not_found(order_id))
        _check_amounts(fields.get("order_amount"), fields.get("amount_delivered"))

        if fields.get("supply_id") is not None:
            supply = self.db.get_supply(fields["supply_id"])
            if supply is None:
                raise NotFoundError(supply_not_found(fields["supply_id"]))
            fields.setdefault("supply_name", supply.name)

        self.db.update_order(order_id, **fields)

    def record_delivery(self, order_id: int, amount_delivered: Decimal, delivery_date: date) -> None:
        """Record what arrived for an order and when."""
        self.update_order(order_id, amount_delivered=amount_delivered, delivery_date=delivery_date)

    def delete_order(self, order_id: int) -> None:
        """Delete an order.

        Raises:
            NotFoundError: If the order does not exist
        """
        if self.db.get_order(order_id) is None:
            raise NotFoundError(order_not_found(order_id))
        self.db.delete_order(order_id)

    def delete_orders(self, order_ids: Iterable[int]) -> int:
        """Delete several orders at once.

        Returns:
            Number of orders deleted (unknown ids are ignored)
        """
        count = self.db.delete_orders(order_ids)
        logger.info("Deleted %d order(s)", count)
        return count

    def purge_orders_before(self, before: date, confirmation: str, shop: Optional[str] = None) -> int:
        """Delete every order placed before a date.

        Raises:
            ConfirmationError: Unless ``confirmation`` is exactly PURGE_CONFIRMATION_PHRASE
        """
        if confirmation != PURGE_CONFIRMATION_PHRASE:
            raise ConfirmationError(confirmation_mismatch(PURGE_CONFIRMATION_PHRASE))
        count = self.db.delete_orders_before(before, shop=shop_filter(shop))
        logger.warning("Purged %d order(s) placed before %s", count, before)
        return count
