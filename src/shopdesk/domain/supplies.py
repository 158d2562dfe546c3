"""Supply (inventory) domain service."""

from decimal import Decimal
from typing import Optional

from shopdesk.database.base import Database
from shopdesk.domain.entities import Supply, shop_filter
from shopdesk.domain.errors import NotFoundError, ValidationError, supply_not_found


def _require_text(value: Optional[str], label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required")
    return value


def _require_quantity(quantity: Optional[Decimal]) -> Decimal:
    if quantity is None:
        raise ValidationError("Quantity is required")
    if quantity < 0:
        raise ValidationError("Quantity cannot be negative")
    return quantity


class SupplyService:
    """Service for managing supplies."""

    def __init__(self, db: Database):
        """Initialize supply service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_supply(self, name: str, quantity: Decimal, phone_number: str, shop: str) -> int:
        """Create a supply for a shop.

        Args:
            name: Supply name
            quantity: Quantity on hand (not negative)
            phone_number: Supplier contact number
            shop: Owning shop (a concrete shop, not "All")

        Returns:
            Supply ID

        Raises:
            ValidationError: If a field is missing or the quantity is negative
        """
        name = _require_text(name, "Name")
        phone_number = _require_text(phone_number, "Phone number")
        shop = _require_text(shop, "Shop")
        if shop_filter(shop) is None:
            raise ValidationError("Select a shop for the supply")
        quantity = _require_quantity(quantity)

        return self.db.create_supply(name=name, quantity=quantity, phone_number=phone_number, shop=shop)

    def get_supply(self, supply_id: int) -> Optional[Supply]:
        """Get supply by ID.

        Returns:
            Supply entity or None if not found
        """
        return self.db.get_supply(supply_id)

    def list_supplies(self, shop: Optional[str] = None) -> list[Supply]:
        """List supplies for a shop, or for every shop when ``shop`` is None/"All"."""
        return self.db.list_supplies(shop=shop_filter(shop))

    def update_supply(
        self,
        supply_id: int,
        name: Optional[str] = None,
        quantity: Optional[Decimal] = None,
        phone_number: Optional[str] = None,
        shop: Optional[str] = None,
    ) -> None:
        """Update a supply; fields left as None are unchanged.

        Renaming a supply also renames it on its orders.

        Raises:
            NotFoundError: If the supply does not exist
            ValidationError: If a given field is blank or the quantity is negative
        """
        if self.db.get_supply(supply_id) is None:
            raise NotFoundError(supply_not_found(supply_id))
        if name is not None:
            name = _require_text(name, "Name")
        if phone_number is not None:
            phone_number = _require_text(phone_number, "Phone number")
        if shop is not None:
            shop = _require_text(shop, "Shop")
        if quantity is not None:
            quantity = _require_quantity(quantity)

        self.db.update_supply(
            supply_id, name=name, quantity=quantity, phone_number=phone_number, shop=shop
        )

    def delete_supply(self, supply_id: int) -> None:
        """Delete a supply together with the orders placed for it.

        Raises:
            NotFoundError: If the supply does not exist
        """
        if self.db.get_supply(supply_id) is None:
            raise NotFoundError(supply_not_found(supply_id))
        self.db.delete_supply(supply_id)
