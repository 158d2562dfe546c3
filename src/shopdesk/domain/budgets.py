"""Weekly budget domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from shopdesk.database.base import Database
from shopdesk.domain.entities import WeeklyBudget, shop_filter
from shopdesk.domain.errors import ValidationError
from shopdesk.utils.week import week_start


class BudgetService:
    """Service for setting shop budgets per Monday-start week."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_budget(self, shop: str, day: date, amount: Decimal) -> int:
        """Set the budget for the week containing ``day``.

        Any day of the week may be given; the budget is keyed by its Monday
        and replaces an existing budget for that shop and week.

        Args:
            shop: Shop name (a concrete shop, not "All")
            day: Any date inside the target week
            amount: Budget amount (not negative)

        Returns:
            Budget ID

        Raises:
            ValidationError: If the shop is missing or the amount is negative
        """
        shop = (shop or "").strip()
        if shop_filter(shop) is None:
            raise ValidationError("Select a shop for the budget")
        if day is None:
            raise ValidationError("Week is required")
        if amount is None or amount < 0:
            raise ValidationError("Budget amount must be zero or more")

        return self.db.upsert_weekly_budget(
            shop=shop, week_start_date=week_start(day), budget_amount=amount
        )

    def get_budget(self, shop: str, day: date) -> Optional[WeeklyBudget]:
        """Budget for a shop and the week containing ``day``, if set."""
        return self.db.get_weekly_budget(shop, week_start(day))

    def list_budgets(self, shop: Optional[str] = None, day: Optional[date] = None) -> list[WeeklyBudget]:
        """List budgets, optionally for one shop and/or the week containing ``day``."""
        return self.db.list_weekly_budgets(
            shop=shop_filter(shop),
            week_start_date=week_start(day) if day is not None else None,
        )

    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget.

        Raises:
            NotFoundError: If no budget has that ID
        """
        self.db.delete_weekly_budget(budget_id)
