"""Dashboard aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from shopdesk.database.base import Database
from shopdesk.domain.calculations import ZERO
from shopdesk.domain.cashup import CashUpTotals, summarize
from shopdesk.domain.entities import ALL_SHOPS, Order, OrderStatus, SpendBasis, matches_shop, shop_filter
from shopdesk.domain.missing_cashup import MissingCashUpAdvisory, find_missing_cash_ups
from shopdesk.domain.reconciliation import WeeklyReconciliation, reconcile_week
from shopdesk.domain.shops import ShopService
from shopdesk.utils.week import WeekWindow


@dataclass(frozen=True)
class Dashboard:
    """Everything shown on the dashboard for one shop selection."""

    shop: str
    today: date
    supply_count: int
    pending_orders: tuple[Order, ...]
    today_totals: CashUpTotals
    week_totals: CashUpTotals
    reconciliation: WeeklyReconciliation
    advisory: MissingCashUpAdvisory
    recent_orders: tuple[Order, ...] = ()

    @property
    def pending_order_count(self) -> int:
        return len(self.pending_orders)

    @property
    def pending_order_amount(self) -> Decimal:
        return sum((o.outstanding_amount for o in self.pending_orders), ZERO)


class DashboardService:
    """Builds dashboard figures from one round of reads."""

    def __init__(self, db: Database, shops: ShopService, basis: SpendBasis = SpendBasis.ORDERED):
        """Initialize dashboard service.

        Args:
            db: Database instance
            shops: Shop service used to resolve the shop list
            basis: Spend basis for the budget card
        """
        self.db = db
        self.shops = shops
        self.basis = basis

    def build(self, shop: Optional[str] = ALL_SHOPS, today: Optional[date] = None, recent: int = 5) -> Dashboard:
        if today is None:
            today = date.today()
        selected = shop_filter(shop)
        window = WeekWindow.containing(today)
        previous = window.previous()

        orders = self.db.list_orders(shop=selected)
        week_records = self.db.list_income_records(shop=selected, start_date=window.start, end_date=window.end)
        budgets = [
            b
            for week in (previous.start, window.start)
            for b in self.db.list_weekly_budgets(shop=selected, week_start_date=week)
        ]

        return Dashboard(
            shop=selected or ALL_SHOPS,
            today=today,
            supply_count=len(self.db.list_supplies(shop=selected)),
            pending_orders=tuple(o for o in orders if o.status is not OrderStatus.DELIVERED),
            today_totals=summarize(r for r in week_records if r.date == today),
            week_totals=summarize(week_records),
            reconciliation=reconcile_week(orders, budgets, window, shop=shop, basis=self.basis),
            advisory=find_missing_cash_ups(
                (r for r in week_records if matches_shop(r.shop, shop)),
                today,
                shop=shop,
                shops=self.shops.list_shop_names(),
            ),
            recent_orders=tuple(orders[:recent]),
        )
