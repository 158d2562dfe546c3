"""Weekly order reconciliation against shop budgets.

``reconcile_week`` is a pure function over already-fetched orders and budgets;
``ReconciliationService`` only does the fetching.

Two sets of orders are easy to confuse:

- orders *placed* in the week (``current_week_orders``), which drive the
  status buckets, spend and savings;
- orders *delivered* in the week (``delivered_this_week``), which include
  orders placed the week before (``cross_week_deliveries``).

A cross-week delivery is counted in its own bucket and again in the
delivered-this-week total, but never as placed this week.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from shopdesk.database.base import Database
from shopdesk.domain.calculations import ZERO, order_status
from shopdesk.domain.entities import (
    ALL_SHOPS,
    Order,
    OrderStatus,
    SpendBasis,
    WeeklyBudget,
    matches_shop,
    shop_filter,
)
from shopdesk.utils.week import WeekWindow, week_window


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def budget_for_week(budgets: Iterable[WeeklyBudget], week_start: date, shop: Optional[str] = None) -> Decimal:
    """Budget amount for a shop and week; summed over shops for "All", 0 when unset."""
    return _sum(
        b.budget_amount
        for b in budgets
        if b.week_start_date == week_start and matches_shop(b.shop, shop)
    )


def placed_in(orders: Iterable[Order], window: WeekWindow) -> list[Order]:
    return [o for o in orders if window.contains(o.order_date)]


def delivered_in(orders: Iterable[Order], window: WeekWindow) -> list[Order]:
    """Fully delivered orders whose delivery date falls in the window."""
    return [
        o for o in orders
        if order_status(o.order_amount, o.amount_delivered) is OrderStatus.DELIVERED
        and window.contains(o.delivery_date)
    ]


def cross_week_deliveries(orders: Iterable[Order], window: WeekWindow) -> list[Order]:
    """Orders placed the week before ``window`` and delivered inside it."""
    previous = window.previous()
    return [o for o in delivered_in(orders, window) if previous.contains(o.order_date)]


def savings(orders: Iterable[Order]) -> Decimal:
    """Amount freed by under-delivery: sum of max(0, ordered - delivered)."""
    return _sum(o.outstanding_amount for o in orders)


@dataclass(frozen=True)
class WeeklyReconciliation:
    """Orders and budget figures for one shop (or all shops) and one week."""

    shop: str
    window: WeekWindow
    basis: SpendBasis
    current_week_orders: tuple[Order, ...] = ()
    pending: tuple[Order, ...] = ()
    partial: tuple[Order, ...] = ()
    delivered: tuple[Order, ...] = ()
    delivered_this_week: tuple[Order, ...] = ()
    cross_week_deliveries: tuple[Order, ...] = ()
    orders_in_view: tuple[Order, ...] = ()
    budget_amount: Decimal = ZERO
    last_week_budget: Decimal = ZERO
    total_ordered: Decimal = ZERO
    total_delivered: Decimal = ZERO
    delivered_this_week_total: Decimal = ZERO
    cross_week_total: Decimal = ZERO
    savings: Decimal = ZERO
    has_budget: bool = field(default=False)

    @property
    def total_outstanding(self) -> Decimal:
        return self.total_ordered - self.total_delivered

    @property
    def spend(self) -> Decimal:
        if self.basis is SpendBasis.DELIVERED:
            return self.total_delivered
        return self.total_ordered

    @property
    def remaining(self) -> Decimal:
        return self.budget_amount - self.spend

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0

    @property
    def cross_week_order_ids(self) -> frozenset[int]:
        return frozenset(o.id for o in self.cross_week_deliveries)


def reconcile_week(
    orders: Iterable[Order],
    budgets: Iterable[WeeklyBudget],
    window: WeekWindow,
    shop: Optional[str] = ALL_SHOPS,
    basis: SpendBasis = SpendBasis.ORDERED,
) -> WeeklyReconciliation:
    """Reconcile a shop's orders for one week against its budget.

    Args:
        orders: Orders to consider (may span shops and weeks)
        budgets: Weekly budgets to consider
        window: Week being reconciled
        shop: Shop name, or ALL_SHOPS
        basis: Whether spend is the ordered or the delivered amount

    Returns:
        WeeklyReconciliation; every total is 0 when there is nothing to sum
    """
    shop_orders = [o for o in orders if matches_shop(o.shop, shop)]
    budgets = list(budgets)

    placed = placed_in(shop_orders, window)
    statuses = {o.id: order_status(o.order_amount, o.amount_delivered) for o in placed}
    delivered_now = delivered_in(shop_orders, window)
    cross_week = cross_week_deliveries(shop_orders, window)

    placed_ids = {o.id for o in placed}
    in_view = placed + [o for o in delivered_now if o.id not in placed_ids]

    has_budget = any(
        b.week_start_date == window.start and matches_shop(b.shop, shop) for b in budgets
    )

    return WeeklyReconciliation(
        shop=shop_filter(shop) or ALL_SHOPS,
        window=window,
        basis=basis,
        current_week_orders=tuple(placed),
        pending=tuple(o for o in placed if statuses[o.id] is OrderStatus.PENDING),
        partial=tuple(o for o in placed if statuses[o.id] is OrderStatus.PARTIAL),
        delivered=tuple(o for o in placed if statuses[o.id] is OrderStatus.DELIVERED),
        delivered_this_week=tuple(delivered_now),
        cross_week_deliveries=tuple(cross_week),
        orders_in_view=tuple(in_view),
        budget_amount=budget_for_week(budgets, window.start, shop),
        last_week_budget=budget_for_week(budgets, window.previous().start, shop),
        total_ordered=_sum(o.order_amount for o in placed),
        total_delivered=_sum(o.amount_delivered for o in placed),
        delivered_this_week_total=_sum(o.amount_delivered for o in delivered_now),
        cross_week_total=_sum(o.amount_delivered for o in cross_week),
        savings=savings(placed),
        has_budget=has_budget,
    )


class ReconciliationService:
    """Fetches orders and budgets and reconciles them per week."""

    def __init__(self, db: Database, basis: SpendBasis = SpendBasis.ORDERED):
        """Initialize reconciliation service.

        Args:
            db: Database instance
            basis: Spend basis used for budget remaining figures
        """
        self.db = db
        self.basis = basis

    def _load(self, window: WeekWindow, shop: Optional[str]):
        previous = window.previous()
        placed = self.db.list_orders(shop=shop_filter(shop), start_date=previous.start, end_date=window.end)
        delivered = self.db.list_orders(
            shop=shop_filter(shop), delivered_from=window.start, delivered_to=window.end
        )
        orders = list({o.id: o for o in placed + delivered}.values())
        budgets = [
            b
            for week in (previous.start, window.start)
            for b in self.db.list_weekly_budgets(shop=shop_filter(shop), week_start_date=week)
        ]
        return orders, budgets

    def reconcile(self, shop: Optional[str] = ALL_SHOPS, window: Optional[WeekWindow] = None) -> WeeklyReconciliation:
        """Reconcile one shop (or all shops) for a week (default: this week)."""
        if window is None:
            window = week_window()
        orders, budgets = self._load(window, shop)
        return reconcile_week(orders, budgets, window, shop=shop, basis=self.basis)

    def reconcile_all_shops(
        self, shops: Iterable[str], window: Optional[WeekWindow] = None
    ) -> list[WeeklyReconciliation]:
        """One reconciliation per shop, from a single fetch."""
        if window is None:
            window = week_window()
        orders, budgets = self._load(window, ALL_SHOPS)
        return [
            reconcile_week(orders, budgets, window, shop=shop, basis=self.basis)
            for shop in shops
        ]
