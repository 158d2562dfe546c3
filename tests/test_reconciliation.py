"""Tests for weekly order reconciliation."""

from datetime import date
from decimal import Decimal

from conftest import make_budget, make_order
from shopdesk.domain.calculations import order_status
from shopdesk.domain.entities import ALL_SHOPS, OrderStatus, SpendBasis
from shopdesk.domain.reconciliation import reconcile_week
from shopdesk.utils.week import week_window

MONDAY = date(2024, 1, 15)
WINDOW = week_window(MONDAY)


def test_order_status_rule():
    assert order_status(Decimal("100"), Decimal("0")) is OrderStatus.PENDING
    assert order_status(Decimal("80"), Decimal("40")) is OrderStatus.PARTIAL
    assert order_status(Decimal("50"), Decimal("50")) is OrderStatus.DELIVERED
    assert order_status(Decimal("50"), Decimal("60")) is OrderStatus.DELIVERED


def test_status_buckets_totals_and_savings():
    orders = [
        make_order(1, date(2024, 1, 15), "100", "0"),
        make_order(2, date(2024, 1, 16), "50", "50", delivery_date=date(2024, 1, 17)),
        make_order(3, date(2024, 1, 17), "80", "40", delivery_date=date(2024, 1, 18)),
    ]

    rec = reconcile_week(orders, [], WINDOW, shop="A")

    assert [o.id for o in rec.pending] == [1]
    assert [o.id for o in rec.delivered] == [2]
    assert [o.id for o in rec.partial] == [3]
    assert rec.total_ordered == Decimal("230")
    assert rec.total_delivered == Decimal("90")
    assert rec.total_outstanding == Decimal("140")
    assert rec.savings == Decimal("140")


def test_cross_week_delivery():
    """Placed Thursday last week, delivered Tuesday this week."""
    order = make_order(7, date(2024, 1, 11), "120", "120", delivery_date=date(2024, 1, 16))

    rec = reconcile_week([order], [], WINDOW, shop="A")

    assert rec.cross_week_deliveries == (order,)
    assert rec.delivered_this_week == (order,)
    assert rec.current_week_orders == ()
    assert rec.cross_week_total == Decimal("120")
    assert rec.delivered_this_week_total == Decimal("120")
    assert rec.orders_in_view == (order,)
    assert rec.total_ordered == Decimal("0")


def test_partial_delivery_from_last_week_is_not_delivered_this_week():
    order = make_order(8, date(2024, 1, 11), "120", "60", delivery_date=date(2024, 1, 16))

    rec = reconcile_week([order], [], WINDOW, shop="A")

    assert rec.delivered_this_week == ()
    assert rec.cross_week_deliveries == ()


def test_no_orders_and_no_budget_is_all_zero():
    rec = reconcile_week([], [], WINDOW, shop="A")

    assert rec.budget_amount == Decimal("0")
    assert rec.spend == Decimal("0")
    assert rec.remaining == Decimal("0")
    assert rec.savings == Decimal("0")
    assert not rec.is_over_budget
    assert not rec.has_budget


def test_budget_remaining_by_spend_basis():
    orders = [
        make_order(1, date(2024, 1, 15), "300", "100"),
        make_order(2, date(2024, 1, 16), "200", "200", delivery_date=date(2024, 1, 16)),
    ]
    budgets = [make_budget(1, "A", MONDAY, "400")]

    ordered = reconcile_week(orders, budgets, WINDOW, shop="A", basis=SpendBasis.ORDERED)
    delivered = reconcile_week(orders, budgets, WINDOW, shop="A", basis=SpendBasis.DELIVERED)

    assert ordered.spend == Decimal("500")
    assert ordered.remaining == Decimal("-100")
    assert ordered.is_over_budget
    assert delivered.spend == Decimal("300")
    assert delivered.remaining == Decimal("100")
    assert not delivered.is_over_budget


def test_all_shops_sums_budgets_and_orders():
    orders = [
        make_order(1, date(2024, 1, 15), "100", shop="A"),
        make_order(2, date(2024, 1, 16), "50", shop="B"),
    ]
    budgets = [
        make_budget(1, "A", MONDAY, "400"),
        make_budget(2, "B", MONDAY, "100"),
        make_budget(3, "A", date(2024, 1, 8), "250"),
    ]

    rec = reconcile_week(orders, budgets, WINDOW, shop=ALL_SHOPS)
    shop_b = reconcile_week(orders, budgets, WINDOW, shop="B")

    assert rec.shop == ALL_SHOPS
    assert rec.budget_amount == Decimal("500")
    assert rec.last_week_budget == Decimal("250")
    assert rec.total_ordered == Decimal("150")
    assert shop_b.budget_amount == Decimal("100")
    assert [o.id for o in shop_b.current_week_orders] == [2]


def test_reconciliation_is_repeatable():
    orders = [
        make_order(1, date(2024, 1, 15), "100", "30"),
        make_order(2, date(2024, 1, 11), "70", "70", delivery_date=date(2024, 1, 19)),
    ]
    budgets = [make_budget(1, "A", MONDAY, "150")]

    assert reconcile_week(orders, budgets, WINDOW, shop="A") == reconcile_week(
        orders, budgets, WINDOW, shop="A"
    )


def test_service_reconciles_stored_orders(temp_db, sample_supply, order_service, budget_service, reconciliation_service):
    order_service.create_order(
        supply_id=sample_supply.id,
        order_date=date(2024, 1, 11),
        ordered_by="Thandi",
        order_amount=Decimal("120"),
        amount_delivered=Decimal("120"),
        delivery_date=date(2024, 1, 16),
    )
    order_service.create_order(
        supply_id=sample_supply.id,
        order_date=date(2024, 1, 17),
        ordered_by="Thandi",
        order_amount=Decimal("80"),
    )
    budget_service.set_budget("A", date(2024, 1, 19), Decimal("200"))

    rec = reconciliation_service.reconcile(shop="A", window=WINDOW)

    assert rec.budget_amount == Decimal("200.00")
    assert rec.total_ordered == Decimal("80.00")
    assert rec.remaining == Decimal("120.00")
    assert len(rec.cross_week_deliveries) == 1
    assert len(rec.orders_in_view) == 2

    cards = reconciliation_service.reconcile_all_shops(["A", "B"], window=WINDOW)
    assert [c.shop for c in cards] == ["A", "B"]
    assert cards[1].budget_amount == Decimal("0")
