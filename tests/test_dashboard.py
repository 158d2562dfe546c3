"""Tests for dashboard aggregation."""

from datetime import date
from decimal import Decimal

import pytest

from shopdesk.domain.dashboard import DashboardService

TODAY = date(2024, 1, 17)


@pytest.fixture
def dashboard_service(temp_db, shop_service):
    return DashboardService(temp_db, shop_service)


def test_empty_dashboard(dashboard_service):
    data = dashboard_service.build("All", TODAY)

    assert data.shop == "All"
    assert data.supply_count == 0
    assert data.pending_order_count == 0
    assert data.week_totals.income == Decimal("0")
    assert data.reconciliation.remaining == Decimal("0")
    # Monday and Tuesday have no cash-up for any default shop
    assert data.advisory.missing_days == (date(2024, 1, 15), date(2024, 1, 16))


def test_dashboard_for_one_shop(dashboard_service, sample_supply, order_service, cashup_service, budget_service):
    order_service.create_order(
        supply_id=sample_supply.id,
        order_date=date(2024, 1, 16),
        ordered_by="Thandi",
        order_amount=Decimal("90"),
        amount_delivered=Decimal("30"),
    )
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("300"))
    cashup_service.record_cash_up(
        record_date=TODAY, shop="A", cash_amount=Decimal("100"), expenses=Decimal("20")
    )
    cashup_service.record_cash_up(record_date=TODAY, shop="B", cash_amount=Decimal("999"))
    budget_service.set_budget("A", TODAY, Decimal("200"))

    data = dashboard_service.build("A", TODAY)

    assert data.supply_count == 1
    assert data.pending_order_count == 1
    assert data.pending_order_amount == Decimal("60")
    assert data.today_totals.net == Decimal("80")
    assert data.week_totals.income == Decimal("400")
    assert data.reconciliation.remaining == Decimal("110")
    assert data.advisory.message == "Shop A has missing cash up records for this week: Tue, Jan 16"
    assert len(data.recent_orders) == 1
