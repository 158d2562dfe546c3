"""Tests for cash-up recording and aggregation."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from shopdesk.domain.calculations import compute_income
from shopdesk.domain.errors import ConfirmationError, ConflictError, NotFoundError, ValidationError
from shopdesk.utils.week import week_window


def test_compute_income():
    daily, net = compute_income(
        Decimal("120.50"), Decimal("80.00"), Decimal("0"), Decimal("0"), Decimal("60.25")
    )
    assert daily == Decimal("200.50")
    assert net == Decimal("140.25")


def test_record_cash_up_derives_income(cashup_service):
    record_id = cashup_service.record_cash_up(
        record_date=date(2024, 1, 15),
        shop="A",
        cash_amount=Decimal("120.50"),
        card_machine_amount=Decimal("80.00"),
        expenses=Decimal("60.25"),
    )

    record = cashup_service.get_cash_up(record_id)
    assert record.daily_income == Decimal("200.50")
    assert record.net_income == Decimal("140.25")


def test_update_recomputes_income(cashup_service):
    record_id = cashup_service.record_cash_up(
        record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("100")
    )

    cashup_service.update_cash_up(record_id, expenses=Decimal("30"), card_machine_amount=Decimal("50"))

    record = cashup_service.get_cash_up(record_id)
    assert record.daily_income == Decimal("150.00")
    assert record.net_income == Decimal("120.00")


def test_duplicate_shop_and_day_rejected(cashup_service):
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("10"))

    with pytest.raises(ConflictError):
        cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("20"))

    # Another shop on the same day is fine
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="B", cash_amount=Decimal("20"))


def test_invalid_cash_ups_rejected(cashup_service):
    with pytest.raises(ValidationError):
        cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="All")
    with pytest.raises(ValidationError):
        cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="A", expenses=Decimal("-1"))
    with pytest.raises(NotFoundError):
        cashup_service.update_cash_up(999, expenses=Decimal("1"))


def test_day_and_week_summaries(cashup_service):
    for offset, cash in enumerate(["100", "200", "300"]):
        cashup_service.record_cash_up(
            record_date=date(2024, 1, 15) + timedelta(days=offset),
            shop="A",
            cash_amount=Decimal(cash),
            expenses=Decimal("10"),
        )
    cashup_service.record_cash_up(record_date=date(2024, 1, 16), shop="B", cash_amount=Decimal("50"))
    cashup_service.record_cash_up(record_date=date(2024, 1, 22), shop="A", cash_amount=Decimal("999"))

    day = cashup_service.summarize_day(None, date(2024, 1, 16))
    assert day.income == Decimal("250.00")
    assert day.record_count == 2

    week = cashup_service.summarize_week("A", week_window(date(2024, 1, 15)))
    assert week.income == Decimal("600.00")
    assert week.expenses == Decimal("30.00")
    assert week.net == Decimal("570.00")
    assert week.average_daily_income == Decimal("200.00")


def test_daily_series_fills_empty_days(cashup_service):
    cashup_service.record_cash_up(record_date=date(2024, 1, 20), shop="A", cash_amount=Decimal("40"))

    series = cashup_service.daily_series("A", date(2024, 1, 21), days=7)

    assert [p.day for p in series][0] == date(2024, 1, 15)
    assert len(series) == 7
    assert series[5].income == Decimal("40.00")
    assert series[0].income == Decimal("0")


def test_shop_totals(cashup_service):
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="B", cash_amount=Decimal("40"))
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("10"))

    totals = cashup_service.shop_totals()

    assert list(totals) == ["A", "B"]
    assert totals["B"].income == Decimal("40.00")


def test_purge_range_requires_exact_phrase(cashup_service):
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("10"))
    cashup_service.record_cash_up(record_date=date(2024, 1, 20), shop="A", cash_amount=Decimal("10"))

    with pytest.raises(ConfirmationError):
        cashup_service.purge_range(date(2024, 1, 1), date(2024, 1, 31), "delete all")
    with pytest.raises(ValidationError, match="Start date must be before end date"):
        cashup_service.purge_range(date(2024, 1, 31), date(2024, 1, 1), "DELETE ALL")

    assert cashup_service.purge_range(date(2024, 1, 14), date(2024, 1, 16), "DELETE ALL") == 1
    assert len(cashup_service.list_cash_ups()) == 1


def test_summarize_all_covers_every_week(cashup_service):
    cashup_service.record_cash_up(record_date=date(2023, 3, 1), shop="A", cash_amount=Decimal("100"))
    cashup_service.record_cash_up(
        record_date=date(2024, 1, 15), shop="A", cash_amount=Decimal("300"), expenses=Decimal("40")
    )
    cashup_service.record_cash_up(record_date=date(2024, 1, 15), shop="B", cash_amount=Decimal("50"))

    totals = cashup_service.summarize_all("A")

    assert totals.income == Decimal("400.00")
    assert totals.net == Decimal("360.00")
    assert totals.average_daily_income == Decimal("200.00")
    assert cashup_service.summarize_all("All").record_count == 3
