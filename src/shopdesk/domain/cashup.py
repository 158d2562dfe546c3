"""Daily cash-up domain service and aggregation."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from shopdesk.database.base import Database
from shopdesk.domain.calculations import ZERO
from shopdesk.domain.entities import IncomeRecord, shop_filter
from shopdesk.domain.errors import (
    ConfirmationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    cash_up_not_found,
    confirmation_mismatch,
    duplicate_cash_up,
    invalid_date_range,
)
from shopdesk.utils.week import WeekWindow

logger = logging.getLogger(__name__)

# Exact phrase a user must type before a bulk date-range purge.
PURGE_CONFIRMATION_PHRASE = "DELETE ALL"


@dataclass(frozen=True)
class CashUpTotals:
    """Summed cash-up figures for a set of records."""

    income: Decimal = ZERO
    expenses: Decimal = ZERO
    net: Decimal = ZERO
    record_count: int = 0

    @property
    def average_daily_income(self) -> Decimal:
        if self.record_count == 0:
            return ZERO
        return (self.income / self.record_count).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class DailyCashUp:
    """One point of the daily income/expense series."""

    day: date
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


def summarize(records: Iterable[IncomeRecord]) -> CashUpTotals:
    """Sum income, expenses and net over records."""
    income = ZERO
    expenses = ZERO
    count = 0
    for record in records:
        income += record.daily_income
        expenses += record.expenses
        count += 1
    return CashUpTotals(income=income, expenses=expenses, net=income - expenses, record_count=count)


def _validate_amounts(**amounts: Decimal) -> None:
    for label, value in amounts.items():
        if value is None:
            raise ValidationError(f"{label.replace('_', ' ').capitalize()} is required")
        if value < 0:
            raise ValidationError(f"{label.replace('_', ' ').capitalize()} cannot be negative")


class CashUpService:
    """Service for recording and summarising daily cash-ups."""

    def __init__(self, db: Database):
        """Initialize cash-up service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_cash_up(
        self,
        record_date: date,
        shop: str,
        cash_amount: Decimal = ZERO,
        card_machine_amount: Decimal = ZERO,
        account_amount: Decimal = ZERO,
        direct_deposit_amount: Decimal = ZERO,
        expenses: Decimal = ZERO,
        notes: Optional[str] = None,
    ) -> int:
        """Record a cash-up for a shop and day.

        Returns:
            Record ID

        Raises:
            ValidationError: If shop or date is missing or an amount is negative
            ConflictError: If the shop already has a cash-up for that day
        """
        shop = (shop or "").strip()
        if not shop or shop_filter(shop) is None:
            raise ValidationError("Select a shop for the cash up")
        if record_date is None:
            raise ValidationError("Date is required")
        _validate_amounts(
            cash_amount=cash_amount,
            card_machine_amount=card_machine_amount,
            account_amount=account_amount,
            direct_deposit_amount=direct_deposit_amount,
            expenses=expenses,
        )

        if self.db.list_income_records(shop=shop, start_date=record_date, end_date=record_date):
            raise ConflictError(duplicate_cash_up(shop, record_date))

        record_id = self.db.create_income_record(
            record_date=record_date,
            shop=shop,
            cash_amount=cash_amount,
            card_machine_amount=card_machine_amount,
            account_amount=account_amount,
            direct_deposit_amount=direct_deposit_amount,
            expenses=expenses,
            notes=notes or None,
        )
        logger.info("Recorded cash up %s for %s on %s", record_id, shop, record_date)
        return record_id

    def update_cash_up(self, record_id: int, **fields) -> None:
        """Update a cash-up; daily and net income are recomputed.

        Raises:
            NotFoundError: If the record does not exist
            ConflictError: If the new (shop, date) is already taken
        """
        record = self.db.get_income_record(record_id)
        if record is None:
            raise NotFoundError(cash_up_not_found(record_id))

        amounts = {
            key: value
            for key, value in fields.items()
            if key in ("cash_amount", "card_machine_amount", "account_amount", "direct_deposit_amount", "expenses")
        }
        _validate_amounts(**amounts)

        shop = fields.get("shop", record.shop)
        day = fields.get("date", record.date)
        if (shop, day) != (record.shop, record.date):
            clashes = [
                r for r in self.db.list_income_records(shop=shop, start_date=day, end_date=day)
                if r.id != record_id
            ]
            if clashes:
                raise ConflictError(duplicate_cash_up(shop, day))

        self.db.update_income_record(record_id, **fields)

    def delete_cash_up(self, record_id: int) -> None:
        """Delete a cash-up."""
        if self.db.get_income_record(record_id) is None:
            raise NotFoundError(cash_up_not_found(record_id))
        self.db.delete_income_record(record_id)

    def get_cash_up(self, record_id: int) -> Optional[IncomeRecord]:
        return self.db.get_income_record(record_id)

    def list_cash_ups(
        self,
        shop: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[IncomeRecord]:
        """List cash-ups newest first, optionally filtered by shop and dates."""
        return self.db.list_income_records(
            shop=shop_filter(shop), start_date=start_date, end_date=end_date
        )

    def summarize_day(self, shop: Optional[str], day: date) -> CashUpTotals:
        return summarize(self.list_cash_ups(shop=shop, start_date=day, end_date=day))

    def summarize_week(self, shop: Optional[str], window: WeekWindow) -> CashUpTotals:
        return summarize(self.list_cash_ups(shop=shop, start_date=window.start, end_date=window.end))

    def summarize_all(self, shop: Optional[str]) -> CashUpTotals:
        """Totals over every cash-up recorded for the shop selection."""
        return summarize(self.list_cash_ups(shop=shop))

    def daily_series(self, shop: Optional[str], end_day: date, days: int = 7) -> list[DailyCashUp]:
        """Income and expenses per day for the ``days`` days ending on ``end_day``."""
        start_day = end_day - timedelta(days=days - 1)
        income: dict[date, Decimal] = defaultdict(lambda: ZERO)
        expenses: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for record in self.list_cash_ups(shop=shop, start_date=start_day, end_date=end_day):
            income[record.date] += record.daily_income
            expenses[record.date] += record.expenses
        return [
            DailyCashUp(day=day, income=income[day], expenses=expenses[day])
            for day in (start_day + timedelta(days=offset) for offset in range(days))
        ]

    def shop_totals(self) -> dict[str, CashUpTotals]:
        """All-time totals per shop, sorted by shop name."""
        per_shop: dict[str, list[IncomeRecord]] = defaultdict(list)
        for record in self.db.list_income_records():
            per_shop[record.shop].append(record)
        return {shop: summarize(per_shop[shop]) for shop in sorted(per_shop)}

    def purge_range(
        self,
        start_date: date,
        end_date: date,
        confirmation: str,
        shop: Optional[str] = None,
    ) -> int:
        """Delete every cash-up in an inclusive date range.

        Raises:
            ConfirmationError: Unless ``confirmation`` is exactly PURGE_CONFIRMATION_PHRASE
            ValidationError: If start_date is after end_date
        """
        if confirmation != PURGE_CONFIRMATION_PHRASE:
            raise ConfirmationError(confirmation_mismatch(PURGE_CONFIRMATION_PHRASE))
        if start_date > end_date:
            raise ValidationError(invalid_date_range())
        count = self.db.delete_income_records_in_range(start_date, end_date, shop=shop_filter(shop))
        logger.warning("Purged %d cash up record(s) from %s to %s", count, start_date, end_date)
        return count

