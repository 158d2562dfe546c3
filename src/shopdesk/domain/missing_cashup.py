"""Detection of weekdays without a cash-up record."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from shopdesk.domain.entities import ALL_SHOPS, IncomeRecord, shop_filter
from shopdesk.utils.week import week_start


def format_day(day: date) -> str:
    """Short label such as ``Tue, Oct 13``."""
    return f"{day:%a}, {day:%b} {day.day}"


@dataclass(frozen=True)
class MissingCashUpAdvisory:
    """Days of the current week that have no cash-up yet.

    Purely informational; ``week_start`` lets a dismissal be remembered for
    the week it was shown in.
    """

    shop: str
    week_start: date
    missing_days: tuple[date, ...] = ()
    shops_missing: tuple[str, ...] = ()

    @property
    def has_missing(self) -> bool:
        return bool(self.missing_days)

    @property
    def dismissal_key(self) -> str:
        return f"{self.shop}:{self.week_start.isoformat()}"

    @property
    def message(self) -> str:
        if not self.missing_days:
            return ""
        days = ", ".join(format_day(day) for day in self.missing_days)
        if self.shop == ALL_SHOPS:
            return f"Some shops have missing cash up records for this week: {days}"
        return f"Shop {self.shop} has missing cash up records for this week: {days}"


def candidate_days(today: date) -> list[date]:
    """Days from this week's Monday up to, not including, ``today``."""
    monday = week_start(today)
    return [monday + timedelta(days=offset) for offset in range((today - monday).days)]


def find_missing_cash_ups(
    records: Iterable[IncomeRecord],
    today: date,
    shop: Optional[str] = ALL_SHOPS,
    shops: Iterable[str] = (),
) -> MissingCashUpAdvisory:
    """Find this week's past days lacking a cash-up.

    Args:
        records: Cash-up records (any shops, any dates)
        today: Reference day; it is not yet due and never flagged
        shop: Shop name, or ALL_SHOPS
        shops: Shops to check when ``shop`` is ALL_SHOPS

    Returns:
        MissingCashUpAdvisory, empty when nothing is missing
    """
    selected = shop_filter(shop)
    checked = [selected] if selected is not None else list(dict.fromkeys(shops))
    recorded = {(record.shop, record.date) for record in records}

    missing_days = []
    shops_missing = []
    for day in candidate_days(today):
        lacking = [name for name in checked if (name, day) not in recorded]
        if lacking:
            missing_days.append(day)
            shops_missing.extend(name for name in lacking if name not in shops_missing)

    return MissingCashUpAdvisory(
        shop=selected or ALL_SHOPS,
        week_start=week_start(today),
        missing_days=tuple(missing_days),
        shops_missing=tuple(shops_missing),
    )
