"""Report building.

Reports are built as plain ``ReportDocument`` values (titles, label/value
summaries and tables of already formatted strings) so they can be rendered by
``shopdesk.printing`` without touching the database or the web layer.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from shopdesk.database.base import Database
from shopdesk.domain.calculations import ZERO
from shopdesk.domain.cashup import summarize
from shopdesk.domain.entities import ALL_SHOPS, Order, SpendBasis, shop_filter
from shopdesk.domain.errors import ValidationError, invalid_date_range
from shopdesk.domain.reconciliation import ReconciliationService, WeeklyReconciliation
from shopdesk.utils.amount_parser import format_currency
from shopdesk.utils.week import WeekWindow

NO_DATA = "No data"

SIGN_OFF_LABELS = ("Manager/Authorized Signatory", "Accounting Department")
DELIVERY_SIGNATURE_LABELS = ("Handed Over By", "Received By")


@dataclass(frozen=True)
class ReportSelection:
    """Which entity types a business report includes."""

    include_supplies: bool = True
    include_orders: bool = True
    include_income: bool = True


@dataclass(frozen=True)
class ReportFilter:
    """Shop and inclusive date range a report covers."""

    shop: str = ALL_SHOPS
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError(invalid_date_range())

    @property
    def description(self) -> str:
        parts = []
        if shop_filter(self.shop) is not None:
            parts.append(self.shop)
        if self.start_date and self.end_date:
            parts.append(f"{self.start_date.isoformat()} to {self.end_date.isoformat()}")
        elif self.start_date:
            parts.append(f"from {self.start_date.isoformat()}")
        elif self.end_date:
            parts.append(f"until {self.end_date.isoformat()}")
        return " - ".join(parts)


@dataclass(frozen=True)
class ReportSection:
    """One titled block of a report.

    ``rows`` hold display strings in ``columns`` order. A section without
    rows is rendered with ``empty_message`` instead of a table.
    """

    title: str
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()
    summary: tuple[tuple[str, str], ...] = ()
    empty_message: str = NO_DATA
    highlighted_rows: frozenset[int] = frozenset()
    total_row: tuple[str, ...] = ()
    signature_labels: tuple[str, ...] = ()
    note: Optional[str] = None
    page_break_before: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class ReportDocument:
    """A complete printable report."""

    title: str
    subtitle: str = ""
    generated_on: date = field(default_factory=date.today)
    summary: tuple[tuple[str, str], ...] = ()
    sections: tuple[ReportSection, ...] = ()
    sign_off_labels: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        slug = "-".join(self.title.lower().split())
        return f"{slug}-{self.generated_on.isoformat()}.html"


def _day(value: Optional[date]) -> str:
    return value.isoformat() if value else "N/A"


def _basis_label(basis: SpendBasis) -> str:
    if basis is SpendBasis.DELIVERED:
        return "Delivered amount"
    return "Ordered amount"


class ReportService:
    """Builds business, weekly budget and delivery documents."""

    def __init__(self, db: Database, basis: SpendBasis = SpendBasis.ORDERED, currency: str = "ZAR"):
        """Initialize report service.

        Args:
            db: Database instance
            basis: Spend basis used by budget reports
            currency: Currency code used to format amounts
        """
        self.db = db
        self.basis = basis
        self.currency = currency
        self.reconciliation = ReconciliationService(db, basis=basis)

    def _money(self, amount: Decimal) -> str:
        return format_currency(amount, self.currency)

    def build_report(
        self,
        report_filter: ReportFilter,
        selection: ReportSelection = ReportSelection(),
        today: Optional[date] = None,
    ) -> ReportDocument:
        """Build the business report for a shop and date range.

        Args:
            report_filter: Shop and date range
            selection: Entity types to include
            today: Generation date shown on the document

        Returns:
            ReportDocument with overall totals and one section per included type
        """
        shop = shop_filter(report_filter.shop)
        start, end = report_filter.start_date, report_filter.end_date

        supplies = self.db.list_supplies(shop=shop)
        orders = self.db.list_orders(shop=shop, start_date=start, end_date=end)
        records = self.db.list_income_records(shop=shop, start_date=start, end_date=end)
        totals = summarize(records)
        total_ordered = sum((o.order_amount for o in orders), ZERO)

        sections = []
        if selection.include_supplies:
            sections.append(
                ReportSection(
                    title="Supplies",
                    columns=("Name", "Amount", "Phone Number", "Shop"),
                    rows=tuple(
                        (s.name, f"{s.quantity.normalize():f}", s.phone_number, s.shop) for s in supplies
                    ),
                    summary=(("Total Supplies", str(len(supplies))),),
                )
            )
        if selection.include_orders:
            sections.append(
                ReportSection(
                    title="Orders",
                    columns=("Supply", "Date", "Contact Person", "Amount", "Status", "Shop"),
                    rows=tuple(
                        (
                            o.supply_name,
                            _day(o.order_date),
                            o.contact_person,
                            self._money(o.order_amount),
                            o.status.value,
                            o.shop,
                        )
                        for o in orders
                    ),
                    summary=(("Total Ordered", self._money(total_ordered)),),
                )
            )
        if selection.include_income:
            sections.append(
                ReportSection(
                    title="Income Records",
                    columns=("Date", "Shop", "Daily Income", "Expenses", "Net Income"),
                    rows=tuple(
                        (
                            _day(r.date),
                            r.shop,
                            self._money(r.daily_income),
                            self._money(r.expenses),
                            self._money(r.net_income),
                        )
                        for r in records
                    ),
                    summary=(
                        ("Total Income", self._money(totals.income)),
                        ("Total Expenses", self._money(totals.expenses)),
                    ),
                )
            )

        return ReportDocument(
            title="Business Report",
            subtitle=report_filter.description,
            generated_on=today or date.today(),
            summary=(
                ("Total Supplies", str(len(supplies))),
                ("Total Orders", self._money(total_ordered)),
                ("Total Income", self._money(totals.income)),
                ("Total Expenses", self._money(totals.expenses)),
                ("Net Profit", self._money(totals.net)),
            ),
            sections=tuple(sections),
        )

    def _order_detail(self, title: str, orders: Iterable[Order]) -> ReportSection:
        orders = list(orders)
        return ReportSection(
            title=f"{title} ({len(orders)})",
            columns=("Supply", "Order Date", "Ordered", "Delivered", "Pending"),
            rows=tuple(
                (
                    o.supply_name,
                    _day(o.order_date),
                    self._money(o.order_amount),
                    self._money(o.amount_delivered),
                    self._money(o.outstanding_amount),
                )
                for o in orders
            ),
        )

    def build_weekly_budget_report(
        self, shop: str, window: WeekWindow, today: Optional[date] = None
    ) -> ReportDocument:
        """Build the weekly budget report for one shop (or all shops).

        Returns:
            ReportDocument with budget overview, order summary and order
            detail sections
        """
        rec: WeeklyReconciliation = self.reconciliation.reconcile(shop=shop, window=window)
        status = "Over Budget" if rec.is_over_budget else "Under Budget"

        overview = ReportSection(
            title="Budget Overview",
            summary=(
                ("Weekly Budget", self._money(rec.budget_amount)),
                ("Budget Used", self._money(rec.spend)),
                ("Remaining Budget", self._money(rec.remaining)),
                ("Status", status),
                ("Spend Basis", _basis_label(rec.basis)),
            ),
        )
        order_summary = ReportSection(
            title="Order Summary",
            summary=(
                ("Total Orders", str(len(rec.current_week_orders))),
                ("Total Order Amount", self._money(rec.total_ordered)),
                ("Delivered Amount", self._money(rec.total_delivered)),
                ("Pending Amount", self._money(rec.total_outstanding)),
                ("Delivered Orders", str(len(rec.delivered))),
                ("Pending Orders", str(len(rec.pending) + len(rec.partial))),
                ("Savings", self._money(rec.savings)),
            ),
        )

        return ReportDocument(
            title="Weekly Budget Report",
            subtitle=f"{rec.shop if rec.shop != ALL_SHOPS else 'All shops'} - {window.label}",
            generated_on=today or date.today(),
            sections=(
                overview,
                order_summary,
                self._order_detail("Delivered Orders", rec.delivered),
                self._order_detail("Partially Delivered Orders", rec.partial),
                self._order_detail("Pending Orders", rec.pending),
            ),
        )

    def _delivery_section(self, rec: WeeklyReconciliation, page_break_before: bool) -> ReportSection:
        cross_week_ids = rec.cross_week_order_ids
        orders = rec.delivered_this_week
        cross_count = len(rec.cross_week_deliveries)
        note = None
        if cross_count:
            note = (
                f"{cross_count} order(s) highlighted were placed last week "
                f"but delivered this week."
            )
        return ReportSection(
            title=f"{rec.shop} - Weekly Delivery List",
            columns=("Supply Name", "Order Date", "Date Delivered", "Amount", "Invoice Number"),
            rows=tuple(
                (o.supply_name or "N/A", _day(o.order_date), _day(o.delivery_date), self._money(o.amount_delivered), "")
                for o in orders
            ),
            summary=(
                ("Total Orders Delivered This Week", str(len(orders))),
                ("Last Week Orders Delivered This Week", str(cross_count)),
                ("Total Amount", self._money(rec.delivered_this_week_total)),
                ("Last Week Orders Total", self._money(rec.cross_week_total)),
            ),
            highlighted_rows=frozenset(i for i, o in enumerate(orders) if o.id in cross_week_ids),
            total_row=("Total Amount", "", "", self._money(rec.delivered_this_week_total), ""),
            signature_labels=DELIVERY_SIGNATURE_LABELS,
            empty_message="No deliveries this week",
            note=note,
            page_break_before=page_break_before,
        )

    def build_delivery_list(
        self,
        shop: str,
        window: WeekWindow,
        shops: Iterable[str] = (),
        today: Optional[date] = None,
    ) -> ReportDocument:
        """Build the weekly delivery list with signature lines.

        For a single shop the document has one section. For "All" it has one
        section per shop in ``shops``, each starting on a new page.
        """
        if shop_filter(shop) is not None:
            recs = [self.reconciliation.reconcile(shop=shop, window=window)]
            subtitle = f"{shop} - Period: {window.range_string}"
        else:
            recs = self.reconciliation.reconcile_all_shops(shops, window=window)
            subtitle = f"All shops - Period: {window.range_string}"

        return ReportDocument(
            title="Weekly Delivery List",
            subtitle=subtitle,
            generated_on=today or date.today(),
            sections=tuple(self._delivery_section(rec, index > 0) for index, rec in enumerate(recs)),
            sign_off_labels=SIGN_OFF_LABELS,
        )
