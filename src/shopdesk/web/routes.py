# shopdesk/web/routes.py
from __future__ import annotations

from datetime import date

from flask import (
    Blueprint,
    Response,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from shopdesk.domain.budgets import BudgetService
from shopdesk.domain.cashup import CashUpService, CashUpTotals
from shopdesk.domain.cashup import PURGE_CONFIRMATION_PHRASE as CASH_UP_PURGE_PHRASE
from shopdesk.domain.dashboard import DashboardService
from shopdesk.domain.entities import ALL_SHOPS, SpendBasis, shop_filter
from shopdesk.domain.errors import DataAccessError, DomainError, NotFoundError, ValidationError
from shopdesk.domain.missing_cashup import find_missing_cash_ups
from shopdesk.domain.orders import PURGE_CONFIRMATION_PHRASE as ORDER_PURGE_PHRASE
from shopdesk.domain.orders import OrderService
from shopdesk.domain.reconciliation import ReconciliationService
from shopdesk.domain.reporting import ReportFilter, ReportSelection, ReportService
from shopdesk.domain.shops import ShopService
from shopdesk.domain.supplies import SupplyService
from shopdesk.printing import render_document
from shopdesk.utils.amount_parser import parse_amount
from shopdesk.utils.date_parser import parse_date
from shopdesk.utils.week import WeekWindow, parse_week_selection, recent_weeks, week_window

from . import get_db

main = Blueprint("main", __name__)

# Session keys
SELECTED_SHOP = "selected_shop"
SELECTED_WEEK = "selected_week"
HAS_SEEN_WEEK_PROMPT = "has_seen_week_prompt"
DISMISSED_ADVISORIES = "dismissed_advisories"


# =========================================================
# Helpers
# =========================================================
def _basis() -> SpendBasis:
    return SpendBasis(current_app.config["BUDGET_SPEND_BASIS"])


def _shop_service() -> ShopService:
    return ShopService(get_db(), default_shops=current_app.config["DEFAULT_SHOPS"])


def _report_service() -> ReportService:
    return ReportService(get_db(), basis=_basis(), currency=current_app.config["CURRENCY"])


def _fail(action: str, exc: DomainError) -> None:
    """Log and flash a failed action; the page then renders what it can."""
    if isinstance(exc, DataAccessError):
        current_app.logger.exception("%s failed", action)
    else:
        current_app.logger.info("%s rejected: %s", action, exc)
    flash(str(exc), "danger")


def _back(default_endpoint: str):
    target = request.form.get("next") or request.args.get("next")
    if target and target.startswith("/") and not target.startswith("//"):
        return redirect(target)
    return redirect(url_for(default_endpoint))


def _form_text(name: str) -> str:
    return (request.form.get(name) or "").strip()


def _form_amount(name: str, label: str, allow_blank: bool = False):
    value = request.form.get(name)
    if value is None or not value.strip():
        if allow_blank:
            return parse_amount("0")
        raise ValidationError(f"{label} is required")
    try:
        return parse_amount(value)
    except ValueError:
        raise ValidationError(f"Invalid {label.lower()}: {value}") from None


def _optional_amount(name: str, label: str):
    value = request.form.get(name)
    if value is None or not value.strip():
        return None
    return _form_amount(name, label)


def _form_date(name: str, label: str, required: bool = True) -> date | None:
    value = request.form.get(name)
    if value is None or not value.strip():
        if required:
            raise ValidationError(f"{label} is required")
        return None
    try:
        return parse_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {label.lower()}: {value}") from None


def _selected_shop() -> str:
    """Shop from ``?shop=`` (remembered in the session) or the remembered one."""
    shop = request.args.get("shop")
    if shop:
        session[SELECTED_SHOP] = shop
        return shop
    return session.get(SELECTED_SHOP, ALL_SHOPS)


def _selected_week() -> WeekWindow:
    """Week from ``?week=`` (remembered in the session), else remembered, else current."""
    value = request.args.get("week") or session.get(SELECTED_WEEK)
    if not value:
        return week_window()
    try:
        window = parse_week_selection(value)
    except ValueError:
        flash(f"Invalid week selection: {value}", "danger")
        session.pop(SELECTED_WEEK, None)
        return week_window()
    session[SELECTED_WEEK] = window.range_string
    return window


def _visible(advisory):
    if advisory is None or not advisory.has_missing:
        return None
    if advisory.dismissal_key in session.get(DISMISSED_ADVISORIES, []):
        return None
    return advisory


@main.app_context_processor
def inject_shops():
    return {
        "shop_names": _shop_service().list_shop_names(),
        "selected_shop": session.get(SELECTED_SHOP, ALL_SHOPS),
        "ALL_SHOPS": ALL_SHOPS,
        "spend_basis": current_app.config["BUDGET_SPEND_BASIS"],
    }


# =========================================================
# Dashboard / preferences
# =========================================================
@main.route("/")
def dashboard():
    shop = _selected_shop()
    data = None
    try:
        data = DashboardService(get_db(), _shop_service(), basis=_basis()).build(shop, date.today())
    except DomainError as exc:
        _fail("Load dashboard", exc)
    advisory = _visible(data.advisory) if data else None
    return render_template("dashboard.html", shop=shop, data=data, advisory=advisory)


@main.route("/shops", methods=["POST"])
def create_shop():
    try:
        _shop_service().create_shop(request.form.get("name", ""))
        flash("Shop added successfully", "success")
    except DomainError as exc:
        _fail("Add shop", exc)
    return _back("main.dashboard")


@main.route("/shop/<name>")
def shop_detail(name: str):
    try:
        overview = _shop_service().get_shop_overview(name, date.today())
    except NotFoundError:
        abort(404)
    except DomainError as exc:
        _fail("Load shop", exc)
        return redirect(url_for("main.dashboard"))
    return render_template("shop.html", overview=overview)


@main.route("/advisories/dismiss", methods=["POST"])
def dismiss_advisory():
    key = request.form.get("key")
    if key:
        dismissed = list(session.get(DISMISSED_ADVISORIES, []))
        if key not in dismissed:
            dismissed.append(key)
        session[DISMISSED_ADVISORIES] = dismissed
    return _back("main.dashboard")


@main.route("/preferences/reset", methods=["POST"])
def reset_preferences():
    for key in (SELECTED_SHOP, SELECTED_WEEK, HAS_SEEN_WEEK_PROMPT, DISMISSED_ADVISORIES):
        session.pop(key, None)
    flash("Preferences reset", "success")
    return redirect(url_for("main.dashboard"))


# =========================================================
# Supplies
# =========================================================
@main.route("/supplies")
def supplies():
    shop = _selected_shop()
    items = []
    try:
        items = SupplyService(get_db()).list_supplies(shop=shop)
    except DomainError as exc:
        _fail("Load supplies", exc)
    return render_template("supplies.html", shop=shop, supplies=items)


@main.route("/supplies", methods=["POST"])
def add_supply():
    try:
        SupplyService(get_db()).create_supply(
            name=_form_text("name"),
            quantity=_form_amount("quantity", "Quantity"),
            phone_number=_form_text("phone_number"),
            shop=_form_text("shop"),
        )
        flash("Supply added successfully", "success")
    except DomainError as exc:
        _fail("Add supply", exc)
    return redirect(url_for("main.supplies"))


@main.route("/supplies/<int:supply_id>/update", methods=["POST"])
def update_supply(supply_id: int):
    try:
        SupplyService(get_db()).update_supply(
            supply_id,
            name=_form_text("name") or None,
            quantity=_optional_amount("quantity", "Quantity"),
            phone_number=_form_text("phone_number") or None,
            shop=_form_text("shop") or None,
        )
        flash("Supply updated successfully", "success")
    except DomainError as exc:
        _fail("Update supply", exc)
    return redirect(url_for("main.supplies"))


@main.route("/supplies/<int:supply_id>/delete", methods=["POST"])
def delete_supply(supply_id: int):
    if request.form.get("confirm") != "yes":
        flash("Deletion was not confirmed", "warning")
        return redirect(url_for("main.supplies"))
    try:
        SupplyService(get_db()).delete_supply(supply_id)
        flash("Supply deleted", "success")
    except DomainError as exc:
        _fail("Delete supply", exc)
    return redirect(url_for("main.supplies"))


# =========================================================
# Orders / budgets
# =========================================================
@main.route("/orders")
def orders():
    shop = _selected_shop()
    window = _selected_week()
    rec = None
    cards = []
    supply_options = []
    try:
        service = ReconciliationService(get_db(), basis=_basis())
        rec = service.reconcile(shop=shop, window=window)
        if shop_filter(shop) is None:
            cards = service.reconcile_all_shops(_shop_service().list_shop_names(), window=window)
        else:
            cards = [rec]
        supply_options = SupplyService(get_db()).list_supplies(shop=shop)
    except DomainError as exc:
        _fail("Load orders", exc)

    return render_template(
        "orders.html",
        shop=shop,
        window=window,
        week_options=recent_weeks(count=current_app.config["WEEK_OPTIONS"]),
        rec=rec,
        cards=cards,
        supplies=supply_options,
        show_week_prompt=not session.get(HAS_SEEN_WEEK_PROMPT, False),
        purge_phrase=ORDER_PURGE_PHRASE,
    )


@main.route("/orders/week", methods=["POST"])
def select_week():
    value = request.form.get("week", "")
    try:
        session[SELECTED_WEEK] = parse_week_selection(value).range_string
    except ValueError:
        flash(f"Invalid week selection: {value}", "danger")
    session[HAS_SEEN_WEEK_PROMPT] = True
    return redirect(url_for("main.orders"))


@main.route("/orders", methods=["POST"])
def add_order():
    try:
        supply_id = request.form.get("supply_id", type=int)
        if supply_id is None:
            raise ValidationError("Select a supply")
        OrderService(get_db()).create_order(
            supply_id=supply_id,
            order_date=_form_date("order_date", "Order date"),
            ordered_by=_form_text("ordered_by"),
            order_amount=_form_amount("order_amount", "Order amount"),
            amount_delivered=_form_amount("amount_delivered", "Amount delivered", allow_blank=True),
            delivery_date=_form_date("delivery_date", "Delivery date", required=False),
            contact_person=_form_text("contact_person") or None,
            shop=_form_text("shop") or None,
            notes=_form_text("notes") or None,
        )
        flash("Order added successfully", "success")
    except DomainError as exc:
        _fail("Add order", exc)
    return redirect(url_for("main.orders"))


@main.route("/orders/<int:order_id>/update", methods=["POST"])
def update_order(order_id: int):
    try:
        fields = {
            "order_amount": _optional_amount("order_amount", "Order amount"),
            "amount_delivered": _optional_amount("amount_delivered", "Amount delivered"),
            "order_date": _form_date("order_date", "Order date", required=False),
            "delivery_date": _form_date("delivery_date", "Delivery date", required=False),
            "ordered_by": _form_text("ordered_by") or None,
            "contact_person": _form_text("contact_person") or None,
            "notes": _form_text("notes") or None,
        }
        OrderService(get_db()).update_order(
            order_id, **{key: value for key, value in fields.items() if value is not None}
        )
        flash("Order updated successfully", "success")
    except DomainError as exc:
        _fail("Update order", exc)
    return redirect(url_for("main.orders"))


@main.route("/orders/<int:order_id>/delete", methods=["POST"])
def delete_order(order_id: int):
    if request.form.get("confirm") != "yes":
        flash("Deletion was not confirmed", "warning")
        return redirect(url_for("main.orders"))
    try:
        OrderService(get_db()).delete_order(order_id)
        flash("Order deleted", "success")
    except DomainError as exc:
        _fail("Delete order", exc)
    return redirect(url_for("main.orders"))


@main.route("/orders/delete-selected", methods=["POST"])
def delete_selected_orders():
    ids = request.form.getlist("order_ids", type=int)
    if not ids:
        flash("No orders selected", "warning")
        return redirect(url_for("main.orders"))
    if request.form.get("confirm") != "yes":
        flash("Deletion was not confirmed", "warning")
        return redirect(url_for("main.orders"))
    try:
        count = OrderService(get_db()).delete_orders(ids)
        flash(f"Deleted {count} order(s)", "success")
    except DomainError as exc:
        _fail("Delete orders", exc)
    return redirect(url_for("main.orders"))


@main.route("/orders/purge", methods=["POST"])
def purge_orders():
    try:
        count = OrderService(get_db()).purge_orders_before(
            _form_date("before", "Date"),
            request.form.get("confirmation", ""),
            shop=_form_text("shop") or None,
        )
        flash(f"Deleted {count} order(s)", "success")
    except DomainError as exc:
        _fail("Delete old orders", exc)
    return redirect(url_for("main.orders"))


@main.route("/orders/budget", methods=["POST"])
def set_budget():
    try:
        day = _form_date("week", "Week", required=False) or _selected_week().start
        BudgetService(get_db()).set_budget(
            _form_text("shop"), day, _form_amount("budget_amount", "Budget amount")
        )
        flash("Budget saved", "success")
    except DomainError as exc:
        _fail("Save budget", exc)
    return redirect(url_for("main.orders"))


@main.route("/orders/budget-report/print")
def print_budget_report():
    try:
        doc = _report_service().build_weekly_budget_report(_selected_shop(), _selected_week())
    except DomainError as exc:
        _fail("Print budget report", exc)
        return redirect(url_for("main.orders"))
    return Response(render_document(doc), mimetype="text/html")


@main.route("/orders/delivery-list/print")
def print_delivery_list():
    try:
        doc = _report_service().build_delivery_list(
            _selected_shop(), _selected_week(), shops=_shop_service().list_shop_names()
        )
    except DomainError as exc:
        _fail("Print delivery list", exc)
        return redirect(url_for("main.orders"))
    return Response(render_document(doc), mimetype="text/html")


# =========================================================
# Cash up
# =========================================================
@main.route("/cash-up")
def cash_up():
    shop = _selected_shop()
    today = date.today()
    window = WeekWindow.containing(today)
    records = []
    today_totals = week_totals = CashUpTotals()
    advisory = None
    try:
        service = CashUpService(get_db())
        records = service.list_cash_ups(shop=shop)
        week_records = [r for r in records if window.contains(r.date)]
        today_totals = service.summarize_day(shop, today)
        week_totals = service.summarize_week(shop, window)
        advisory = _visible(
            find_missing_cash_ups(week_records, today, shop=shop, shops=_shop_service().list_shop_names())
        )
    except DomainError as exc:
        _fail("Load cash ups", exc)
    return render_template(
        "cash_up.html",
        shop=shop,
        today=today,
        records=records,
        today_totals=today_totals,
        week_totals=week_totals,
        advisory=advisory,
        purge_phrase=CASH_UP_PURGE_PHRASE,
    )


@main.route("/cash-up", methods=["POST"])
def add_cash_up():
    try:
        CashUpService(get_db()).record_cash_up(
            record_date=_form_date("date", "Date"),
            shop=_form_text("shop"),
            cash_amount=_form_amount("cash_amount", "Cash amount", allow_blank=True),
            card_machine_amount=_form_amount("card_machine_amount", "Card machine amount", allow_blank=True),
            account_amount=_form_amount("account_amount", "Account amount", allow_blank=True),
            direct_deposit_amount=_form_amount("direct_deposit_amount", "Direct deposit amount", allow_blank=True),
            expenses=_form_amount("expenses", "Expenses", allow_blank=True),
            notes=_form_text("notes") or None,
        )
        flash("Cash up saved successfully", "success")
    except DomainError as exc:
        _fail("Save cash up", exc)
    return redirect(url_for("main.cash_up"))


@main.route("/cash-up/<int:record_id>/update", methods=["POST"])
def update_cash_up(record_id: int):
    try:
        fields = {
            "date": _form_date("date", "Date", required=False),
            "shop": _form_text("shop") or None,
            "cash_amount": _optional_amount("cash_amount", "Cash amount"),
            "card_machine_amount": _optional_amount("card_machine_amount", "Card machine amount"),
            "account_amount": _optional_amount("account_amount", "Account amount"),
            "direct_deposit_amount": _optional_amount("direct_deposit_amount", "Direct deposit amount"),
            "expenses": _optional_amount("expenses", "Expenses"),
            "notes": _form_text("notes") or None,
        }
        CashUpService(get_db()).update_cash_up(
            record_id, **{key: value for key, value in fields.items() if value is not None}
        )
        flash("Cash up updated successfully", "success")
    except DomainError as exc:
        _fail("Update cash up", exc)
    return redirect(url_for("main.cash_up"))


@main.route("/cash-up/<int:record_id>/delete", methods=["POST"])
def delete_cash_up(record_id: int):
    if request.form.get("confirm") != "yes":
        flash("Deletion was not confirmed", "warning")
        return redirect(url_for("main.cash_up"))
    try:
        CashUpService(get_db()).delete_cash_up(record_id)
        flash("Cash up deleted", "success")
    except DomainError as exc:
        _fail("Delete cash up", exc)
    return redirect(url_for("main.cash_up"))


@main.route("/cash-up/purge", methods=["POST"])
def purge_cash_ups():
    try:
        count = CashUpService(get_db()).purge_range(
            _form_date("start_date", "Start date"),
            _form_date("end_date", "End date"),
            request.form.get("confirmation", ""),
            shop=_form_text("shop") or None,
        )
        flash(f"Deleted {count} cash up record(s)", "success")
    except DomainError as exc:
        _fail("Delete cash ups", exc)
    return redirect(url_for("main.cash_up"))


# =========================================================
# Analytics / reports
# =========================================================
@main.route("/analytics")
def analytics():
    shop = _selected_shop()
    today = date.today()
    series = []
    shop_totals = {}
    week_totals = all_totals = CashUpTotals()
    try:
        service = CashUpService(get_db())
        all_totals = service.summarize_all(shop)
        series = service.daily_series(shop, today, days=7)
        shop_totals = service.shop_totals()
        week_totals = service.summarize_week(shop, WeekWindow.containing(today))
    except DomainError as exc:
        _fail("Load analytics", exc)
    return render_template(
        "analytics.html",
        shop=shop,
        series=series,
        shop_totals=shop_totals,
        week_totals=week_totals,
        all_totals=all_totals,
    )


def _report_request():
    """Filter and selection from the query string."""
    args = request.args
    start = parse_date(args["start_date"]) if args.get("start_date") else None
    end = parse_date(args["end_date"]) if args.get("end_date") else None
    report_filter = ReportFilter(shop=args.get("shop") or ALL_SHOPS, start_date=start, end_date=end)
    if args.get("submitted"):
        selection = ReportSelection(
            include_supplies=bool(args.get("include_supplies")),
            include_orders=bool(args.get("include_orders")),
            include_income=bool(args.get("include_income")),
        )
    else:
        selection = ReportSelection()
    return report_filter, selection


@main.route("/reports")
def reports():
    doc = None
    report_filter, selection = ReportFilter(), ReportSelection()
    try:
        report_filter, selection = _report_request()
        doc = _report_service().build_report(report_filter, selection)
    except ValueError as exc:
        if isinstance(exc, DomainError):
            _fail("Build report", exc)
        else:
            flash(f"Invalid date: {exc}", "danger")
    return render_template("reports.html", doc=doc, report_filter=report_filter, selection=selection)


@main.route("/reports/print")
def print_report():
    try:
        report_filter, selection = _report_request()
        doc = _report_service().build_report(report_filter, selection)
    except ValueError as exc:
        if isinstance(exc, DomainError):
            _fail("Print report", exc)
        else:
            flash(f"Invalid date: {exc}", "danger")
        return redirect(url_for("main.reports"))
    return Response(render_document(doc), mimetype="text/html")
