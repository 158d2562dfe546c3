"""Daily cash-up commands."""

from datetime import date

import click

from shopdesk.cli.date_filters import (
    parse_amount_or_exit,
    parse_date_or_exit,
    period_options,
    resolve_cli_date_range,
)
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.cashup import PURGE_CONFIRMATION_PHRASE, CashUpService, summarize
from shopdesk.domain.errors import DomainError
from shopdesk.domain.missing_cashup import find_missing_cash_ups
from shopdesk.domain.shops import ShopService
from shopdesk.utils.amount_parser import format_currency
from shopdesk.utils.week import WeekWindow


@click.group()
def cashup_group():
    """Record and review daily cash-ups."""
    pass


@cashup_group.command("add")
@click.argument("shop")
@click.option("--date", "record_date", default="today", help="Cash-up date (default: today)")
@click.option("--cash", default="0", help="Cash in the till")
@click.option("--card", default="0", help="Card machine total")
@click.option("--account", default="0", help="Account sales")
@click.option("--deposit", default="0", help="Direct deposits")
@click.option("--expenses", default="0", help="Expenses paid from takings")
@click.option("--notes", help="Notes")
@click.pass_context
def add_cash_up(ctx, shop, record_date, cash, card, account, deposit, expenses, notes):
    """Record a shop's cash-up for a day.

    Examples:
        shopdesk cash-ups add A --cash 120.50 --card 80 --expenses 60.25
    """
    currency = ctx.obj["config"].CURRENCY
    service = CashUpService(ctx.obj["db"])
    try:
        record_id = service.record_cash_up(
            record_date=parse_date_or_exit(ctx, record_date, "date"),
            shop=shop,
            cash_amount=parse_amount_or_exit(ctx, cash, "cash amount", allow_blank=True),
            card_machine_amount=parse_amount_or_exit(ctx, card, "card machine amount", allow_blank=True),
            account_amount=parse_amount_or_exit(ctx, account, "account amount", allow_blank=True),
            direct_deposit_amount=parse_amount_or_exit(ctx, deposit, "direct deposit amount", allow_blank=True),
            expenses=parse_amount_or_exit(ctx, expenses, "expenses", allow_blank=True),
            notes=notes,
        )
        record = service.get_cash_up(record_id)
        click.echo(f"Recorded cash up {record_id} for {record.shop} on {record.date.isoformat()}")
        click.echo(f"Daily income: {format_currency(record.daily_income, currency)}")
        click.echo(f"Net income:   {format_currency(record.net_income, currency)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@cashup_group.command("list")
@click.option("--shop", help="Only show cash-ups of this shop")
@click.option("--start-date", help="Start date")
@click.option("--end-date", help="End date")
@period_options
@click.pass_context
def list_cash_ups(ctx, shop, start_date, end_date, this_week, last_week, this_month, last_month):
    """List cash-ups with totals."""
    currency = ctx.obj["config"].CURRENCY
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "last-week": last_week,
            "this-month": this_month,
            "last-month": last_month,
        },
    )
    records = CashUpService(ctx.obj["db"]).list_cash_ups(shop=shop, start_date=start, end_date=end)
    if not records:
        click.echo("No cash ups found.")
        return

    click.echo("\nCash ups:")
    click.echo("-" * 76)
    for r in records:
        click.echo(
            f"ID: {r.id:3d} | {r.date.isoformat()} | {r.shop:10s} | "
            f"Income: {format_currency(r.daily_income, currency):>12s} | "
            f"Expenses: {format_currency(r.expenses, currency):>12s} | "
            f"Net: {format_currency(r.net_income, currency):>12s}"
        )
    totals = summarize(records)
    click.echo("-" * 76)
    click.echo(
        f"Total income: {format_currency(totals.income, currency)} | "
        f"Expenses: {format_currency(totals.expenses, currency)} | "
        f"Net: {format_currency(totals.net, currency)} | "
        f"Average daily income: {format_currency(totals.average_daily_income, currency)}"
    )


@cashup_group.command("missing")
@click.option("--shop", help="Only check this shop")
@click.pass_context
def missing_cash_ups(ctx, shop: str | None):
    """Show days of this week that have no cash-up yet."""
    db = ctx.obj["db"]
    today = date.today()
    window = WeekWindow.containing(today)
    shops = ShopService(db, default_shops=ctx.obj["config"].DEFAULT_SHOPS).list_shop_names()
    records = CashUpService(db).list_cash_ups(shop=shop, start_date=window.start, end_date=window.end)

    advisory = find_missing_cash_ups(records, today, shop=shop, shops=shops)
    if not advisory.has_missing:
        click.echo("All cash ups for this week are recorded.")
        return
    click.echo(advisory.message)


@cashup_group.command("update")
@click.argument("record_id", type=int)
@click.option("--date", "record_date", help="Cash-up date")
@click.option("--shop", help="Shop")
@click.option("--cash", help="Cash in the till")
@click.option("--card", help="Card machine total")
@click.option("--account", help="Account sales")
@click.option("--deposit", help="Direct deposits")
@click.option("--expenses", help="Expenses")
@click.option("--notes", help="Notes")
@click.pass_context
def update_cash_up(ctx, record_id, record_date, shop, cash, card, account, deposit, expenses, notes):
    """Update a cash-up. Daily and net income are recalculated."""
    fields = {
        "date": parse_date_or_exit(ctx, record_date, "date"),
        "shop": shop,
        "cash_amount": parse_amount_or_exit(ctx, cash, "cash amount"),
        "card_machine_amount": parse_amount_or_exit(ctx, card, "card machine amount"),
        "account_amount": parse_amount_or_exit(ctx, account, "account amount"),
        "direct_deposit_amount": parse_amount_or_exit(ctx, deposit, "direct deposit amount"),
        "expenses": parse_amount_or_exit(ctx, expenses, "expenses"),
        "notes": notes,
    }
    fields = {key: value for key, value in fields.items() if value is not None}
    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        CashUpService(ctx.obj["db"]).update_cash_up(record_id, **fields)
        click.echo(f"Updated cash up {record_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@cashup_group.command("delete")
@click.argument("record_id", type=int)
@click.pass_context
def delete_cash_up(ctx, record_id: int):
    """Delete a cash-up."""
    if not click.confirm(f"Are you sure you want to delete cash up {record_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        CashUpService(ctx.obj["db"]).delete_cash_up(record_id)
        click.echo(f"Deleted cash up {record_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@cashup_group.command("purge")
@click.option("--start-date", required=True, help="First day to delete")
@click.option("--end-date", required=True, help="Last day to delete")
@click.option("--shop", help="Only purge this shop")
@click.pass_context
def purge_cash_ups(ctx, start_date: str, end_date: str, shop: str | None):
    """Delete every cash-up in a date range.

    You must type the confirmation phrase exactly.
    """
    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")
    phrase = click.prompt(
        f"This permanently deletes cash ups from {start.isoformat()} to {end.isoformat()}. "
        f"Type '{PURGE_CONFIRMATION_PHRASE}' to confirm",
        default="",
        show_default=False,
    )
    try:
        count = CashUpService(ctx.obj["db"]).purge_range(start, end, phrase, shop=shop)
        click.echo(f"Deleted {count} cash up record(s)")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register cash-up commands with main CLI."""
    cli.add_command(cashup_group, name="cash-ups")
