"""Weekly budget commands."""

import click

from shopdesk.cli.date_filters import parse_amount_or_exit, resolve_cli_week
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.budgets import BudgetService
from shopdesk.domain.errors import DomainError
from shopdesk.domain.reconciliation import ReconciliationService
from shopdesk.domain.shops import ShopService
from shopdesk.utils.amount_parser import format_currency


@click.group()
def budget_group():
    """Manage weekly budgets."""
    pass


@budget_group.command("set")
@click.argument("shop")
@click.argument("amount")
@click.option("--week", help="Any date in the week (default: this week)")
@click.option("--last-week", is_flag=True, help="Set last week's budget")
@click.pass_context
def set_budget(ctx, shop: str, amount: str, week: str | None, last_week: bool):
    """Set a shop's budget for a week, replacing any existing one.

    Examples:
        shopdesk budgets set A 1500
        shopdesk budgets set A R2,000 --week 2024-01-17
    """
    window = resolve_cli_week(ctx, week, last_week)
    value = parse_amount_or_exit(ctx, amount, "budget amount")
    try:
        BudgetService(ctx.obj["db"]).set_budget(shop, window.start, value)
        click.echo(
            f"Budget for {shop}, {window.label}: {format_currency(value, ctx.obj['config'].CURRENCY)}"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@budget_group.command("list")
@click.option("--shop", help="Only show budgets of this shop")
@click.pass_context
def list_budgets(ctx, shop: str | None):
    """List weekly budgets, newest week first."""
    currency = ctx.obj["config"].CURRENCY
    budgets = BudgetService(ctx.obj["db"]).list_budgets(shop=shop)
    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("\nWeekly budgets:")
    click.echo("-" * 50)
    for b in budgets:
        click.echo(f"ID: {b.id:3d} | {b.week_start_date.isoformat()} | {b.shop:12s} | {format_currency(b.budget_amount, currency)}")


@budget_group.command("status")
@click.option("--week", help="Any date in the week (default: this week)")
@click.option("--last-week", is_flag=True, help="Show last week")
@click.pass_context
def budget_status(ctx, week: str | None, last_week: bool):
    """Show budget used and remaining for every shop."""
    config = ctx.obj["config"]
    db = ctx.obj["db"]
    window = resolve_cli_week(ctx, week, last_week)
    shops = ShopService(db, default_shops=config.DEFAULT_SHOPS).list_shop_names()
    try:
        recs = ReconciliationService(db, basis=ctx.obj["basis"]).reconcile_all_shops(
            shops, window=window
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{window.label} (spend basis: {ctx.obj['basis'].value})")
    click.echo("-" * 70)
    for rec in recs:
        status = "Over Budget" if rec.is_over_budget else "Under Budget"
        click.echo(
            f"{rec.shop:12s} | Budget: {format_currency(rec.budget_amount, config.CURRENCY):>12s} | "
            f"Used: {format_currency(rec.spend, config.CURRENCY):>12s} | "
            f"Remaining: {format_currency(rec.remaining, config.CURRENCY):>12s} | {status}"
        )


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.pass_context
def delete_budget(ctx, budget_id: int):
    """Delete a weekly budget."""
    if not click.confirm(f"Are you sure you want to delete budget {budget_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        BudgetService(ctx.obj["db"]).delete_budget(budget_id)
        click.echo(f"Deleted budget {budget_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budgets")
