"""Purchase order commands."""

from datetime import date

import click

from shopdesk.cli.date_filters import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_cli_week,
)
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.errors import DomainError
from shopdesk.domain.orders import PURGE_CONFIRMATION_PHRASE, OrderService
from shopdesk.domain.reconciliation import ReconciliationService
from shopdesk.utils.amount_parser import format_currency


@click.group()
def order_group():
    """Manage purchase orders."""
    pass


@order_group.command("add")
@click.argument("supply_id", type=int)
@click.option("--amount", required=True, help="Order amount (e.g. 250.00 or R250)")
@click.option("--ordered-by", required=True, help="Person placing the order")
@click.option("--date", "order_date", default="today", help="Order date (default: today)")
@click.option("--delivered", help="Amount delivered so far")
@click.option("--delivery-date", help="Delivery date")
@click.option("--contact", help="Supplier contact (defaults to the supply's phone number)")
@click.option("--shop", help="Ordering shop (defaults to the supply's shop)")
@click.option("--notes", help="Notes")
@click.pass_context
def add_order(ctx, supply_id, amount, ordered_by, order_date, delivered, delivery_date, contact, shop, notes):
    """Place an order for a supply.

    Examples:
        shopdesk orders add 3 --amount 250 --ordered-by Thandi
        shopdesk orders add 3 --amount 250 --ordered-by Thandi --delivered 250 --delivery-date today
    """
    service = OrderService(ctx.obj["db"])
    try:
        order_id = service.create_order(
            supply_id=supply_id,
            order_date=parse_date_or_exit(ctx, order_date, "order date"),
            ordered_by=ordered_by,
            order_amount=parse_amount_or_exit(ctx, amount, "order amount"),
            amount_delivered=parse_amount_or_exit(ctx, delivered, "delivered amount"),
            delivery_date=parse_date_or_exit(ctx, delivery_date, "delivery date"),
            contact_person=contact,
            shop=shop,
            notes=notes,
        )
        created = service.get_order(order_id)
        click.echo(f"Created order {order_id} ({created.status.value})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@order_group.command("deliver")
@click.argument("order_id", type=int)
@click.option("--amount", required=True, help="Total amount delivered")
@click.option("--date", "delivery_date", default="today", help="Delivery date (default: today)")
@click.pass_context
def deliver_order(ctx, order_id: int, amount: str, delivery_date: str):
    """Record the delivered amount for an order."""
    service = OrderService(ctx.obj["db"])
    try:
        service.record_delivery(
            order_id,
            amount_delivered=parse_amount_or_exit(ctx, amount, "delivered amount"),
            delivery_date=parse_date_or_exit(ctx, delivery_date, "delivery date"),
        )
        click.echo(f"Order {order_id} is now {service.get_order(order_id).status.value}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@order_group.command("update")
@click.argument("order_id", type=int)
@click.option("--supply", "supply_id", type=int, help="Supply ID")
@click.option("--amount", help="Order amount")
@click.option("--delivered", help="Amount delivered")
@click.option("--date", "order_date", help="Order date")
@click.option("--delivery-date", help="Delivery date")
@click.option("--ordered-by", help="Person placing the order")
@click.option("--contact", help="Supplier contact")
@click.option("--shop", help="Ordering shop")
@click.option("--notes", help="Notes")
@click.pass_context
def update_order(ctx, order_id, supply_id, amount, delivered, order_date, delivery_date, ordered_by, contact, shop, notes):
    """Update an order. Only given fields change; status is recomputed."""
    fields = {
        "supply_id": supply_id,
        "order_amount": parse_amount_or_exit(ctx, amount, "order amount"),
        "amount_delivered": parse_amount_or_exit(ctx, delivered, "delivered amount"),
        "order_date": parse_date_or_exit(ctx, order_date, "order date"),
        "delivery_date": parse_date_or_exit(ctx, delivery_date, "delivery date"),
        "ordered_by": ordered_by,
        "contact_person": contact,
        "shop": shop,
        "notes": notes,
    }
    fields = {key: value for key, value in fields.items() if value is not None}
    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        OrderService(ctx.obj["db"]).update_order(order_id, **fields)
        click.echo(f"Updated order {order_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@order_group.command("list")
@click.option("--shop", help="Only show orders of this shop")
@click.option("--week", help="Any date in the week, or 'YYYY-MM-DD to YYYY-MM-DD'")
@click.option("--last-week", is_flag=True, help="Show last week")
@click.pass_context
def list_orders(ctx, shop: str | None, week: str | None, last_week: bool):
    """List orders placed or delivered in a week, with the budget position.

    Orders placed the week before and delivered in this week are marked with '*'.
    """
    config = ctx.obj["config"]
    window = resolve_cli_week(ctx, week, last_week)
    service = ReconciliationService(ctx.obj["db"], basis=ctx.obj["basis"])
    try:
        rec = service.reconcile(shop=shop, window=window)
    except DomainError as e:
        handle_domain_error(ctx, e)

    def money(value):
        return format_currency(value, config.CURRENCY)

    click.echo(f"\n{window.label} - {rec.shop}")
    click.echo("-" * 80)
    if not rec.orders_in_view:
        click.echo("No orders found.")
    cross_week = rec.cross_week_order_ids
    for o in rec.orders_in_view:
        marker = "*" if o.id in cross_week else " "
        delivered_on = o.delivery_date.isoformat() if o.delivery_date else "-"
        click.echo(
            f"{marker}ID: {o.id:3d} | {o.order_date.isoformat()} | {o.supply_name:20s} | "
            f"{money(o.order_amount):>12s} | {money(o.amount_delivered):>12s} | "
            f"{o.status.value:9s} | {delivered_on} | {o.shop}"
        )

    click.echo("-" * 80)
    click.echo(f"Ordered: {money(rec.total_ordered)}  Delivered: {money(rec.total_delivered)}  "
               f"Outstanding: {money(rec.total_outstanding)}")
    click.echo(f"Budget: {money(rec.budget_amount)}  Used ({rec.basis.value}): {money(rec.spend)}  "
               f"Remaining: {money(rec.remaining)}{'  OVER BUDGET' if rec.is_over_budget else ''}")
    if rec.cross_week_deliveries:
        click.echo(f"* {len(rec.cross_week_deliveries)} order(s) placed last week were delivered this week "
                   f"({money(rec.cross_week_total)})")


@order_group.command("delete")
@click.argument("order_ids", type=int, nargs=-1, required=True)
@click.pass_context
def delete_orders(ctx, order_ids: tuple[int, ...]):
    """Delete one or more orders by ID."""
    service = OrderService(ctx.obj["db"])
    if not click.confirm(f"Delete {len(order_ids)} order(s): {', '.join(map(str, order_ids))}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        if len(order_ids) == 1:
            service.delete_order(order_ids[0])
            count = 1
        else:
            count = service.delete_orders(order_ids)
        click.echo(f"Deleted {count} order(s)")
    except DomainError as e:
        handle_domain_error(ctx, e)


@order_group.command("purge")
@click.option("--before", required=True, help="Delete orders placed before this date")
@click.option("--shop", help="Only purge orders of this shop")
@click.pass_context
def purge_orders(ctx, before: str, shop: str | None):
    """Delete every order placed before a date.

    You must type the confirmation phrase exactly.
    """
    cutoff: date = parse_date_or_exit(ctx, before, "date")
    phrase = click.prompt(
        f"This permanently deletes all orders before {cutoff.isoformat()}. "
        f"Type '{PURGE_CONFIRMATION_PHRASE}' to confirm",
        default="",
        show_default=False,
    )
    try:
        count = OrderService(ctx.obj["db"]).purge_orders_before(cutoff, phrase, shop=shop)
        click.echo(f"Deleted {count} order(s)")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register order commands with main CLI."""
    cli.add_command(order_group, name="orders")
