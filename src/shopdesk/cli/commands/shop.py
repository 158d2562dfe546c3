"""Shop management commands."""

from datetime import date

import click

from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.errors import DomainError
from shopdesk.domain.shops import ShopService
from shopdesk.utils.amount_parser import format_currency


def _service(ctx) -> ShopService:
    return ShopService(ctx.obj["db"], default_shops=ctx.obj["config"].DEFAULT_SHOPS)


@click.group()
def shop_group():
    """Manage shops."""
    pass


@shop_group.command("create")
@click.argument("name", metavar="SHOP_NAME")
@click.pass_context
def create_shop(ctx, name: str):
    """Create a new shop.

    Examples:
        shopdesk shops create "Main Street"
    """
    try:
        shop_id = _service(ctx).create_shop(name)
        click.echo(f"Created shop '{name.strip()}' (ID: {shop_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@shop_group.command("list")
@click.pass_context
def list_shops(ctx):
    """List known shops.

    Includes shop names already used by supplies, orders and cash-ups.
    """
    names = _service(ctx).list_shop_names()
    if not names:
        click.echo("No shops found.")
        return

    click.echo("\nShops:")
    click.echo("-" * 40)
    for name in names:
        click.echo(name)


@shop_group.command("show")
@click.argument("name", metavar="SHOP_NAME")
@click.pass_context
def show_shop(ctx, name: str):
    """Show supplies, pending orders and income for one shop."""
    currency = ctx.obj["config"].CURRENCY
    try:
        overview = _service(ctx).get_shop_overview(name, today=date.today())
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nShop: {overview.name}")
    click.echo("-" * 40)
    click.echo(f"Supplies:          {overview.supply_count}")
    click.echo(f"Total quantity:    {overview.total_quantity.normalize():f}")
    click.echo(f"Pending orders:    {len(overview.pending_orders)} ({format_currency(overview.pending_order_amount, currency)})")
    click.echo(f"Today's net:       {format_currency(overview.today_net_income, currency)}")
    click.echo(f"This week's net:   {format_currency(overview.week_net_income, currency)}")


@shop_group.command("delete")
@click.argument("name", metavar="SHOP_NAME")
@click.pass_context
def delete_shop(ctx, name: str):
    """Delete a shop.

    Supplies, orders and cash-ups recorded under the name are kept.
    """
    if not click.confirm(f"Are you sure you want to delete shop '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        _service(ctx).delete_shop(name)
        click.echo(f"Deleted shop '{name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register shop commands with main CLI."""
    cli.add_command(shop_group, name="shops")
