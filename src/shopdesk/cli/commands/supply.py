"""Supply (inventory) commands."""

import click

from shopdesk.cli.date_filters import parse_amount_or_exit
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.errors import DomainError
from shopdesk.domain.supplies import SupplyService


@click.group()
def supply_group():
    """Manage supplies."""
    pass


@supply_group.command("add")
@click.argument("name")
@click.option("--shop", required=True, help="Owning shop")
@click.option("--quantity", required=True, help="Quantity on hand")
@click.option("--phone", "phone_number", required=True, help="Supplier phone number")
@click.pass_context
def add_supply(ctx, name: str, shop: str, quantity: str, phone_number: str):
    """Add a supply to a shop.

    Examples:
        shopdesk supplies add "Bread flour" --shop A --quantity 12 --phone 0215550100
    """
    service = SupplyService(ctx.obj["db"])
    qty = parse_amount_or_exit(ctx, quantity, "quantity")
    try:
        supply_id = service.create_supply(name=name, quantity=qty, phone_number=phone_number, shop=shop)
        click.echo(f"Created supply '{name}' (ID: {supply_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@supply_group.command("list")
@click.option("--shop", help="Only show supplies of this shop")
@click.pass_context
def list_supplies(ctx, shop: str | None):
    """List supplies."""
    supplies = SupplyService(ctx.obj["db"]).list_supplies(shop=shop)
    if not supplies:
        click.echo("No supplies found.")
        return

    click.echo("\nSupplies:")
    click.echo("-" * 72)
    for s in supplies:
        click.echo(
            f"ID: {s.id:3d} | {s.name:24s} | Qty: {s.quantity.normalize():>8f} | {s.phone_number:14s} | {s.shop}"
        )


@supply_group.command("update")
@click.argument("supply_id", type=int)
@click.option("--name", help="New name (also renamed on its orders)")
@click.option("--shop", help="New owning shop")
@click.option("--quantity", help="New quantity")
@click.option("--phone", "phone_number", help="New phone number")
@click.pass_context
def update_supply(ctx, supply_id: int, name, shop, quantity, phone_number):
    """Update a supply. Only given fields change."""
    service = SupplyService(ctx.obj["db"])
    qty = parse_amount_or_exit(ctx, quantity, "quantity")
    try:
        service.update_supply(supply_id, name=name, quantity=qty, phone_number=phone_number, shop=shop)
        click.echo(f"Updated supply {supply_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@supply_group.command("delete")
@click.argument("supply_id", type=int)
@click.pass_context
def delete_supply(ctx, supply_id: int):
    """Delete a supply and all orders placed for it."""
    service = SupplyService(ctx.obj["db"])
    supply = service.get_supply(supply_id)
    if supply is None:
        click.echo(f"Error: Supply {supply_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(
        f"Delete supply '{supply.name}' (ID: {supply_id}) and its orders?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_supply(supply_id)
        click.echo(f"Deleted supply '{supply.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register supply commands with main CLI."""
    cli.add_command(supply_group, name="supplies")
