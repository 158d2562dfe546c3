"""Database initialization command."""

import click

from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.errors import DomainError
from shopdesk.domain.shops import ShopService


@click.command("init")
@click.option("--with-default-shops", is_flag=True, help="Also create the configured default shops")
@click.pass_context
def init_database(ctx, with_default_shops: bool) -> None:
    """Create the database tables.

    Examples:
        shopdesk init
        shopdesk --db-path ./shop.db init --with-default-shops
    """
    db = ctx.obj["db"]
    config = ctx.obj["config"]
    db.initialize_schema()
    click.echo("Database initialized.")

    if not with_default_shops:
        return

    service = ShopService(db, default_shops=config.DEFAULT_SHOPS)
    existing = {s.name.lower() for s in service.list_shops()}
    for name in config.DEFAULT_SHOPS:
        if name.lower() in existing:
            continue
        try:
            service.create_shop(name)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Created shop '{name}'")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init_database)
