"""Main CLI entry point."""

import logging

import click

from shopdesk.database.factories import create_database
from shopdesk.domain.entities import parse_spend_basis
from shopdesk.domain.errors import DataAccessError, ValidationError
from shopdesk.settings import Config

# Import and register all commands at module level
from shopdesk.cli.commands import (
    budget,
    cashup,
    init_db,
    order,
    report,
    serve,
    shop,
    supply,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides SHOPDESK_DB_PATH environment variable)",
    envvar="SHOPDESK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Shopdesk - multi-shop back office.

    Track supplies, purchase orders against weekly budgets and daily
    cash-ups for several shops, and print reports and delivery lists.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = Config
    ctx.obj["db_path"] = db_path
    try:
        ctx.obj["basis"] = parse_spend_basis(Config.BUDGET_SPEND_BASIS)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        database_url = None if db_path else Config.DATABASE_URL
        try:
            db = create_database(database_url=database_url, database_path=db_path)
        except DataAccessError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_db.register_commands(cli)
shop.register_commands(cli)
supply.register_commands(cli)
order.register_commands(cli)
budget.register_commands(cli)
cashup.register_commands(cli)
report.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
