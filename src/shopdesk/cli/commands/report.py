"""Report and print commands."""

import click

from shopdesk.cli.date_filters import period_options, resolve_cli_date_range, resolve_cli_week
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.domain.entities import ALL_SHOPS
from shopdesk.domain.errors import DomainError
from shopdesk.domain.reporting import ReportDocument, ReportFilter, ReportSelection, ReportService
from shopdesk.domain.shops import ShopService
from shopdesk.printing import open_print_surface, render_document


def _service(ctx) -> ReportService:
    config = ctx.obj["config"]
    return ReportService(
        ctx.obj["db"], basis=ctx.obj["basis"], currency=config.CURRENCY
    )


def _emit(ctx, doc: ReportDocument, output: str | None, no_open: bool) -> None:
    """Write the rendered document and open it unless --no-open was given."""
    html = render_document(doc, auto_print=not no_open)
    try:
        path = open_print_surface(html, path=output, launch=not no_open)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Wrote {doc.title} to {path}")


def output_options(func):
    func = click.option("--no-open", is_flag=True, help="Only write the file; do not open a browser")(func)
    func = click.option("--output", "-o", type=click.Path(dir_okay=False), help="File to write")(func)
    return func


@click.group()
def report_group():
    """Build printable reports."""
    pass


@report_group.command("business")
@click.option("--shop", default=ALL_SHOPS, help="Shop (default: all shops)")
@click.option("--start-date", help="Start date")
@click.option("--end-date", help="End date")
@period_options
@click.option("--no-supplies", is_flag=True, help="Leave out the supplies section")
@click.option("--no-orders", is_flag=True, help="Leave out the orders section")
@click.option("--no-income", is_flag=True, help="Leave out the income section")
@output_options
@click.pass_context
def business_report(
    ctx, shop, start_date, end_date, this_week, last_week, this_month, last_month,
    no_supplies, no_orders, no_income, output, no_open,
):
    """Business report of supplies, orders and income.

    Examples:
        shopdesk reports business --this-month
        shopdesk reports business --shop A --start-date 2024-01-01 --end-date 2024-01-31 -o jan.html --no-open
    """
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
    try:
        doc = _service(ctx).build_report(
            ReportFilter(shop=shop, start_date=start, end_date=end),
            ReportSelection(
                include_supplies=not no_supplies,
                include_orders=not no_orders,
                include_income=not no_income,
            ),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    _emit(ctx, doc, output, no_open)


@report_group.command("budget")
@click.option("--shop", default=ALL_SHOPS, help="Shop (default: all shops)")
@click.option("--week", help="Any date in the week (default: this week)")
@click.option("--last-week", is_flag=True, help="Report on last week")
@output_options
@click.pass_context
def budget_report(ctx, shop, week, last_week, output, no_open):
    """Weekly budget report: budget use and order detail."""
    window = resolve_cli_week(ctx, week, last_week)
    try:
        doc = _service(ctx).build_weekly_budget_report(shop, window)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _emit(ctx, doc, output, no_open)


@report_group.command("deliveries")
@click.option("--shop", default=ALL_SHOPS, help="Shop (default: one page per shop)")
@click.option("--week", help="Any date in the week (default: this week)")
@click.option("--last-week", is_flag=True, help="List last week's deliveries")
@output_options
@click.pass_context
def delivery_list(ctx, shop, week, last_week, output, no_open):
    """Weekly delivery list with signature lines."""
    window = resolve_cli_week(ctx, week, last_week)
    shops = ShopService(ctx.obj["db"], default_shops=ctx.obj["config"].DEFAULT_SHOPS).list_shop_names()
    try:
        doc = _service(ctx).build_delivery_list(shop, window, shops=shops)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _emit(ctx, doc, output, no_open)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="reports")
