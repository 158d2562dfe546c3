"""CLI helpers for date, week and amount options."""

from datetime import date
from decimal import Decimal

import click

from shopdesk.utils.amount_parser import parse_amount
from shopdesk.utils.date_parser import get_date_range, parse_date
from shopdesk.utils.week import WeekWindow, parse_week_selection, week_window


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse an optional date option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(
    ctx: click.Context, value: str | None, label: str = "amount", allow_blank: bool = False
) -> Decimal | None:
    """Parse an optional amount option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_amount(value, allow_blank=allow_blank)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_week(ctx: click.Context, week: str | None, last_week: bool = False) -> WeekWindow:
    """Resolve ``--week``/``--last-week`` into a week window (default: this week)."""
    if week and last_week:
        click.echo("Error: --week cannot be combined with --last-week.", err=True)
        ctx.exit(1)
    if last_week:
        return week_window(weeks_back=1)
    if week:
        try:
            return parse_week_selection(week)
        except ValueError as e:
            click.echo(f"Error: Invalid week: {e}", err=True)
            ctx.exit(1)
    return week_window()


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-week, --last-week, --this-month, --last-month) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        period = next(name for name, is_set in period_flags.items() if is_set)
        return get_date_range(period)

    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")
    if start and end and start > end:
        click.echo("Error: Start date must be before end date", err=True)
        ctx.exit(1)
    return start, end


def period_options(func):
    """Attach --this-week/--last-week/--this-month/--last-month flags."""
    for flag, text in reversed(
        [
            ("--this-week", "Use the current Monday-start week"),
            ("--last-week", "Use the previous week"),
            ("--this-month", "Use the current month"),
            ("--last-month", "Use the previous month"),
        ]
    ):
        func = click.option(flag, is_flag=True, help=text)(func)
    return func
