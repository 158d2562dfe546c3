"""Utility functions for shopdesk."""

from shopdesk.utils.date_parser import parse_date, get_date_range
from shopdesk.utils.amount_parser import parse_amount, format_currency
from shopdesk.utils.week import WeekWindow, week_start, week_end, week_window, recent_weeks

__all__ = [
    "parse_date",
    "get_date_range",
    "parse_amount",
    "format_currency",
    "WeekWindow",
    "week_start",
    "week_end",
    "week_window",
    "recent_weeks",
]
