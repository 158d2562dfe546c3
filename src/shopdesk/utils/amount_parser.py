"""Amount parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "ZAR": "R",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def _to_cents(value: Decimal, original) -> Decimal:
    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{original}': not a finite number")
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{original}': {e}")


def parse_amount(amount_str: str | int | float | Decimal | None, allow_blank: bool = False) -> Decimal:
    """Parse an amount into a Decimal rounded to cents.

    Handles various formats:
    - "123.45"
    - "R123.45"
    - "R 1 234.56"
    - "1,234.56"

    Args:
        amount_str: Amount string (numbers are accepted as-is)
        allow_blank: If True, blank input parses as zero

    Returns:
        Decimal amount with two decimal places

    Raises:
        ValueError: If amount cannot be parsed
    """
    if isinstance(amount_str, Decimal):
        return _to_cents(amount_str, amount_str)
    if isinstance(amount_str, (int, float)):
        return _to_cents(Decimal(str(amount_str)), amount_str)

    if amount_str is None or not amount_str.strip():
        if allow_blank:
            return Decimal("0.00")
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()
    cleaned = re.sub(r"^(ZAR|R)", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"[$€£]", "", cleaned)
    cleaned = cleaned.replace(",", "").replace(" ", "")

    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    return _to_cents(value, amount_str)


def format_currency(amount: Decimal | int | float | None, currency: str = "ZAR") -> str:
    """Format an amount for display, e.g. ``R1,234.50`` or ``-R40.00``."""
    value = Decimal(str(amount or 0)).quantize(CENT, rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
