"""Derived-field rules shared by the services and the data accessor.

Kept free of database imports so the accessor can recompute these values
inside its write path.
"""

from decimal import Decimal

from shopdesk.domain.entities import OrderStatus

ZERO = Decimal("0")


def order_status(order_amount: Decimal, amount_delivered: Decimal) -> OrderStatus:
    """Classify an order by how much of it has been delivered.

    Pending iff nothing delivered, Partial iff something but less than ordered,
    Delivered iff delivered covers the ordered amount.
    """
    delivered = amount_delivered or ZERO
    ordered = order_amount or ZERO
    if delivered <= ZERO:
        return OrderStatus.PENDING
    if delivered < ordered:
        return OrderStatus.PARTIAL
    return OrderStatus.DELIVERED


def compute_income(
    cash_amount: Decimal,
    card_machine_amount: Decimal,
    account_amount: Decimal,
    direct_deposit_amount: Decimal,
    expenses: Decimal,
) -> tuple[Decimal, Decimal]:
    """Return ``(daily_income, net_income)`` for one cash-up."""
    daily_income = (
        (cash_amount or ZERO)
        + (card_machine_amount or ZERO)
        + (account_amount or ZERO)
        + (direct_deposit_amount or ZERO)
    )
    return daily_income, daily_income - (expenses or ZERO)
