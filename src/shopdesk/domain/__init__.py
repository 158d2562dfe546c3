"""Domain layer for shopdesk application.

Services live in their own modules (``shopdesk.domain.orders`` etc.) and are
imported from there; this package only re-exports the entities so the
database layer can import it without pulling the services in.
"""

from shopdesk.domain.entities import (
    ALL_SHOPS,
    IncomeRecord,
    Order,
    OrderStatus,
    Shop,
    SpendBasis,
    Supply,
    WeeklyBudget,
)

__all__ = [
    "ALL_SHOPS",
    "IncomeRecord",
    "Order",
    "OrderStatus",
    "Shop",
    "SpendBasis",
    "Supply",
    "WeeklyBudget",
]
