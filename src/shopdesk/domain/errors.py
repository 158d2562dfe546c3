"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ConfirmationError(DomainError):
    """A destructive operation was not confirmed with the exact phrase."""


class DataAccessError(DomainError):
    """The data backend failed to complete a read or write."""


class PrintSurfaceError(DomainError):
    """The print surface could not be opened or written."""


def shop_not_found(shop: int | str) -> str:
    """Return message for missing shop."""
    return f"Shop '{shop}' not found"


def duplicate_shop_name(name: str) -> str:
    """Return message for a shop name that is already taken."""
    return f"A shop named '{name}' already exists"


def supply_not_found(supply_id: int) -> str:
    """Return message for missing supply."""
    return f"Supply {supply_id} not found"


def order_not_found(order_id: int) -> str:
    """Return message for missing order."""
    return f"Order {order_id} not found"


def cash_up_not_found(record_id: int) -> str:
    """Return message for missing cash-up record."""
    return f"Cash up record {record_id} not found"


def duplicate_cash_up(shop: str, day) -> str:
    """Return message when a shop already has a cash-up for a day."""
    return f"A cash up for {shop} on {day} already exists"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing weekly budget."""
    return f"Weekly budget {budget_id} not found"


def confirmation_mismatch(phrase: str) -> str:
    """Return message when the confirmation phrase was not typed exactly."""
    return f"Type '{phrase}' exactly to confirm this deletion"


def invalid_date_range() -> str:
    """Return message for a start date after the end date."""
    return "Start date must be before end date"
