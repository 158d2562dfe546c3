"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the storage schema changes.
"""

from decimal import Decimal

from shopdesk.domain import entities as domain
from shopdesk.database.models import (
    Shop as ORMShop,
    Supply as ORMSupply,
    Order as ORMOrder,
    IncomeRecord as ORMIncomeRecord,
    WeeklyBudget as ORMWeeklyBudget,
)


def _money(value) -> Decimal:
    # SQLite hands back floats for Numeric columns on some drivers
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"))


def shop_to_domain(orm_shop: ORMShop) -> domain.Shop:
    """Convert SQLAlchemy Shop model to domain Shop entity."""
    return domain.Shop(
        id=orm_shop.id,
        name=orm_shop.name,
        created_at=orm_shop.created_at,
    )


def supply_to_domain(orm_supply: ORMSupply) -> domain.Supply:
    """Convert SQLAlchemy Supply model to domain Supply entity."""
    return domain.Supply(
        id=orm_supply.id,
        name=orm_supply.name,
        quantity=_money(orm_supply.amount),
        phone_number=orm_supply.phone_number,
        shop=orm_supply.shop,
        created_at=orm_supply.created_at,
    )


def order_to_domain(orm_order: ORMOrder) -> domain.Order:
    """Convert SQLAlchemy Order model to domain Order entity."""
    return domain.Order(
        id=orm_order.id,
        supply_id=orm_order.supply_id,
        supply_name=orm_order.supply_name,
        order_date=orm_order.order_date,
        ordered_by=orm_order.ordered_by,
        contact_person=orm_order.contact_person,
        order_amount=_money(orm_order.order_amount),
        amount_delivered=_money(orm_order.amount_delivered),
        delivery_date=orm_order.delivery_date,
        status=domain.OrderStatus(orm_order.status),
        shop=orm_order.shop,
        notes=orm_order.notes,
        created_at=orm_order.created_at,
    )


def income_record_to_domain(orm_record: ORMIncomeRecord) -> domain.IncomeRecord:
    """Convert SQLAlchemy IncomeRecord model to domain IncomeRecord entity."""
    return domain.IncomeRecord(
        id=orm_record.id,
        date=orm_record.date,
        shop=orm_record.shop,
        cash_amount=_money(orm_record.cash_amount),
        card_machine_amount=_money(orm_record.card_machine_amount),
        account_amount=_money(orm_record.account_amount),
        direct_deposit_amount=_money(orm_record.direct_deposit_amount),
        daily_income=_money(orm_record.daily_income),
        expenses=_money(orm_record.expenses),
        net_income=_money(orm_record.net_income),
        notes=orm_record.notes,
        created_at=orm_record.created_at,
        updated_at=orm_record.updated_at,
    )


def weekly_budget_to_domain(orm_budget: ORMWeeklyBudget) -> domain.WeeklyBudget:
    """Convert SQLAlchemy WeeklyBudget model to domain WeeklyBudget entity."""
    return domain.WeeklyBudget(
        id=orm_budget.id,
        shop=orm_budget.shop,
        week_start_date=orm_budget.week_start_date,
        budget_amount=_money(orm_budget.budget_amount),
        created_at=orm_budget.created_at,
    )
