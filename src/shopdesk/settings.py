# shopdesk/settings.py
from __future__ import annotations

import os


def _normalize_db_url(url: str | None) -> str | None:
    if not url:
        return None
    u = url.strip()

    # Hosted Postgres often hands out postgres://
    if u.startswith("postgres://"):
        u = u.replace("postgres://", "postgresql+psycopg2://", 1)

    if u.startswith("postgresql://"):
        u = u.replace("postgresql://", "postgresql+psycopg2://", 1)

    return u


def _split_names(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    names = tuple(part.strip() for part in value.split(",") if part.strip())
    return names or default


class Config:
    # ======================
    # Core
    # ======================
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")

    # ======================
    # Database
    # ======================
    # Priority:
    # 1) DATABASE_URL (production)
    # 2) SHOPDESK_DB_PATH / ~/.shopdesk/shopdesk.db (SQLite, resolved by the factory)
    DATABASE_URL = _normalize_db_url(os.environ.get("DATABASE_URL"))
    DATABASE_PATH = os.environ.get("SHOPDESK_DB_PATH")

    # ======================
    # Shops
    # ======================
    # Shown when the shop list cannot be loaded or nothing is recorded yet
    DEFAULT_SHOPS = _split_names(os.environ.get("SHOPDESK_DEFAULT_SHOPS"), ("A", "B", "C"))

    # ======================
    # Money / budgets
    # ======================
    CURRENCY = os.environ.get("SHOPDESK_CURRENCY", "ZAR")
    # "ordered" or "delivered": which amount counts as spend against a weekly budget
    BUDGET_SPEND_BASIS = os.environ.get("SHOPDESK_BUDGET_SPEND_BASIS", "ordered").strip().lower()
    # Number of weeks offered in the week selector (current + previous)
    WEEK_OPTIONS = int(os.environ.get("SHOPDESK_WEEK_OPTIONS", "5"))
