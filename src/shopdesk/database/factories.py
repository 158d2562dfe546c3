"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from shopdesk.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SHOPDESK_DB_PATH
            environment variable, then defaults to ~/.shopdesk/shopdesk.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SHOPDESK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".shopdesk"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "shopdesk.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_database(database_url: Optional[str] = None, database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a database from a SQLAlchemy URL, falling back to SQLite.

    Args:
        database_url: Full SQLAlchemy URL (e.g. from DATABASE_URL). Takes priority.
        database_path: SQLite file path used when no URL is given

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_url:
        return SQLAlchemyDatabase(database_url)
    return create_sqlite_database(database_path=database_path)
