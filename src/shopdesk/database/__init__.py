"""Database layer for shopdesk application."""

from shopdesk.database.base import Database
from shopdesk.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
