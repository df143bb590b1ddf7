"""Database layer for fintracker application."""

from fintracker.database.base import Database
from fintracker.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
