"""Database layer for finport application."""

from finport.database.base import Database
from finport.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
