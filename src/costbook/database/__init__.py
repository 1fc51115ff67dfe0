"""Database layer for costbook application."""

from costbook.database.base import Database
from costbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
