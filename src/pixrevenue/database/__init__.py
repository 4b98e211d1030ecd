"""Database layer for pixrevenue application."""

from pixrevenue.database.base import Database
from pixrevenue.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
