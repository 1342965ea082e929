"""Database layer for invoicekit application."""

from invoicekit.database.base import Database
from invoicekit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
