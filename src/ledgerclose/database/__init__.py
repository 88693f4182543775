"""Database layer for ledgerclose application."""

from ledgerclose.database.base import StorageService
from ledgerclose.database.factories import create_sqlite_storage
from ledgerclose.database.storage import StorageError, StorageManager

__all__ = ["StorageService", "StorageManager", "StorageError", "create_sqlite_storage"]
