"""Storage factory functions for creating storage instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerclose.database.sqlalchemy_db import SQLAlchemyStorage

DB_PATH_ENV = "LEDGERCLOSE_DB_PATH"


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStorage:
    """Create a SQLite storage instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERCLOSE_DB_PATH
            environment variable, then defaults to ~/.ledgerclose/ledgerclose.db

    Returns:
        SQLAlchemyStorage instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        db_dir = Path.home() / ".ledgerclose"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerclose.db")

    return SQLAlchemyStorage(f"sqlite:///{database_path}")
