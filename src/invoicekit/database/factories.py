"""Store construction from a path, the environment, or the per-user default."""

import os
from pathlib import Path
from typing import Optional, Union

from invoicekit.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "INVOICEKIT_DB_PATH"
DEFAULT_DB_DIR = ".invoicekit"
DEFAULT_DB_NAME = "invoicekit.db"
IN_MEMORY = ":memory:"


def resolve_database_path(database_path: Optional[Union[str, Path]] = None) -> str:
    """Pick the SQLite file for the invoice store.

    An explicit path wins over $INVOICEKIT_DB_PATH, which wins over
    ``~/.invoicekit/invoicekit.db``. ``~`` is expanded and missing parent
    directories are created; ``:memory:`` is passed through.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    if chosen is None:
        chosen = Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_NAME
    if str(chosen) == IN_MEMORY:
        return IN_MEMORY

    path = Path(chosen).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


def create_sqlite_database(database_path: Optional[Union[str, Path]] = None) -> SQLAlchemyDatabase:
    """Create the SQLAlchemy-backed invoice store on a SQLite file."""
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
