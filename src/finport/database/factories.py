"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from finport.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "FINPORT_DB_PATH"


def sqlite_database_url(database_path: Optional[str] = None) -> str:
    """Build the SQLite URL for a database file.

    Args:
        database_path: Path to SQLite database file. If None, checks FINPORT_DB_PATH
            environment variable, then defaults to ~/.finport/finport.db

    Returns:
        SQLAlchemy database URL
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        db_dir = Path.home() / ".finport"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "finport.db")

    return f"sqlite:///{database_path}"


def create_sqlite_database(
    database_path: Optional[str] = None,
    session_factory: Optional[sessionmaker[Session]] = None,
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, resolved as in
            ``sqlite_database_url``
        session_factory: Session factory to reuse instead of creating a new engine

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    return SQLAlchemyDatabase(sqlite_database_url(database_path), session_factory=session_factory)
