"""Database connection management."""

import sqlite3
from pathlib import Path

import structlog

from courtbook.utils.config import get_settings

logger = structlog.get_logger(__name__)


def get_db_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """
    Open the stats database with foreign keys enforced.

    Args:
        db_path: Path to the database file. If None, uses default from settings.

    Returns:
        SQLite connection in autocommit mode with ``sqlite3.Row`` rows.

    Raises:
        RuntimeError: If the database directory cannot be created or the database
            cannot be opened.
    """
    settings = get_settings()
    db_path = db_path or Path(settings.db_path)

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except (PermissionError, OSError) as e:
        raise RuntimeError(f"Cannot create database directory '{db_path.parent}': {e}") from e

    try:
        # Autocommit; the repository issues BEGIN/COMMIT/ROLLBACK itself.
        conn = sqlite3.connect(str(db_path), isolation_level=None)
    except sqlite3.OperationalError as e:
        raise RuntimeError(f"Cannot open database at '{db_path}': {e}") from e

    conn.row_factory = sqlite3.Row

    try:
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("PRAGMA temp_store = MEMORY")
    except sqlite3.Error as e:
        conn.close()
        raise RuntimeError(f"Failed to configure database pragmas for '{db_path}': {e}") from e

    logger.debug("Database connection established", db_path=str(db_path))
    return conn


def init_database(db_path: Path | None = None) -> None:
    """
    Create the database file and apply every pending migration.

    Raises:
        RuntimeError: If the database cannot be opened or migrations fail.
    """
    from courtbook.schema.migrations import run_migrations  # noqa: PLC0415

    conn = get_db_connection(db_path)
    conn.close()
    try:
        run_migrations(db_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        raise RuntimeError(f"Failed to initialize database: {e}") from e


def close_connection(conn: sqlite3.Connection) -> None:
    conn.close()
    logger.debug("Database connection closed")
