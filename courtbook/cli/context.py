"""Shared plumbing for CLI commands: opening the service and reporting failures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn

import structlog
import typer

from courtbook.exceptions import CourtbookError
from courtbook.repository import Repository
from courtbook.schema.connection import close_connection, get_db_connection
from courtbook.service import StatsService
from courtbook.utils.config import get_settings
from courtbook.utils.logging import log_context

logger = structlog.get_logger(__name__)

# Failures a command reports as [FAIL] instead of a traceback.
COMMAND_ERRORS = (CourtbookError, sqlite3.Error, RuntimeError)

DB_PATH_OPTION = typer.Option(
    None,
    "--db-path",
    help="Path to SQLite database file",
    envvar="COURTBOOK_DB_PATH",
)


@contextmanager
def open_service(db_path: Path | None = None) -> Iterator[StatsService]:
    """Yield a StatsService over a fresh connection, closed on exit."""
    settings = get_settings()
    log_context(db_path=str(db_path or settings.db_path))
    conn = get_db_connection(db_path)
    try:
        yield StatsService(Repository(conn, settings.conference_fallback), settings)
    finally:
        close_connection(conn)


def fail(action: str, error: Exception) -> NoReturn:
    """Log and print a failure, then exit with status 1."""
    logger.error(f"{action} failed", error=str(error), error_type=type(error).__name__)
    typer.echo(f"[FAIL] {action} failed: {error}", err=True)
    raise typer.Exit(code=1) from error
