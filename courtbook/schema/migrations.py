"""Database schema migrations using yoyo-migrations."""

from pathlib import Path

import structlog
from yoyo import get_backend, read_migrations

from courtbook.utils.config import get_settings

logger = structlog.get_logger(__name__)


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory."""
    return Path(__file__).parent.parent.parent / "migrations"


def _get_db_uri(db_path: Path | None = None) -> str:
    settings = get_settings()
    resolved = db_path or Path(settings.db_path)
    return f"sqlite:///{resolved.resolve()}"


def run_migrations(db_path: Path | None = None, migrations_dir: Path | None = None) -> int:
    """
    Apply pending migrations.

    Args:
        db_path: Path to the SQLite database file. If None, uses default from settings.
        migrations_dir: Path to migrations directory. If None, uses default.

    Returns:
        Number of migrations applied.
    """
    migrations_dir = migrations_dir or get_migrations_dir()

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found, skipping migrations")
        return 0

    backend = get_backend(_get_db_uri(db_path))
    migrations = read_migrations(str(migrations_dir))

    with backend.lock():
        migrations_to_apply = backend.to_apply(migrations)
        if not migrations_to_apply:
            logger.info("No pending migrations")
            return 0
        logger.info("Applying migrations", count=len(migrations_to_apply))
        for migration in migrations_to_apply:
            logger.info("Applying migration", migration=migration.id)
            backend.apply_one(migration)
    logger.info("Migrations applied successfully")
    return len(migrations_to_apply)


def rollback_migration(db_path: Path | None = None, steps: int = 1) -> int:
    """
    Roll back the most recent migration(s).

    Args:
        db_path: Path to the SQLite database file. If None, uses default from settings.
        steps: Number of migrations to roll back; 0 rolls back all of them.

    Returns:
        Number of migrations rolled back.
    """
    backend = get_backend(_get_db_uri(db_path))
    migrations = read_migrations(str(get_migrations_dir()))

    with backend.lock():
        # Most recent first.
        all_to_rollback = list(backend.to_rollback(migrations))
        limited = all_to_rollback[:steps] if steps > 0 else all_to_rollback

        for migration in limited:
            logger.info("Rolling back migration", migration=migration.id)
            backend.rollback_one(migration)

    logger.info("Migrations rolled back", count=len(limited))
    return len(limited)


def migration_status(db_path: Path | None = None) -> list[tuple[str, bool]]:
    """Every known migration id with whether it has been applied."""
    backend = get_backend(_get_db_uri(db_path))
    migrations = read_migrations(str(get_migrations_dir()))
    applied = {migration.id for migration in backend.to_rollback(migrations)}
    return [(migration.id, migration.id in applied) for migration in migrations]
