"""Admin commands: init, migrate, status, seed-teams."""

from pathlib import Path

import structlog
import typer

from courtbook.cli.context import COMMAND_ERRORS, DB_PATH_OPTION, fail, open_service
from courtbook.schema.connection import close_connection, get_db_connection, init_database
from courtbook.schema.migrations import migration_status, rollback_migration, run_migrations
from courtbook.utils.config import get_settings

admin_app = typer.Typer(help="Database administration commands.")

logger = structlog.get_logger(__name__)


@admin_app.command()
def init(db_path: Path = DB_PATH_OPTION) -> None:
    """
    Initialize the database schema.

    Creates the database file and runs all pending migrations.
    """
    logger.info("Initializing database", db_path=str(db_path))
    try:
        init_database(db_path)
    except RuntimeError as e:
        fail("Database initialization", e)
    typer.echo(f"[OK] Database initialized at {db_path or get_settings().db_path}")


@admin_app.command()
def migrate(
    rollback: bool = typer.Option(
        False,
        "--rollback",
        "-r",
        help="Rollback the most recent migration",
    ),
    steps: int = typer.Option(
        1,
        "--steps",
        "-n",
        help="Number of migrations to rollback (0 = all)",
    ),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """
    Run database migrations.

    Applies pending migrations by default. Use --rollback to undo migrations.
    """
    try:
        if rollback:
            logger.info("Rolling back migrations", steps=steps)
            count = rollback_migration(db_path, steps=steps)
        else:
            logger.info("Running migrations")
            count = run_migrations(db_path)
    except Exception as e:
        fail("Migration", e)

    if rollback:
        typer.echo(f"[OK] Rolled back {count} migration(s)")
    else:
        typer.echo(f"[OK] Applied {count} migration(s)")


@admin_app.command()
def status(db_path: Path = DB_PATH_OPTION) -> None:
    """Show applied migrations and row counts per table."""
    resolved = db_path or Path(get_settings().db_path)
    if not resolved.exists():
        typer.echo("Database not found. Run 'courtbook admin init' to create it.", err=True)
        raise typer.Exit(code=1)

    try:
        conn = get_db_connection(resolved)
    except RuntimeError as e:
        fail("Opening database", e)

    try:
        table_names = [
            row[0]
            for row in conn.execute(
                """
                SELECT name FROM sqlite_master
                WHERE type = 'table'
                    AND name NOT LIKE 'sqlite_%'
                    AND name NOT LIKE '_yoyo_%'
                    AND name != 'yoyo_lock'
                ORDER BY name
                """
            ).fetchall()
        ]
        counts = {
            name: conn.execute(f'SELECT COUNT(*) FROM "{name}"').fetchone()[0]  # noqa: S608
            for name in table_names
        }
        migrations = migration_status(resolved)
    except COMMAND_ERRORS as e:
        fail("Status", e)
    finally:
        close_connection(conn)

    typer.echo(f"\nDatabase Status: {resolved}")
    typer.echo(f"   Size: {resolved.stat().st_size / 1024:.1f} KB\n")
    typer.echo("Migrations:")
    for migration_id, applied in migrations:
        typer.echo(f"  {'[OK]' if applied else '[--]'} {migration_id}")
    typer.echo("\nTables:")
    for name, count in counts.items():
        typer.echo(f"  - {name}: {f'{count:,} rows' if count else '(empty)'}")


@admin_app.command("seed-teams")
def seed_teams(db_path: Path = DB_PATH_OPTION) -> None:
    """Insert or refresh the 30 league teams."""
    try:
        with open_service(db_path) as service:
            count = service.repository.seed_teams()
    except COMMAND_ERRORS as e:
        fail("Seeding teams", e)
    typer.echo(f"[OK] Seeded {count} teams")
