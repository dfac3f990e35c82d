"""Command-line interface for Courtbook."""

import typer

from courtbook.utils.config import ensure_directories
from courtbook.utils.logging import setup_logging

from .admin import admin_app
from .games import games_app
from .playoffs import playoffs_app
from .stats import stats_app

ensure_directories()
setup_logging()

app = typer.Typer(
    name="courtbook",
    help="Courtbook - player stat tracking and playoff brackets",
    add_completion=False,
)

app.add_typer(admin_app, name="admin")
app.add_typer(stats_app, name="stats")
app.add_typer(playoffs_app, name="playoffs")
app.add_typer(games_app, name="games")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
