"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_db_path():
    """Create a temporary database path for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)


@pytest.fixture(scope="session")
def migrated_db_path(tmp_path_factory):
    """Run migrations once per session into a shared temp database."""
    from courtbook.schema.migrations import run_migrations

    db = tmp_path_factory.mktemp("session_db") / "test.db"
    run_migrations(db)
    return db


@pytest.fixture
def db_connection(migrated_db_path):
    """Connection to the session-migrated DB; tests use distinct ids."""
    from courtbook.schema.connection import get_db_connection

    conn = get_db_connection(migrated_db_path)
    yield conn
    conn.close()


@pytest.fixture
def fresh_db_path(tmp_path):
    """A migrated database private to one test."""
    from courtbook.schema.migrations import run_migrations

    db = tmp_path / "fresh.db"
    run_migrations(db)
    return db


@pytest.fixture
def repository(fresh_db_path):
    """Repository over a fresh database with teams, two seasons and one player."""
    from courtbook.models import Player, Season
    from courtbook.repository import Repository
    from courtbook.schema.connection import get_db_connection

    conn = get_db_connection(fresh_db_path)
    repo = Repository(conn)
    repo.seed_teams()
    repo.add_season(Season(id="season-2324", year_start=2023, year_end=2024))
    repo.add_season(Season(id="season-2425", year_start=2024, year_end=2025))
    repo.add_player(
        Player(
            id="player-7",
            player_name="Jordan Hale",
            team_id="team-bos",
            position="SG",
            career_highs={"points": 48},
        )
    )
    yield repo
    conn.close()


@pytest.fixture
def sample_settings():
    """Sample settings for testing."""
    from courtbook.utils.config import Settings

    return Settings(
        db_path=":memory:",
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def make_game():
    """Factory for GameStatRecord with sensible defaults."""
    from courtbook.models import GameStatRecord

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"game-{counter['n']}",
            "player_id": "player-7",
            "season_id": "season-2425",
            "game_date": f"2024-11-{counter['n']:02d}",
            "opponent_team_id": "team-nyk",
            "opponent_team_name": "New York Knicks",
            "player_score": 110,
            "opponent_score": 100,
        }
        data.update(overrides)
        return GameStatRecord(**data)

    return _make


@pytest.fixture
def patch_settings(sample_settings):
    """Patch get_settings globally for CLI tests."""
    from unittest.mock import patch

    with (
        patch("courtbook.utils.config.get_settings", return_value=sample_settings),
        patch("courtbook.cli.admin.get_settings", return_value=sample_settings),
        patch("courtbook.cli.context.get_settings", return_value=sample_settings),
    ):
        yield sample_settings
