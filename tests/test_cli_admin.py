"""Tests for admin CLI commands."""

from unittest.mock import patch

from typer.testing import CliRunner

from courtbook.cli import app

runner = CliRunner()


def test_admin_init_success():
    with patch("courtbook.cli.admin.init_database") as mock_init:
        result = runner.invoke(app, ["admin", "init"])

    assert result.exit_code == 0
    assert "[OK] Database initialized" in result.output
    mock_init.assert_called_once()


def test_admin_init_failure():
    with patch("courtbook.cli.admin.init_database", side_effect=RuntimeError("disk full")):
        result = runner.invoke(app, ["admin", "init"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_admin_init_creates_schema(tmp_path):
    db = tmp_path / "new.db"
    result = runner.invoke(app, ["admin", "init", "--db-path", str(db)])

    assert result.exit_code == 0
    assert db.exists()


def test_admin_migrate_apply():
    with patch("courtbook.cli.admin.run_migrations", return_value=1) as mock_run:
        result = runner.invoke(app, ["admin", "migrate"])

    assert result.exit_code == 0
    assert "Applied 1 migration(s)" in result.output
    mock_run.assert_called_once()


def test_admin_migrate_rollback():
    with patch("courtbook.cli.admin.rollback_migration", return_value=1) as mock_rb:
        result = runner.invoke(app, ["admin", "migrate", "--rollback"])

    assert result.exit_code == 0
    assert "Rolled back 1 migration(s)" in result.output
    mock_rb.assert_called_once()


def test_admin_migrate_rollback_steps():
    with patch("courtbook.cli.admin.rollback_migration", return_value=3) as mock_rb:
        result = runner.invoke(app, ["admin", "migrate", "--rollback", "--steps", "3"])

    assert result.exit_code == 0
    mock_rb.assert_called_once_with(None, steps=3)


def test_admin_migrate_failure():
    with patch("courtbook.cli.admin.rollback_migration", side_effect=RuntimeError("failed")):
        result = runner.invoke(app, ["admin", "migrate", "--rollback"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_admin_status_no_database(tmp_path, patch_settings):
    patch_settings.db_path = str(tmp_path / "nonexistent.db")
    result = runner.invoke(app, ["admin", "status"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_admin_status_success(fresh_db_path):
    result = runner.invoke(app, ["admin", "status", "--db-path", str(fresh_db_path)])

    assert result.exit_code == 0
    assert "Database Status" in result.output
    assert "[OK] 0001_initial" in result.output
    assert "playoff_series: (empty)" in result.output


def test_admin_status_db_open_error(tmp_path):
    db = tmp_path / "test.db"
    db.touch()
    with patch("courtbook.cli.admin.get_db_connection", side_effect=RuntimeError("locked")):
        result = runner.invoke(app, ["admin", "status", "--db-path", str(db)])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_admin_seed_teams(fresh_db_path):
    result = runner.invoke(app, ["admin", "seed-teams", "--db-path", str(fresh_db_path)])

    assert result.exit_code == 0
    assert "[OK] Seeded 30 teams" in result.output

    status = runner.invoke(app, ["admin", "status", "--db-path", str(fresh_db_path)])
    assert "team: 30 rows" in status.output
