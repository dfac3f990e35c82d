"""Tests for structured logging setup."""

import json
import logging
from unittest.mock import patch

import pytest
import structlog


@pytest.fixture
def configure(tmp_path):
    """Run setup_logging against settings rooted in tmp_path."""
    from courtbook.utils.config import Settings
    from courtbook.utils.logging import setup_logging

    def _configure(**overrides):
        values = {"log_dir": str(tmp_path / "logs"), "log_format": "console", **overrides}
        settings = Settings(**values)
        with patch("courtbook.utils.logging.get_settings", return_value=settings):
            setup_logging()
        return settings

    yield _configure
    logging.getLogger().handlers.clear()


def _renderer_names(handler):
    return [type(p).__name__ for p in getattr(handler.formatter, "processors", ())]


def test_console_renderer_on_stderr(configure):
    configure()

    renderers = [name for h in logging.getLogger().handlers for name in _renderer_names(h)]
    assert "ConsoleRenderer" in renderers


def test_json_format_on_console(configure):
    configure(log_format="json")

    stream_handlers = [
        h for h in logging.getLogger().handlers if not isinstance(h, logging.FileHandler)
    ]
    assert "JSONRenderer" in _renderer_names(stream_handlers[0])


def test_log_file_written_as_json_lines(configure):
    from courtbook.utils.logging import get_active_log_file

    configure(log_level="DEBUG")
    log_file = get_active_log_file()
    assert log_file is not None
    assert log_file.name.startswith("courtbook_")

    structlog.get_logger("courtbook.test").info("Saved game", game_id="g-1")
    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    saved = [r for r in records if r.get("event") == "Saved game"]
    assert saved[0]["game_id"] == "g-1"
    assert saved[0]["level"] == "info"


def test_setup_is_idempotent(configure):
    configure()
    configure()

    assert len(logging.getLogger().handlers) == 2


def test_unwritable_log_dir_falls_back_to_stderr(configure, capsys):
    from courtbook.utils.logging import get_active_log_file

    with patch("pathlib.Path.mkdir", side_effect=PermissionError("permission denied")):
        configure()

    assert get_active_log_file() is None
    assert len(logging.getLogger().handlers) == 1
    assert "Could not create log directory" in capsys.readouterr().err


def test_get_logger_binds_name():
    from courtbook.utils.logging import get_logger

    logger = get_logger("courtbook.repository")
    assert logger is not None


def test_log_context_binds_and_clears():
    from courtbook.utils.logging import clear_log_context, log_context

    clear_log_context()
    log_context(player_id="player-7", season_id="season-2425")

    ctx = structlog.contextvars.get_contextvars()
    assert ctx["player_id"] == "player-7"

    clear_log_context("season_id")
    ctx = structlog.contextvars.get_contextvars()
    assert "season_id" not in ctx
    assert ctx.get("player_id") == "player-7"

    clear_log_context()
    assert structlog.contextvars.get_contextvars() == {}
