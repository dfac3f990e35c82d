"""Game commands: add, delete, list."""

import uuid
from pathlib import Path
from typing import Any

import structlog
import typer

from courtbook.cli.context import COMMAND_ERRORS, DB_PATH_OPTION, fail, open_service
from courtbook.engine.stats import format_shooting, format_total
from courtbook.models.stats import STAT_KEYS

games_app = typer.Typer(help="Record and remove games.")

logger = structlog.get_logger(__name__)


def parse_stats(pairs: list[str] | None) -> dict[str, float]:
    """
    Parse ``key=value`` pairs into a stat mapping.

    Raises:
        typer.BadParameter: On a malformed pair, unknown key or non-numeric value,
            or a fractional value for a stat other than minutes.
    """
    stats: dict[str, float] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or key not in STAT_KEYS:
            raise typer.BadParameter(
                f"'{pair}' is not key=value with key in: {', '.join(STAT_KEYS)}",
                param_hint="--stat",
            )
        try:
            value = float(raw)
        except ValueError as e:
            raise typer.BadParameter(f"'{raw}' is not a number", param_hint="--stat") from e
        if key != "minutes" and not value.is_integer():
            raise typer.BadParameter(
                f"'{key}' takes a whole number, got '{raw}'", param_hint="--stat"
            )
        stats[key] = value if key == "minutes" else int(value)
    return stats


@games_app.command()
def add(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(..., "--season", "-s", help="Season id"),
    game_date: str = typer.Option(..., "--date", "-d", help="Game date (YYYY-MM-DD)"),
    opponent: str = typer.Option(None, "--opponent", "-o", help="Opponent team id"),
    opponent_name: str = typer.Option(None, "--opponent-name", help="Opponent team name"),
    home: bool = typer.Option(True, "--home/--away", help="Home or away game"),
    score: int = typer.Option(0, "--score", help="Player's team score"),
    opponent_score: int = typer.Option(0, "--opponent-score", help="Opponent score"),
    started: bool | None = typer.Option(
        None, "--started/--bench", help="In the starting lineup"
    ),
    playoff: bool = typer.Option(False, "--playoff", help="Playoff game"),
    series_id: str = typer.Option(None, "--series", help="Playoff series id"),
    game_number: int = typer.Option(None, "--game-number", help="Game number in series (1-7)"),
    key_game: bool = typer.Option(False, "--key-game", help="Key game"),
    cup: bool = typer.Option(False, "--cup", help="NBA Cup game"),
    overtime: bool = typer.Option(False, "--overtime", help="Went to overtime"),
    simulated: bool = typer.Option(False, "--simulated", help="Simulated game"),
    stat: list[str] = typer.Option(
        None, "--stat", help="Box-score value as key=value, e.g. points=31 (repeatable)"
    ),
    game_id: str = typer.Option(None, "--id", help="Game id (default: generated)"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Record one game for a player."""
    record: dict[str, Any] = {
        "id": game_id or uuid.uuid4().hex,
        "player_id": player,
        "season_id": season_id,
        "game_date": game_date,
        "opponent_team_id": opponent,
        "opponent_team_name": opponent_name,
        "is_home": home,
        "player_score": score,
        "opponent_score": opponent_score,
        "started": started,
        "is_playoff_game": playoff or series_id is not None,
        "playoff_series_id": series_id,
        "playoff_game_number": game_number,
        "is_key_game": key_game,
        "is_cup_game": cup,
        "is_overtime": overtime,
        "is_simulated": simulated,
        **parse_stats(stat),
    }

    try:
        with open_service(db_path) as service:
            game = service.save_game(record)
    except COMMAND_ERRORS as e:
        fail("Saving game", e)

    result = "W" if game.is_win else "L"
    typer.echo(f"[OK] Saved game {game.id} ({result} {game.player_score}-{game.opponent_score})")


@games_app.command()
def delete(
    game_id: str = typer.Argument(..., help="Game id"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Delete a game."""
    try:
        with open_service(db_path) as service:
            service.delete_game(game_id)
    except COMMAND_ERRORS as e:
        fail("Deleting game", e)
    typer.echo(f"[OK] Deleted game {game_id}")


@games_app.command("list")
def list_games(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(None, "--season", "-s", help="Season id (default: all)"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """List a player's game log."""
    try:
        with open_service(db_path) as service:
            games = service.repository.fetch_games(player, season_id)
    except COMMAND_ERRORS as e:
        fail("Listing games", e)

    if not games:
        typer.echo(f"No games recorded for {player}")
        return

    typer.echo(f"\n{'DATE':<12}{'OPP':<22}{'RES':<10}{'PTS':>5}{'REB':>5}{'AST':>5}  FG")
    for game in games:
        where = "vs" if game.is_home else "@"
        opponent = f"{where} {game.opponent_team_name or game.opponent_team_id or '?'}"
        result = f"{'W' if game.is_win else 'L'} {game.player_score}-{game.opponent_score}"
        typer.echo(
            f"{game.game_date:<12}{opponent:<22}{result:<10}"
            f"{format_total(game.points):>5}{format_total(game.rebounds):>5}"
            f"{format_total(game.assists):>5}  {format_shooting(game.fg_made, game.fg_attempted)}"
        )
