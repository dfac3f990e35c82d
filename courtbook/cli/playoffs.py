"""Playoff commands: bracket, add-series, set-wins, delete-series."""

from pathlib import Path

import structlog
import typer

from courtbook.cli.context import COMMAND_ERRORS, DB_PATH_OPTION, fail, open_service
from courtbook.engine.bracket import BracketSeries, BracketTree
from courtbook.engine.conference import get_team_by_id
from courtbook.engine.series import ROUNDS, TeamRef

playoffs_app = typer.Typer(help="Playoff series and brackets.")

logger = structlog.get_logger(__name__)

ROUND_TITLES = {1: "Round 1", 2: "Conference Semifinals", 3: "Conference Finals"}


def _series_line(entry: BracketSeries) -> str:
    series = entry.series
    seed1 = f"({series.team1_seed}) " if series.team1_seed else ""
    seed2 = f"({series.team2_seed}) " if series.team2_seed else ""
    winner = series.winner_team_name or series.winner_team_id
    status = f"{winner} wins" if series.is_complete else "in progress"
    games = f", {len(entry.games)} game(s) played" if entry.games else ""
    return (
        f"    {seed1}{entry.team1_abbrev} {series.team1_wins}-{series.team2_wins} "
        f"{seed2}{entry.team2_abbrev}  [{status}{games}]  {series.id}"
    )


def _echo_bracket(tree: BracketTree) -> None:
    sections: list[tuple[str, list[BracketSeries]]] = [("NBA Finals", tree.finals)]
    for conference, rounds, play_in in (
        ("West", tree.west, tree.west_play_in),
        ("East", tree.east, tree.east_play_in),
    ):
        for number in sorted(rounds, reverse=True):
            title = ROUND_TITLES.get(number, f"Round {number}")
            sections.append((f"{conference} - {title}", rounds[number]))
        sections.append((f"{conference} - Play-In", play_in))
    sections.append(("Unresolved conference", tree.unresolved))

    for title, entries in sections:
        if not entries:
            continue
        typer.echo(f"\n  {title}")
        for entry in entries:
            typer.echo(_series_line(entry))


@playoffs_app.command()
def bracket(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(..., "--season", "-s", help="Season id"),
    team_name: str = typer.Option(
        None, "--team-name", help="Player's team, for matching games by team name"
    ),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Show a season's playoff bracket."""
    try:
        with open_service(db_path) as service:
            tree = service.bracket(player, season_id, team_name)
    except COMMAND_ERRORS as e:
        fail("Bracket", e)

    if tree.is_empty:
        typer.echo(f"No playoff series recorded for {player} in {season_id}")
        return
    _echo_bracket(tree)


def _team_ref(team_id: str | None, name: str | None) -> TeamRef:
    if team_id and not name:
        info = get_team_by_id(team_id)
        name = info.full_name if info else None
    return TeamRef(team_id, name)


@playoffs_app.command("add-series")
def add_series(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(..., "--season", "-s", help="Season id"),
    round_name: str = typer.Option(
        ..., "--round", "-r", help=f"Round name: {', '.join(ROUNDS)}"
    ),
    team1: str = typer.Option(None, "--team1", help="First team id, e.g. team-bos"),
    team2: str = typer.Option(None, "--team2", help="Second team id"),
    team1_name: str = typer.Option(None, "--team1-name", help="First team display name"),
    team2_name: str = typer.Option(None, "--team2-name", help="Second team display name"),
    seed1: int = typer.Option(None, "--seed1", help="First team seed (1-10)"),
    seed2: int = typer.Option(None, "--seed2", help="Second team seed (1-10)"),
    wins1: int = typer.Option(0, "--wins1", help="First team wins"),
    wins2: int = typer.Option(0, "--wins2", help="Second team wins"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Create a playoff series with a generated id."""
    if round_name not in ROUNDS:
        typer.echo(
            f"[FAIL] Unknown round '{round_name}'. Choose from: {', '.join(ROUNDS)}", err=True
        )
        raise typer.Exit(code=1)

    try:
        with open_service(db_path) as service:
            series = service.repository.create_playoff_series(
                player,
                season_id,
                round_name,
                _team_ref(team1, team1_name),
                _team_ref(team2, team2_name),
                team1_seed=seed1,
                team2_seed=seed2,
                team1_wins=wins1,
                team2_wins=wins2,
            )
    except COMMAND_ERRORS as e:
        fail("Adding series", e)
    typer.echo(f"[OK] Created series {series.id}")


@playoffs_app.command("set-wins")
def set_wins(
    series_id: str = typer.Argument(..., help="Series id"),
    team1_wins: int = typer.Argument(..., help="First team wins"),
    team2_wins: int = typer.Argument(..., help="Second team wins"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Update a series' win counts; the winner is re-derived."""
    try:
        with open_service(db_path) as service:
            series = service.repository.update_series_wins(series_id, team1_wins, team2_wins)
    except COMMAND_ERRORS as e:
        fail("Updating series", e)

    winner = series.winner_team_name or series.winner_team_id
    suffix = f" - {winner} wins the series" if series.is_complete else ""
    typer.echo(f"[OK] {series.id}: {series.team1_wins}-{series.team2_wins}{suffix}")


@playoffs_app.command("delete-series")
def delete_series(
    series_id: str = typer.Argument(..., help="Series id"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Delete a playoff series."""
    try:
        with open_service(db_path) as service:
            service.repository.delete_playoff_series(series_id)
    except COMMAND_ERRORS as e:
        fail("Deleting series", e)
    typer.echo(f"[OK] Deleted series {series_id}")
