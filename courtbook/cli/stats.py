"""Stats commands: season, career, splits, highs."""

from pathlib import Path

import structlog
import typer

from courtbook.cli.context import COMMAND_ERRORS, DB_PATH_OPTION, fail, open_service
from courtbook.engine.stats import (
    PLACEHOLDER,
    format_average,
    format_percentage,
    format_shooting,
    format_total,
)
from courtbook.models.stats import SHOOTING_PAIRS, STAT_KEYS, STAT_LABELS, StatLine

stats_app = typer.Typer(help="Season, career and split statistics.")

logger = structlog.get_logger(__name__)


def _echo_stat_lines(totals: StatLine, averages: StatLine) -> None:
    typer.echo(f"  {'':<5}{'TOTAL':>9}{'AVG':>9}")
    for key in STAT_KEYS:
        total = totals.get(key)
        if total is None:
            continue
        typer.echo(
            f"  {STAT_LABELS[key]:<5}{format_total(total):>9}"
            f"{format_average(averages.get(key)):>9}"
        )


def _echo_percentages(totals: StatLine, percentages: dict[str, float | None]) -> None:
    for name, made_key, attempted_key in SHOOTING_PAIRS:
        shooting = format_shooting(totals.get(made_key), totals.get(attempted_key))
        typer.echo(f"  {STAT_LABELS[name]:<5}{format_percentage(percentages[name]):>9}  {shooting}")


@stats_app.command()
def season(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(..., "--season", "-s", help="Season id"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Show a player's totals and averages for one season."""
    try:
        with open_service(db_path) as service:
            label = service.repository.fetch_season(season_id).label
            totals = service.season_totals(player, season_id)
    except COMMAND_ERRORS as e:
        fail("Season stats", e)

    if totals is None:
        typer.echo(f"No stats recorded for {player} in {label}")
        return

    source = "manual entry" if totals.is_manual_entry else "from games"
    typer.echo(f"\n{player} - {label} ({source})")
    started = totals.games_started if totals.games_started is not None else PLACEHOLDER
    typer.echo(f"  GP {totals.games_played}  GS {started}\n")
    _echo_stat_lines(totals.totals, totals.averages)
    _echo_percentages(
        totals.totals,
        {
            "fg_percentage": totals.fg_percentage,
            "three_pt_percentage": totals.three_pt_percentage,
            "ft_percentage": totals.ft_percentage,
        },
    )
    typer.echo(f"  DD {totals.double_doubles}  TD {totals.triple_doubles}")


@stats_app.command()
def career(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Show season-by-season lines and career totals."""
    try:
        with open_service(db_path) as service:
            rows = service.season_rows(player)
            totals = service.career_totals(player)
    except COMMAND_ERRORS as e:
        fail("Career stats", e)

    if not rows:
        typer.echo(f"No seasons recorded for {player}")
        return

    typer.echo(f"\n{'SEASON':<9}{'GP':>4}{'PTS':>7}{'REB':>7}{'AST':>7}{'FG%':>7}  AWARDS")
    for row in rows:
        line = row.totals
        awards = ", ".join(award.award_name for award in row.awards)
        if line is None:
            typer.echo(f"{row.season.label:<9}{PLACEHOLDER:>4}{'':>28}  {awards}")
            continue
        typer.echo(
            f"{row.season.label:<9}{line.games_played:>4}"
            f"{format_average(line.averages.points):>7}"
            f"{format_average(line.averages.rebounds):>7}"
            f"{format_average(line.averages.assists):>7}"
            f"{format_percentage(line.fg_percentage):>7}  {awards}"
        )

    typer.echo(f"\nCareer: {totals.seasons} season(s), {totals.games_played} games\n")
    _echo_stat_lines(totals.totals, totals.averages)
    _echo_percentages(
        totals.totals,
        {
            "fg_percentage": totals.fg_percentage,
            "three_pt_percentage": totals.three_pt_percentage,
            "ft_percentage": totals.ft_percentage,
        },
    )
    typer.echo(f"  DD {totals.double_doubles}  TD {totals.triple_doubles}")


@stats_app.command()
def splits(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(None, "--season", "-s", help="Season id (default: all)"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Show win-loss and averages for every game split with games."""
    try:
        with open_service(db_path) as service:
            summaries = service.splits(player, season_id)
    except COMMAND_ERRORS as e:
        fail("Splits", e)

    if not summaries:
        typer.echo(f"No games recorded for {player}")
        return

    typer.echo(f"\n{'SPLIT':<11}{'W-L':>7}{'GP':>4}{'PTS':>7}{'REB':>7}{'AST':>7}{'FG%':>7}")
    for summary in summaries:
        stats = summary.stats
        typer.echo(
            f"{summary.name:<11}{summary.record:>7}{stats.games_played:>4}"
            f"{format_average(stats.averages.points):>7}"
            f"{format_average(stats.averages.rebounds):>7}"
            f"{format_average(stats.averages.assists):>7}"
            f"{format_percentage(stats.percentages['fg_percentage']):>7}"
        )


@stats_app.command()
def highs(
    player: str = typer.Option(..., "--player", "-p", help="Player id"),
    season_id: str = typer.Option(None, "--season", "-s", help="Limit game highs to a season"),
    db_path: Path = DB_PATH_OPTION,
) -> None:
    """Show single-game highs and merged career highs."""
    try:
        with open_service(db_path) as service:
            game_highs = service.game_highs(player, season_id)
            career_highs = service.career_highs(player)
    except COMMAND_ERRORS as e:
        fail("Highs", e)

    typer.echo("\nGame highs:")
    if not game_highs:
        typer.echo(f"  {PLACEHOLDER}")
    for stat, high in game_highs.items():
        latest = high.games[0]
        where = "vs" if latest.is_home else "@"
        more = f" (+{len(high.games) - 1} more)" if len(high.games) > 1 else ""
        typer.echo(
            f"  {STAT_LABELS[stat]:<5}{format_total(high.value):>5}  "
            f"{latest.game_date} {where} {latest.opponent}{more}"
        )

    typer.echo("\nCareer highs:")
    if not career_highs:
        typer.echo(f"  {PLACEHOLDER}")
    for stat, value in career_highs.items():
        typer.echo(f"  {STAT_LABELS[stat]:<5}{format_total(value):>5}")
