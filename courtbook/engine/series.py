"""Playoff series rounds, winner resolution and identifier generation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import structlog

from courtbook.engine.conference import ConferenceFallback, resolve_series_conference
from courtbook.models.playoff import PlayoffSeries
from courtbook.models.season import Season

logger = structlog.get_logger(__name__)

WINS_TO_CLINCH = 4

PLAY_IN_ROUND = "Play-In Tournament"
FINALS_ROUND = "NBA Finals"

ROUNDS: tuple[str, ...] = (
    PLAY_IN_ROUND,
    "Round 1",
    "Conference Semifinals",
    "Conference Finals",
    FINALS_ROUND,
)

ROUND_NUMBERS: dict[str, int] = {name: number for number, name in enumerate(ROUNDS)}

ROUND_ABBREVIATIONS: dict[str, str] = {
    PLAY_IN_ROUND: "plyn",
    "Round 1": "rnd1",
    "Conference Semifinals": "rnd2",
    "Conference Finals": "cnf",
    FINALS_ROUND: "fnl",
}

CONFERENCE_LETTERS: dict[str | None, str] = {"East": "e", "West": "w", None: "u"}


class TeamRef(NamedTuple):
    """A series participant: id plus display name."""

    id: str | None
    name: str | None = None


class SeriesOutcome(NamedTuple):
    winner_id: str | None
    winner_name: str | None
    is_complete: bool


def resolve_series_winner(
    team1: TeamRef, team1_wins: int, team2: TeamRef, team2_wins: int
) -> SeriesOutcome:
    """
    Derive the winner from live win counts.

    A team wins, and the series is complete, as soon as it has 4 wins and a
    non-empty id. Otherwise there is no winner.
    """
    if team1_wins >= WINS_TO_CLINCH and team1.id:
        return SeriesOutcome(team1.id, team1.name, True)
    if team2_wins >= WINS_TO_CLINCH and team2.id:
        return SeriesOutcome(team2.id, team2.name, True)
    return SeriesOutcome(None, None, False)


def apply_outcome(series: PlayoffSeries) -> PlayoffSeries:
    """Return a copy of ``series`` whose winner fields match its win counts."""
    outcome = resolve_series_winner(
        TeamRef(series.team1_id, series.team1_name),
        series.team1_wins,
        TeamRef(series.team2_id, series.team2_name),
        series.team2_wins,
    )
    return series.model_copy(
        update={
            "winner_team_id": outcome.winner_id,
            "winner_team_name": outcome.winner_name,
            "is_complete": outcome.is_complete,
        }
    )


def round_abbreviation(round_name: str) -> str:
    """Short code for a round; unknown names map to 'rnd1'."""
    return ROUND_ABBREVIATIONS.get(round_name, "rnd1")


def season_year_short(year_start: int, year_end: int) -> str:
    """Two-digit years joined, e.g. 2023, 2024 → '2324'."""
    return f"{str(year_start)[-2:]}{str(year_end)[-2:]}"


def player_number(player_id: str | None) -> str:
    """The numeric part of a player id ('player-7' → '7'); '0' without an id."""
    if not player_id:
        return "0"
    parts = player_id.split("-", 1)
    return parts[1] if len(parts) > 1 and parts[1] else player_id


def generate_series_id(
    season: Season,
    round_name: str,
    team1_id: str | None,
    team2_id: str | None,
    player_id: str | None,
    existing_series: Iterable[PlayoffSeries] | None = None,
    conference_fallback: ConferenceFallback | str = ConferenceFallback.UNKNOWN,
) -> str:
    """
    Build a readable, collision-free id for a new series.

    Format: ``{player}-{yyyy}-{round}[-{e|w|u}]`` with the conference letter
    left off for the Finals. When n existing series of the same season and
    player already start with that base, ``-{n+1}`` is appended, so duplicates
    are numbered in creation order.

    Raises:
        UnknownTeamError: If a team is unrecognized and the fallback is ERROR.
    """
    base_id = (
        f"{player_number(player_id)}-"
        f"{season_year_short(season.year_start, season.year_end)}-"
        f"{round_abbreviation(round_name)}"
    )
    if round_name != FINALS_ROUND:
        conference = resolve_series_conference(team1_id, team2_id, conference_fallback)
        base_id = f"{base_id}-{CONFERENCE_LETTERS[conference]}"

    if existing_series is None:
        return base_id

    matching = {
        series.id
        for series in existing_series
        if series.id.startswith(base_id)
        and series.season_id == season.id
        and series.player_id == player_id
    }
    if not matching:
        return base_id

    suffix = len(matching) + 1
    # A deleted series can leave a gap; skip past any suffix still taken.
    while f"{base_id}-{suffix}" in matching:
        suffix += 1
    series_id = f"{base_id}-{suffix}"
    logger.debug("Disambiguated series id", base_id=base_id, series_id=series_id)
    return series_id
