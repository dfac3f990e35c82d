"""Season aggregation: games → season totals, reconciled with manual entries.

When a season has games, its totals are always computed from those games and
any manually entered totals row for the season is ignored. A manual row is
only used, verbatim, for seasons without games.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from courtbook.engine.derived import (
    count_double_doubles,
    count_triple_doubles,
    shooting_percentages,
)
from courtbook.engine.stats import stats_from_game
from courtbook.models.award import Award
from courtbook.models.game import GameStatRecord
from courtbook.models.season import Season, SeasonTotals
from courtbook.models.stats import StatLine

logger = structlog.get_logger(__name__)

AVERAGE_DECIMALS = 3


@dataclass(frozen=True)
class GameAggregate:
    """Sums, averages and derived counts over a set of games."""

    games_played: int
    games_started: int | None
    totals: StatLine
    averages: StatLine
    percentages: dict[str, float | None]
    double_doubles: int
    triple_doubles: int


@dataclass(frozen=True)
class SeasonRow:
    """One line of a season-by-season table."""

    season: Season
    totals: SeasonTotals | None
    awards: list[Award] = field(default_factory=list)


def per_game(total: float | None, games_played: int) -> float | None:
    """Average ``total`` over ``games_played``; None when either is missing."""
    if total is None or games_played <= 0:
        return None
    return round(total / games_played, AVERAGE_DECIMALS)


def aggregate_games(games: Sequence[GameStatRecord]) -> GameAggregate:
    """
    Sum every recorded stat across ``games``.

    A stat no game recorded stays absent in the totals instead of becoming 0.
    Averages divide by the number of games; double/triple-doubles are counted
    game by game.
    """
    sums: dict[str, float] = {}
    for game in games:
        for key, value in stats_from_game(game).items():
            sums[key] = sums.get(key, 0) + value

    games_played = len(games)
    totals = StatLine.from_mapping(sums)
    averages = StatLine.from_mapping(
        {key: per_game(value, games_played) for key, value in sums.items()}
    )

    started_flags = [game.started for game in games if game.started is not None]
    games_started = sum(1 for flag in started_flags if flag) if started_flags else None

    return GameAggregate(
        games_played=games_played,
        games_started=games_started,
        totals=totals,
        averages=averages,
        percentages=shooting_percentages(totals),
        double_doubles=count_double_doubles(games),
        triple_doubles=count_triple_doubles(games),
    )


def compute_season_totals(
    player_id: str,
    season_id: str,
    games: Iterable[GameStatRecord],
    manual_override: SeasonTotals | None = None,
) -> SeasonTotals | None:
    """
    Compute a player's totals for one season.

    Args:
        player_id: Player to aggregate.
        season_id: Season to aggregate.
        games: Any collection of games; filtered to this player and season.
        manual_override: Manually entered totals for this (player, season).

    Returns:
        Totals computed from games when the season has any; otherwise a copy
        of the manual entry; otherwise None (the season has no data).
    """
    season_games = [g for g in games if g.player_id == player_id and g.season_id == season_id]

    if manual_override is not None and (
        manual_override.player_id != player_id or manual_override.season_id != season_id
    ):
        logger.warning(
            "Ignoring manual totals for another player or season",
            player_id=player_id,
            season_id=season_id,
            override_player_id=manual_override.player_id,
            override_season_id=manual_override.season_id,
        )
        manual_override = None

    if season_games:
        if manual_override is not None:
            logger.debug(
                "Games exist; manual totals not authoritative",
                player_id=player_id,
                season_id=season_id,
                games=len(season_games),
            )
        aggregate = aggregate_games(season_games)
        return SeasonTotals(
            player_id=player_id,
            season_id=season_id,
            is_manual_entry=False,
            games_played=aggregate.games_played,
            games_started=aggregate.games_started,
            totals=aggregate.totals,
            averages=aggregate.averages,
            double_doubles=aggregate.double_doubles,
            triple_doubles=aggregate.triple_doubles,
            **aggregate.percentages,
        )

    if manual_override is not None:
        return manual_override.model_copy(deep=True)

    return None


def season_by_season(
    player_id: str,
    seasons: Iterable[Season],
    games: Sequence[GameStatRecord],
    manual_totals: Iterable[SeasonTotals] = (),
    awards: Iterable[Award] = (),
) -> list[SeasonRow]:
    """
    Build the season-by-season table for a player.

    Seasons keep the order they are given in. A season with no games, no
    manual entry and no awards is left out.
    """
    manual_by_season = {
        totals.season_id: totals for totals in manual_totals if totals.player_id == player_id
    }
    award_list = list(awards)

    rows: list[SeasonRow] = []
    for season in seasons:
        totals = compute_season_totals(
            player_id, season.id, games, manual_by_season.get(season.id)
        )
        season_awards = [a for a in award_list if a.season_id == season.id]
        if totals is None and not season_awards:
            continue
        rows.append(SeasonRow(season=season, totals=totals, awards=season_awards))
    return rows


def complete_manual_totals(totals: SeasonTotals) -> SeasonTotals:
    """
    Fill averages and percentages a manual entry left blank.

    Values that were entered are kept; only absent ones are derived from the
    entered totals.
    """
    averages = totals.averages.as_dict(include_absent=True)
    for key, value in totals.totals.as_dict().items():
        if averages[key] is None:
            averages[key] = per_game(value, totals.games_played)

    update: dict[str, object] = {"averages": StatLine.from_mapping(averages)}
    for name, value in shooting_percentages(totals.totals).items():
        if getattr(totals, name) is None:
            update[name] = value
    return totals.model_copy(update=update)
