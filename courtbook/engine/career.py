"""Career aggregation and single-game highs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from courtbook.engine.derived import shooting_percentages
from courtbook.engine.season import per_game
from courtbook.models.game import GameStatRecord
from courtbook.models.season import CareerTotals, SeasonTotals
from courtbook.models.stats import STAT_KEYS, StatLine

logger = structlog.get_logger(__name__)

GAME_HIGH_KEYS: tuple[str, ...] = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "threes_made",
)

CAREER_HIGH_KEYS: tuple[str, ...] = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "fg_made",
    "threes_made",
    "ft_made",
    "minutes",
)


@dataclass(frozen=True)
class HighGame:
    """A game in which a high was reached."""

    game_id: str
    game_date: str
    opponent: str
    is_home: bool


@dataclass(frozen=True)
class GameHigh:
    """Best single-game value for one stat and every game that reached it."""

    stat: str
    value: float
    games: list[HighGame] = field(default_factory=list)


def _add(a: float | None, b: float | None) -> float | None:
    if a is None:
        return b
    if b is None:
        return a
    return a + b


def compute_career_totals(season_totals: Iterable[SeasonTotals]) -> CareerTotals:
    """
    Sum season totals into career totals.

    Career totals are built from season totals, never from raw games, so a
    season entered by hand contributes exactly what its row says. Double and
    triple-doubles are added up, not re-derived. Averages divide by the career
    games played and percentages come from the summed made/attempted counts.

    Args:
        season_totals: One entry per season, e.g. from ``compute_season_totals``.

    Returns:
        A fresh CareerTotals; all averages are None when no games were played.
    """
    rows = list(season_totals)
    player_ids = {row.player_id for row in rows}
    if len(player_ids) > 1:
        logger.warning("Summing season totals for several players", player_ids=sorted(player_ids))

    sums: dict[str, float | None] = dict.fromkeys(STAT_KEYS)
    games_played = 0
    games_started = 0
    double_doubles = 0
    triple_doubles = 0

    for row in rows:
        games_played += row.games_played
        games_started += row.games_started or 0
        double_doubles += row.double_doubles
        triple_doubles += row.triple_doubles
        for key in STAT_KEYS:
            sums[key] = _add(sums[key], row.totals.get(key))

    totals = StatLine.from_mapping(sums)
    averages = StatLine.from_mapping(
        {key: per_game(value, games_played) for key, value in sums.items()}
    )

    return CareerTotals(
        player_id=player_ids.pop() if len(player_ids) == 1 else None,
        seasons=len(rows),
        games_played=games_played,
        games_started=games_started,
        totals=totals,
        averages=averages,
        double_doubles=double_doubles,
        triple_doubles=triple_doubles,
        **shooting_percentages(totals),
    )


def game_highs(
    games: Sequence[GameStatRecord], stats: Sequence[str] = GAME_HIGH_KEYS
) -> dict[str, GameHigh]:
    """
    Find the best single-game value for each stat.

    Stats whose best value is 0 (or never recorded) are left out. Games tied
    at the high are listed most recent first.
    """
    highs: dict[str, GameHigh] = {}
    for stat in stats:
        best = max(((getattr(game, stat) or 0) for game in games), default=0)
        if best <= 0:
            continue
        reached = sorted(
            (game for game in games if (getattr(game, stat) or 0) == best),
            key=lambda game: game.game_date,
            reverse=True,
        )
        highs[stat] = GameHigh(
            stat=stat,
            value=best,
            games=[
                HighGame(
                    game_id=game.id,
                    game_date=game.game_date,
                    opponent=game.opponent_team_name or game.opponent_team_id or "Unknown",
                    is_home=game.is_home,
                )
                for game in reached
            ],
        )
    return highs


def merge_career_highs(
    manual: Mapping[str, float], games: Sequence[GameStatRecord]
) -> dict[str, float]:
    """Combine hand-entered career highs with highs found in recorded games."""
    computed = game_highs(games, CAREER_HIGH_KEYS)
    merged: dict[str, float] = {}
    for stat in CAREER_HIGH_KEYS:
        candidates = [manual[stat]] if manual.get(stat) is not None else []
        if stat in computed:
            candidates.append(computed[stat].value)
        if candidates:
            merged[stat] = max(candidates)
    return merged
