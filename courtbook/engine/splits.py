"""Game splits: the same aggregation over filtered subsets of a season's games."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from courtbook.engine.season import GameAggregate, aggregate_games
from courtbook.exceptions import UnknownSplitError
from courtbook.models.game import GameStatRecord

GamePredicate = Callable[[GameStatRecord], bool]

SPLITS: dict[str, GamePredicate] = {
    "full": lambda game: True,
    "season": lambda game: not game.is_playoff_game,
    "playoffs": lambda game: game.is_playoff_game,
    "home": lambda game: game.is_home,
    "away": lambda game: not game.is_home,
    "wins": lambda game: game.is_win,
    "losses": lambda game: not game.is_win,
    "key-games": lambda game: game.is_key_game,
    "nba-cup": lambda game: game.is_cup_game,
    "overtime": lambda game: game.is_overtime,
    "simulated": lambda game: game.is_simulated,
}


@dataclass(frozen=True)
class SplitSummary:
    """Win-loss record and aggregate stats for one split."""

    name: str
    wins: int
    losses: int
    stats: GameAggregate

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"


def compute_split(name: str, games: Sequence[GameStatRecord]) -> SplitSummary:
    """
    Aggregate the games matching split ``name``.

    Raises:
        UnknownSplitError: If ``name`` is not a registered split.
    """
    predicate = SPLITS.get(name)
    if predicate is None:
        raise UnknownSplitError(f"Unknown split '{name}'. Available: {', '.join(SPLITS)}")
    selected = [game for game in games if predicate(game)]
    wins = sum(1 for game in selected if game.is_win)
    return SplitSummary(
        name=name,
        wins=wins,
        losses=len(selected) - wins,
        stats=aggregate_games(selected),
    )


def compute_splits(games: Sequence[GameStatRecord]) -> list[SplitSummary]:
    """Every split that has at least one game, in registry order."""
    summaries = [compute_split(name, games) for name in SPLITS]
    return [summary for summary in summaries if summary.stats.games_played > 0]
