"""Shooting percentages and double/triple-double classification."""

from __future__ import annotations

from collections.abc import Iterable

from courtbook.models.game import GameStatRecord
from courtbook.models.stats import DOUBLE_CATEGORIES, SHOOTING_PAIRS, StatLine

DOUBLE_THRESHOLD = 10


def shooting_percentage(made: float | None, attempted: float | None) -> float | None:
    """
    Compute made / attempted rounded to three decimals.

    Returns None when either value is absent or nothing was attempted.
    """
    if made is None or attempted is None or attempted == 0:
        return None
    return round(made / attempted, 3)


def shooting_percentages(line: StatLine) -> dict[str, float | None]:
    """Return fg/three_pt/ft percentages for a stat line of summed counts."""
    return {
        name: shooting_percentage(line.get(made_key), line.get(attempted_key))
        for name, made_key, attempted_key in SHOOTING_PAIRS
    }


def categories_in_double_figures(game: GameStatRecord) -> int:
    """Count the primary categories in which the game reached double figures."""
    return sum(
        1 for key in DOUBLE_CATEGORIES if (getattr(game, key) or 0) >= DOUBLE_THRESHOLD
    )


def is_double_double(game: GameStatRecord) -> bool:
    """True when at least two primary categories reached 10."""
    return categories_in_double_figures(game) >= 2


def is_triple_double(game: GameStatRecord) -> bool:
    """True when at least three primary categories reached 10."""
    return categories_in_double_figures(game) >= 3


def count_double_doubles(games: Iterable[GameStatRecord]) -> int:
    return sum(1 for game in games if is_double_double(game))


def count_triple_doubles(games: Iterable[GameStatRecord]) -> int:
    return sum(1 for game in games if is_triple_double(game))
