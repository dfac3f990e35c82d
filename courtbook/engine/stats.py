"""Canonical view of the summable stats in a game, plus display helpers.

Every aggregator reads games through :func:`stats_from_game` so there is one
definition of what counts as a summable stat. Scores, the win flag and any
percentage are excluded: percentages are only ever derived from summed
made/attempted counts.
"""

from __future__ import annotations

from courtbook.models.game import GameStatRecord
from courtbook.models.stats import STAT_KEYS

# Rendered wherever a value is absent.
PLACEHOLDER = "–"

EXCLUDED_KEYS = frozenset({"player_score", "opponent_score", "is_win"})


def is_summable_key(key: str) -> bool:
    """Return True if ``key`` is a stat that may be summed across games."""
    return key in STAT_KEYS and key not in EXCLUDED_KEYS and not key.endswith("percentage")


def stats_from_game(game: GameStatRecord) -> dict[str, float]:
    """
    Extract the recorded box-score stats from a game.

    Args:
        game: One game record.

    Returns:
        Mapping of stat key to value, in scoreboard order. Stats the game did
        not record are left out rather than reported as zero.
    """
    stats: dict[str, float] = {}
    for key in STAT_KEYS:
        if not is_summable_key(key):
            continue
        value = getattr(game, key)
        if value is not None:
            stats[key] = value
    return stats


def format_total(value: float | None) -> str:
    """Render a total: whole numbers without decimals, otherwise one decimal."""
    if value is None:
        return PLACEHOLDER
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_average(value: float | None) -> str:
    """Render a per-game average with one decimal."""
    if value is None:
        return PLACEHOLDER
    return f"{value:.1f}"


def format_percentage(value: float | None) -> str:
    """Render a shooting percentage as a three-decimal fraction (0.480)."""
    if value is None:
        return PLACEHOLDER
    return f"{value:.3f}"


def format_shooting(made: float | None, attempted: float | None) -> str:
    """Render a made/attempted pair as 'made/attempted'."""
    if made is None or attempted is None:
        return PLACEHOLDER
    return f"{format_total(made)}/{format_total(attempted)}"
