"""Box-score stat keys and the fixed stat-line model shared by totals and averages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Scoreboard order; every summable per-game stat appears exactly once.
STAT_KEYS: tuple[str, ...] = (
    "minutes",
    "points",
    "rebounds",
    "offensive_rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "fouls",
    "plus_minus",
    "fg_made",
    "fg_attempted",
    "threes_made",
    "threes_attempted",
    "ft_made",
    "ft_attempted",
)

# (percentage name, made key, attempted key)
SHOOTING_PAIRS: tuple[tuple[str, str, str], ...] = (
    ("fg_percentage", "fg_made", "fg_attempted"),
    ("three_pt_percentage", "threes_made", "threes_attempted"),
    ("ft_percentage", "ft_made", "ft_attempted"),
)

# Categories counted toward double-doubles and triple-doubles.
DOUBLE_CATEGORIES: tuple[str, ...] = ("points", "rebounds", "assists", "steals", "blocks")

STAT_LABELS: dict[str, str] = {
    "games_played": "GP",
    "games_started": "GS",
    "minutes": "MIN",
    "points": "PTS",
    "rebounds": "REB",
    "offensive_rebounds": "OR",
    "assists": "AST",
    "steals": "STL",
    "blocks": "BLK",
    "turnovers": "TO",
    "fouls": "PF",
    "plus_minus": "+/-",
    "fg_made": "FGM",
    "fg_attempted": "FGA",
    "threes_made": "3PM",
    "threes_attempted": "3PA",
    "ft_made": "FTM",
    "ft_attempted": "FTA",
    "fg_percentage": "FG%",
    "three_pt_percentage": "3PT%",
    "ft_percentage": "FT%",
    "double_doubles": "DD",
    "triple_doubles": "TD",
}


class StatLine(BaseModel):
    """One value per stat key; ``None`` means the stat was never recorded."""

    minutes: float | None = Field(None, description="Minutes played")
    points: float | None = Field(None, description="Points")
    rebounds: float | None = Field(None, description="Total rebounds")
    offensive_rebounds: float | None = Field(None, description="Offensive rebounds")
    assists: float | None = Field(None, description="Assists")
    steals: float | None = Field(None, description="Steals")
    blocks: float | None = Field(None, description="Blocks")
    turnovers: float | None = Field(None, description="Turnovers")
    fouls: float | None = Field(None, description="Personal fouls")
    plus_minus: float | None = Field(None, description="Plus-minus")
    fg_made: float | None = Field(None, description="Field goals made")
    fg_attempted: float | None = Field(None, description="Field goals attempted")
    threes_made: float | None = Field(None, description="Three-pointers made")
    threes_attempted: float | None = Field(None, description="Three-pointers attempted")
    ft_made: float | None = Field(None, description="Free throws made")
    ft_attempted: float | None = Field(None, description="Free throws attempted")

    def get(self, key: str) -> float | None:
        """Return the value for ``key``; raises ``KeyError`` for non-stat keys."""
        if key not in STAT_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def as_dict(self, include_absent: bool = False) -> dict[str, float | None]:
        """Return the stat line as an ordered mapping."""
        return {
            key: getattr(self, key)
            for key in STAT_KEYS
            if include_absent or getattr(self, key) is not None
        }

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> StatLine:
        """Build a stat line from a mapping, ignoring keys that are not stats."""
        return cls(**{k: v for k, v in values.items() if k in STAT_KEYS})


def shooting_violations(values: dict[str, Any], prefix: str = "") -> list[str]:
    """
    List every made/attempted rule broken by ``values``.

    Args:
        values: Mapping holding made/attempted counts.
        prefix: Column prefix, e.g. ``"total_"`` for season totals rows.

    Returns:
        Human-readable error messages; empty when the counts are consistent.
    """
    errors: list[str] = []
    for _, made_key, attempted_key in SHOOTING_PAIRS:
        made = values.get(f"{prefix}{made_key}")
        attempted = values.get(f"{prefix}{attempted_key}")
        if made is not None and attempted is not None and made > attempted:
            errors.append(
                f"{prefix}{made_key} ({made}) exceeds {prefix}{attempted_key} ({attempted})"
            )

    threes = values.get(f"{prefix}threes_attempted")
    field_goals = values.get(f"{prefix}fg_attempted")
    if threes is not None and field_goals is not None and threes > field_goals:
        errors.append(
            f"{prefix}threes_attempted ({threes}) exceeds {prefix}fg_attempted ({field_goals})"
        )
    return errors
