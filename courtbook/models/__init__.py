"""Pydantic models for data validation."""

from courtbook.models.award import Award
from courtbook.models.game import GameStatRecord
from courtbook.models.player import Player
from courtbook.models.playoff import PlayoffSeries
from courtbook.models.roster import RosterEntry
from courtbook.models.season import CareerTotals, Season, SeasonTotals
from courtbook.models.stats import (
    DOUBLE_CATEGORIES,
    SHOOTING_PAIRS,
    STAT_KEYS,
    STAT_LABELS,
    StatLine,
)
from courtbook.models.team import TeamRecord

__all__ = [
    "DOUBLE_CATEGORIES",
    "SHOOTING_PAIRS",
    "STAT_KEYS",
    "STAT_LABELS",
    "Award",
    "CareerTotals",
    "GameStatRecord",
    "Player",
    "PlayoffSeries",
    "RosterEntry",
    "Season",
    "SeasonTotals",
    "StatLine",
    "TeamRecord",
]
