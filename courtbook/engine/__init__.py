"""Stat aggregation and playoff bracket engine.

Pure functions over in-memory records. Nothing here touches the database;
callers fetch records through ``courtbook.repository`` and pass them in.
"""

from courtbook.engine.awards import filter_player_awards, group_team_awards
from courtbook.engine.bracket import BracketSeries, BracketTree, organize_bracket
from courtbook.engine.career import compute_career_totals, game_highs, merge_career_highs
from courtbook.engine.conference import (
    ConferenceFallback,
    resolve_conference,
    resolve_series_conference,
)
from courtbook.engine.derived import is_double_double, is_triple_double, shooting_percentage
from courtbook.engine.roster import split_roster
from courtbook.engine.season import aggregate_games, compute_season_totals, season_by_season
from courtbook.engine.series import (
    TeamRef,
    generate_series_id,
    resolve_series_winner,
)
from courtbook.engine.splits import compute_split, compute_splits
from courtbook.engine.stats import stats_from_game

__all__ = [
    "BracketSeries",
    "BracketTree",
    "ConferenceFallback",
    "TeamRef",
    "aggregate_games",
    "compute_career_totals",
    "compute_season_totals",
    "compute_split",
    "compute_splits",
    "filter_player_awards",
    "game_highs",
    "generate_series_id",
    "group_team_awards",
    "is_double_double",
    "is_triple_double",
    "merge_career_highs",
    "organize_bracket",
    "resolve_conference",
    "resolve_series_conference",
    "resolve_series_winner",
    "season_by_season",
    "shooting_percentage",
    "split_roster",
    "stats_from_game",
]
