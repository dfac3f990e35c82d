"""Stats service: repository reads fed through the engine, with cached season totals."""

from __future__ import annotations

from typing import Any

import structlog

from courtbook.engine.awards import filter_player_awards
from courtbook.engine.bracket import BracketTree, organize_bracket
from courtbook.engine.career import GameHigh, compute_career_totals, game_highs, merge_career_highs
from courtbook.engine.season import SeasonRow, compute_season_totals, season_by_season
from courtbook.engine.splits import SplitSummary, compute_splits
from courtbook.models.game import GameStatRecord
from courtbook.models.season import CareerTotals, SeasonTotals
from courtbook.repository import Repository
from courtbook.utils.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class SeasonTotalsCache:
    """In-memory cache of computed season totals keyed by (player, season)."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._entries: dict[tuple[str, str], SeasonTotals | None] = {}

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self.enabled and key in self._entries

    def get(self, player_id: str, season_id: str) -> SeasonTotals | None:
        """Cached totals; callers check membership first since None is a valid entry."""
        totals = self._entries.get((player_id, season_id))
        logger.debug("Cache hit", player_id=player_id, season_id=season_id)
        return totals.model_copy(deep=True) if totals is not None else None

    def set(self, player_id: str, season_id: str, totals: SeasonTotals | None) -> None:
        if not self.enabled:
            return
        self._entries[(player_id, season_id)] = (
            totals.model_copy(deep=True) if totals is not None else None
        )

    def invalidate(self, player_id: str) -> int:
        """Drop every entry for ``player_id``; returns how many were dropped."""
        stale = [key for key in self._entries if key[0] == player_id]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Cache invalidated", player_id=player_id, entries=len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


class StatsService:
    """
    Read model over a :class:`Repository`.

    Season totals are computed on demand and cached; every write routed
    through this service invalidates the affected player's entries. Writes
    made directly on the repository bypass the cache, so call
    :meth:`invalidate` after them.
    """

    def __init__(self, repository: Repository, settings: Settings | None = None):
        self.repository = repository
        self.settings = settings or get_settings()
        self.cache = SeasonTotalsCache(enabled=self.settings.cache_enabled)

    def invalidate(self, player_id: str) -> None:
        self.cache.invalidate(player_id)

    # Reads

    def season_totals(self, player_id: str, season_id: str) -> SeasonTotals | None:
        if (player_id, season_id) in self.cache:
            return self.cache.get(player_id, season_id)
        totals = compute_season_totals(
            player_id,
            season_id,
            self.repository.fetch_games(player_id, season_id),
            self.repository.fetch_manual_season_totals(player_id, season_id),
        )
        self.cache.set(player_id, season_id, totals)
        return totals

    def career_totals(self, player_id: str) -> CareerTotals:
        """Career roll-up over every season that has games or manual totals."""
        per_season = [
            self.season_totals(player_id, season.id) for season in self.repository.fetch_seasons()
        ]
        career = compute_career_totals([totals for totals in per_season if totals is not None])
        return career.model_copy(update={"player_id": player_id})

    def season_rows(self, player_id: str) -> list[SeasonRow]:
        player = self.repository.fetch_player(player_id)
        awards = filter_player_awards(player, self.repository.fetch_awards(player_id=player_id))
        return season_by_season(
            player_id,
            self.repository.fetch_seasons(),
            self.repository.fetch_games(player_id),
            self.repository.fetch_all_manual_season_totals(player_id),
            awards,
        )

    def splits(self, player_id: str, season_id: str | None = None) -> list[SplitSummary]:
        return compute_splits(self.repository.fetch_games(player_id, season_id))

    def game_highs(self, player_id: str, season_id: str | None = None) -> dict[str, GameHigh]:
        return game_highs(self.repository.fetch_games(player_id, season_id))

    def career_highs(self, player_id: str) -> dict[str, float]:
        player = self.repository.fetch_player(player_id)
        return merge_career_highs(player.career_highs, self.repository.fetch_games(player_id))

    def bracket(
        self, player_id: str, season_id: str, player_team_name: str | None = None
    ) -> BracketTree:
        """
        Organize a season's playoff series for display.

        When ``player_team_name`` is not given, the player's own team name is
        used for name-based game matching.
        """
        teams = self.repository.fetch_teams()
        if player_team_name is None:
            player = self.repository.fetch_player(player_id)
            team = next((t for t in teams if t.id == player.team_id), None)
            player_team_name = team.name if team else None
        return organize_bracket(
            self.repository.fetch_playoff_series(player_id, season_id),
            teams,
            self.repository.fetch_games(player_id, season_id),
            player_team_name=player_team_name,
            conference_fallback=self.settings.conference_fallback,
            match_by_team_name=self.settings.match_series_by_team_name,
        )

    # Writes

    def save_game(self, game: GameStatRecord | dict[str, Any]) -> GameStatRecord:
        record = self.repository.save_game(game)
        self.invalidate(record.player_id)
        return record

    def delete_game(self, game_id: str) -> GameStatRecord:
        game = self.repository.delete_game(game_id)
        self.invalidate(game.player_id)
        return game

    def save_manual_season_totals(self, totals: SeasonTotals | dict[str, Any]) -> SeasonTotals:
        record = self.repository.save_manual_season_totals(totals)
        self.invalidate(record.player_id)
        return record
