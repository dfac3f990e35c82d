"""SQLite-backed store for games, manual totals, playoff series, awards and rosters.

Every write validates its record first, then runs inside an explicit
BEGIN/COMMIT; database failures roll back and propagate as ``sqlite3.Error``.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import ValidationError

from courtbook.engine.conference import NBA_TEAMS, ConferenceFallback
from courtbook.engine.series import ROUND_NUMBERS, TeamRef, apply_outcome, generate_series_id
from courtbook.engine.validation import (
    validate_award_capacity,
    validate_game_stats,
    validate_manual_totals,
)
from courtbook.exceptions import NotFoundError, StatValidationError
from courtbook.models.award import Award
from courtbook.models.game import GameStatRecord
from courtbook.models.player import Player
from courtbook.models.playoff import PlayoffSeries
from courtbook.models.roster import RosterEntry
from courtbook.models.season import Season, SeasonTotals
from courtbook.models.stats import STAT_KEYS, StatLine
from courtbook.models.team import TeamRecord

logger = structlog.get_logger(__name__)

TOTALS_SCALAR_COLUMNS: tuple[str, ...] = (
    "player_id",
    "season_id",
    "is_manual_entry",
    "games_played",
    "games_started",
    "fg_percentage",
    "three_pt_percentage",
    "ft_percentage",
    "double_doubles",
    "triple_doubles",
)


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _upsert_sql(table: str, columns: Iterable[str], key: str) -> str:
    cols = list(columns)
    keys = {part.strip() for part in key.split(",")}
    placeholders = ",".join("?" for _ in cols)
    updates = ",\n    ".join(f"{col} = excluded.{col}" for col in cols if col not in keys)
    return (
        f"INSERT INTO {table} ({', '.join(cols)}) VALUES ({placeholders})\n"  # noqa: S608
        f"ON CONFLICT({key}) DO UPDATE SET\n    {updates}"
    )


def _totals_to_row(totals: SeasonTotals) -> dict[str, Any]:
    row = {col: getattr(totals, col) for col in TOTALS_SCALAR_COLUMNS}
    for key in STAT_KEYS:
        row[f"total_{key}"] = totals.totals.get(key)
        row[f"avg_{key}"] = totals.averages.get(key)
    return row


def _totals_from_row(row: sqlite3.Row) -> SeasonTotals:
    data = dict(row)
    return SeasonTotals(
        **{col: data[col] for col in TOTALS_SCALAR_COLUMNS},
        totals=StatLine(**{key: data[f"total_{key}"] for key in STAT_KEYS}),
        averages=StatLine(**{key: data[f"avg_{key}"] for key in STAT_KEYS}),
    )


def _player_from_row(row: sqlite3.Row) -> Player:
    data = dict(row)
    data["career_highs"] = json.loads(data.get("career_highs") or "{}")
    return Player.model_validate(data)


class Repository:
    """
    Read and write access to the stats database.

    Args:
        conn: Open SQLite connection, ideally from ``get_db_connection``.
        conference_fallback: Policy used when generating series ids for
            unrecognized teams.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        conference_fallback: ConferenceFallback | str = ConferenceFallback.UNKNOWN,
    ):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row
        self.conference_fallback = ConferenceFallback(conference_fallback)

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        self.conn.execute("BEGIN")
        try:
            yield self.conn
            self.conn.execute("COMMIT")
        except BaseException:
            self.conn.execute("ROLLBACK")
            raise

    def _upsert(self, table: str, row: dict[str, Any], key: str = "id") -> None:
        self.conn.execute(_upsert_sql(table, row.keys(), key), tuple(row.values()))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def fetch_games(self, player_id: str, season_id: str | None = None) -> list[GameStatRecord]:
        """A player's games in date order, optionally for one season."""
        sql = "SELECT * FROM player_game_stats WHERE player_id = ?"
        params: list[Any] = [player_id]
        if season_id is not None:
            sql += " AND season_id = ?"
            params.append(season_id)
        sql += " ORDER BY game_date, created_at, rowid"
        rows = self.conn.execute(sql, params).fetchall()
        return [GameStatRecord.model_validate(dict(row)) for row in rows]

    def has_games(self, player_id: str, season_id: str) -> bool:
        cur = self.conn.execute(
            "SELECT 1 FROM player_game_stats WHERE player_id = ? AND season_id = ? LIMIT 1",
            (player_id, season_id),
        )
        return cur.fetchone() is not None

    def fetch_manual_season_totals(self, player_id: str, season_id: str) -> SeasonTotals | None:
        row = self.conn.execute(
            "SELECT * FROM season_totals WHERE player_id = ? AND season_id = ?",
            (player_id, season_id),
        ).fetchone()
        return _totals_from_row(row) if row else None

    def fetch_all_manual_season_totals(self, player_id: str) -> list[SeasonTotals]:
        rows = self.conn.execute(
            "SELECT * FROM season_totals WHERE player_id = ? ORDER BY season_id",
            (player_id,),
        ).fetchall()
        return [_totals_from_row(row) for row in rows]

    def fetch_playoff_series(self, player_id: str, season_id: str) -> list[PlayoffSeries]:
        """A player's series for one season, by round number then creation time."""
        rows = self.conn.execute(
            """
            SELECT * FROM playoff_series
            WHERE player_id = ? AND season_id = ?
            ORDER BY round_number, created_at, rowid
            """,
            (player_id, season_id),
        ).fetchall()
        return [PlayoffSeries.model_validate(dict(row)) for row in rows]

    def fetch_series(self, series_id: str) -> PlayoffSeries:
        row = self.conn.execute(
            "SELECT * FROM playoff_series WHERE id = ?", (series_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"Playoff series '{series_id}' not found")
        return PlayoffSeries.model_validate(dict(row))

    def fetch_teams(self) -> list[TeamRecord]:
        rows = self.conn.execute("SELECT * FROM team ORDER BY name").fetchall()
        return [TeamRecord.model_validate(dict(row)) for row in rows]

    def fetch_awards(
        self, season_id: str | None = None, player_id: str | None = None
    ) -> list[Award]:
        """
        Awards, optionally narrowed to a season and to one player's league.

        With ``player_id``, general awards (no owning player) are included
        alongside the ones that player's league owns.
        """
        sql = "SELECT * FROM award WHERE 1 = 1"
        params: list[Any] = []
        if season_id is not None:
            sql += " AND season_id = ?"
            params.append(season_id)
        if player_id is not None:
            sql += " AND (player_id IS NULL OR player_id = ?)"
            params.append(player_id)
        sql += " ORDER BY season_id, award_name, rowid"
        rows = self.conn.execute(sql, params).fetchall()
        return [Award.model_validate(dict(row)) for row in rows]

    def fetch_seasons(self) -> list[Season]:
        """All seasons, most recent first."""
        rows = self.conn.execute("SELECT * FROM season ORDER BY year_start DESC").fetchall()
        return [Season.model_validate(dict(row)) for row in rows]

    def fetch_season(self, season_id: str) -> Season:
        row = self.conn.execute("SELECT * FROM season WHERE id = ?", (season_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"Season '{season_id}' not found")
        return Season.model_validate(dict(row))

    def fetch_roster(self, player_id: str, season_id: str) -> list[RosterEntry]:
        rows = self.conn.execute(
            """
            SELECT * FROM roster
            WHERE season_id = ? AND (player_id IS NULL OR player_id = ?)
            ORDER BY is_starter DESC, overall DESC, player_name
            """,
            (season_id, player_id),
        ).fetchall()
        return [RosterEntry.model_validate(dict(row)) for row in rows]

    def fetch_player(self, player_id: str) -> Player:
        row = self.conn.execute("SELECT * FROM player WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"Player '{player_id}' not found")
        return _player_from_row(row)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_season(self, season: Season) -> None:
        with self._transaction():
            self._upsert("season", season.model_dump())
        logger.info("Saved season", season_id=season.id)

    def add_player(self, player: Player) -> None:
        row = player.model_dump()
        row["career_highs"] = json.dumps(player.career_highs)
        with self._transaction():
            self._upsert("player", row)
        logger.info("Saved player", player_id=player.id)

    def seed_teams(self, teams: Iterable[TeamRecord] | None = None) -> int:
        """Insert or refresh team rows; defaults to the 30 league teams."""
        if teams is None:
            teams = [
                TeamRecord(
                    id=info.id,
                    name=info.full_name,
                    abbreviation=info.abbreviation,
                    conference=info.conference,
                )
                for info in NBA_TEAMS.values()
            ]
        rows_affected = 0
        with self._transaction():
            for team in teams:
                self._upsert("team", team.model_dump())
                rows_affected += 1
        logger.info("Seeded teams", rows_affected=rows_affected)
        return rows_affected

    def save_game(self, game: GameStatRecord | dict[str, Any]) -> GameStatRecord:
        """
        Validate and store one game.

        Once a season has games, its manual totals row stays in the table but
        is no longer used.

        Raises:
            StatValidationError: If the game's shooting line is impossible.
        """
        record = validate_game_stats(game)
        if record.created_at is None:
            record = record.model_copy(update={"created_at": _now()})
        with self._transaction():
            self._upsert("player_game_stats", record.model_dump())
        logger.info(
            "Saved game",
            game_id=record.id,
            player_id=record.player_id,
            season_id=record.season_id,
        )
        return record

    def delete_game(self, game_id: str) -> GameStatRecord:
        """Delete a game and return it; raises NotFoundError when absent."""
        row = self.conn.execute(
            "SELECT * FROM player_game_stats WHERE id = ?", (game_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"Game '{game_id}' not found")
        game = GameStatRecord.model_validate(dict(row))
        with self._transaction():
            self.conn.execute("DELETE FROM player_game_stats WHERE id = ?", (game_id,))
        logger.info("Deleted game", game_id=game_id, player_id=game.player_id)
        return game

    def save_manual_season_totals(self, totals: SeasonTotals | dict[str, Any]) -> SeasonTotals:
        """
        Store hand-entered totals for a season without games.

        Raises:
            ManualTotalsConflictError: If the season already has games.
            StatValidationError: If the totals are inconsistent.
        """
        data = totals.model_dump() if isinstance(totals, SeasonTotals) else dict(totals)
        has_games = self.has_games(data.get("player_id", ""), data.get("season_id", ""))
        record = validate_manual_totals(data, has_games)
        with self._transaction():
            self._upsert("season_totals", _totals_to_row(record), key="player_id, season_id")
        logger.info(
            "Saved manual season totals",
            player_id=record.player_id,
            season_id=record.season_id,
        )
        return record

    def create_playoff_series(
        self,
        player_id: str,
        season_id: str,
        round_name: str,
        team1: TeamRef,
        team2: TeamRef,
        team1_seed: int | None = None,
        team2_seed: int | None = None,
        team1_wins: int = 0,
        team2_wins: int = 0,
    ) -> PlayoffSeries:
        """
        Create a series with a generated id and a winner derived from its wins.

        Raises:
            NotFoundError: If the season does not exist.
            StatValidationError: If seeds or win counts are out of range.
            UnknownTeamError: If a team is unrecognized under the ERROR policy.
        """
        season = self.fetch_season(season_id)
        series_id = generate_series_id(
            season,
            round_name,
            team1.id,
            team2.id,
            player_id,
            existing_series=self.fetch_playoff_series(player_id, season_id),
            conference_fallback=self.conference_fallback,
        )
        try:
            series = PlayoffSeries(
                id=series_id,
                player_id=player_id,
                season_id=season_id,
                round_name=round_name,
                round_number=ROUND_NUMBERS.get(round_name, 1),
                team1_id=team1.id,
                team1_name=team1.name,
                team1_seed=team1_seed,
                team2_id=team2.id,
                team2_name=team2.name,
                team2_seed=team2_seed,
                team1_wins=team1_wins,
                team2_wins=team2_wins,
                created_at=_now(),
            )
        except ValidationError as e:
            raise StatValidationError(str(e)) from e
        series = apply_outcome(series)

        with self._transaction():
            self._upsert("playoff_series", series.model_dump())
        logger.info("Created playoff series", series_id=series.id, round_name=round_name)
        return series

    def update_series_wins(self, series_id: str, team1_wins: int, team2_wins: int) -> PlayoffSeries:
        """Set a series' win counts and re-derive its stored winner."""
        current = self.fetch_series(series_id)
        try:
            updated = PlayoffSeries.model_validate(
                {**current.model_dump(), "team1_wins": team1_wins, "team2_wins": team2_wins}
            )
        except ValidationError as e:
            raise StatValidationError(str(e)) from e
        updated = apply_outcome(updated)

        with self._transaction():
            self.conn.execute(
                """
                UPDATE playoff_series
                SET team1_wins = ?, team2_wins = ?,
                    winner_team_id = ?, winner_team_name = ?, is_complete = ?
                WHERE id = ?
                """,
                (
                    updated.team1_wins,
                    updated.team2_wins,
                    updated.winner_team_id,
                    updated.winner_team_name,
                    updated.is_complete,
                    series_id,
                ),
            )
        logger.info(
            "Updated series wins",
            series_id=series_id,
            team1_wins=team1_wins,
            team2_wins=team2_wins,
            winner_team_id=updated.winner_team_id,
        )
        return updated

    def delete_playoff_series(self, series_id: str) -> None:
        """Delete a series; its games keep their stats but lose the reference."""
        with self._transaction():
            cur = self.conn.execute("DELETE FROM playoff_series WHERE id = ?", (series_id,))
        if cur.rowcount == 0:
            raise NotFoundError(f"Playoff series '{series_id}' not found")
        logger.info("Deleted playoff series", series_id=series_id)

    def save_award(self, award: Award) -> Award:
        """
        Store an award winner.

        Raises:
            AwardCapacityError: If the award already has its maximum winners.
        """
        validate_award_capacity(award, self.fetch_awards(season_id=award.season_id))
        with self._transaction():
            self._upsert("award", award.model_dump())
        logger.info("Saved award", award_name=award.award_name, season_id=award.season_id)
        return award

    def save_roster_entry(self, entry: RosterEntry) -> RosterEntry:
        with self._transaction():
            self._upsert("roster", entry.model_dump())
        logger.debug("Saved roster entry", entry_id=entry.id, season_id=entry.season_id)
        return entry
