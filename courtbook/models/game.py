"""Per-game stat record model."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from courtbook.models.stats import shooting_violations


class GameStatRecord(BaseModel):
    """One played game for one player; maps to the player_game_stats table."""

    id: str = Field(..., description="Game record identifier")
    player_id: str = Field(..., description="FK → player.id")
    season_id: str = Field(..., description="FK → season.id")
    game_date: str = Field(..., description="In-game date (YYYY-MM-DD)")
    opponent_team_id: str | None = Field(None, description="FK → team.id")
    opponent_team_name: str | None = Field(None, description="Denormalized opponent name")
    is_home: bool = Field(default=True)
    player_score: int = Field(default=0, ge=0, description="Player's team score")
    opponent_score: int = Field(default=0, ge=0, description="Opponent score")
    is_win: bool = Field(default=False, description="Derived: player_score > opponent_score")
    started: bool | None = Field(None, description="Player was in the starting lineup")

    is_playoff_game: bool = Field(default=False)
    playoff_series_id: str | None = Field(None, description="FK → playoff_series.id")
    playoff_game_number: int | None = Field(None, ge=1, le=7)
    is_key_game: bool = Field(default=False)
    is_cup_game: bool = Field(default=False)
    is_overtime: bool = Field(default=False)
    is_simulated: bool = Field(default=False)

    minutes: float | None = Field(None, ge=0)
    points: int | None = Field(None, ge=0)
    rebounds: int | None = Field(None, ge=0)
    offensive_rebounds: int | None = Field(None, ge=0)
    assists: int | None = Field(None, ge=0)
    steals: int | None = Field(None, ge=0)
    blocks: int | None = Field(None, ge=0)
    turnovers: int | None = Field(None, ge=0)
    fouls: int | None = Field(None, ge=0)
    plus_minus: int | None = Field(None)
    fg_made: int | None = Field(None, ge=0)
    fg_attempted: int | None = Field(None, ge=0)
    threes_made: int | None = Field(None, ge=0)
    threes_attempted: int | None = Field(None, ge=0)
    ft_made: int | None = Field(None, ge=0)
    ft_attempted: int | None = Field(None, ge=0)

    created_at: str | None = Field(None)

    @field_validator("game_date")
    @classmethod
    def validate_game_date(cls, v: str) -> str:
        if not re.match(r"^\d{4}-\d{2}-\d{2}$", v):
            raise ValueError(f"game_date must be YYYY-MM-DD, got '{v}'")
        return v

    @model_validator(mode="after")
    def check_shooting_and_result(self) -> GameStatRecord:
        errors = shooting_violations(self.model_dump())
        if errors:
            raise ValueError("; ".join(errors))
        self.is_win = self.player_score > self.opponent_score
        return self
