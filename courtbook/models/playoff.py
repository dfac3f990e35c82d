"""Playoff series model."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class PlayoffSeries(BaseModel):
    """A best-of-seven series inside one player's bracket for one season."""

    id: str = Field(..., description="Generated series identifier, e.g. '7-2425-rnd1-e'")
    player_id: str = Field(..., description="FK → player.id")
    season_id: str = Field(..., description="FK → season.id")
    round_name: str = Field(..., description="e.g. 'Round 1', 'NBA Finals'")
    round_number: int = Field(..., ge=0, le=4, description="0 = play-in, 4 = finals")
    team1_id: str | None = Field(None)
    team1_name: str | None = Field(None, description="Denormalized name")
    team1_seed: int | None = Field(None, ge=1, le=10)
    team2_id: str | None = Field(None)
    team2_name: str | None = Field(None, description="Denormalized name")
    team2_seed: int | None = Field(None, ge=1, le=10)
    team1_wins: int = Field(default=0, ge=0, le=4)
    team2_wins: int = Field(default=0, ge=0, le=4)
    winner_team_id: str | None = Field(None, description="Stored winner; may lag win counts")
    winner_team_name: str | None = Field(None)
    is_complete: bool = Field(default=False)
    created_at: str | None = Field(None)

    @model_validator(mode="after")
    def check_wins(self) -> PlayoffSeries:
        if self.team1_wins == 4 and self.team2_wins == 4:
            raise ValueError("Both teams cannot have 4 wins in the same series")
        return self
