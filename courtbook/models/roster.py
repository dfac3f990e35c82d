"""Roster models."""

from typing import Literal

from pydantic import BaseModel, Field


class RosterEntry(BaseModel):
    """A roster slot for a season, in the start- or end-of-season snapshot."""

    id: str = Field(..., description="Roster entry identifier")
    season_id: str = Field(..., description="FK → season.id")
    player_id: str | None = Field(None, description="Owning player's league")
    player_name: str = Field(..., min_length=1)
    position: str = Field(..., description="Primary position, e.g. 'PG'")
    secondary_position: str | None = Field(None)
    is_starter: bool = Field(default=False)
    overall: int | None = Field(None, ge=0, le=99, description="Overall rating")
    start_end: Literal["start", "end"] | None = Field(
        None, description="Snapshot; None counts as start of season"
    )
