"""League award model."""

from pydantic import BaseModel, Field


class Award(BaseModel):
    """A named league honor for one season."""

    id: str = Field(..., description="Award record identifier")
    season_id: str = Field(..., description="FK → season.id")
    award_name: str = Field(..., description="e.g. 'MVP', '1st Team All-NBA'")
    player_id: str | None = Field(None, description="League owner; None = general award")
    winner_player_id: str | None = Field(None, description="Winner, when tracked")
    winner_player_name: str | None = Field(None, description="Winner name if not in DB")
    winner_team_id: str | None = Field(None)
    winner_team_name: str | None = Field(None)
    allstar_starter: bool = Field(default=False)
