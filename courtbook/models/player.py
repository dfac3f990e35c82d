"""Player model."""

from pydantic import BaseModel, Field


class Player(BaseModel):
    """A tracked player."""

    id: str = Field(..., description="Player identifier, e.g. 'player-7'")
    player_name: str = Field(..., min_length=1)
    team_id: str | None = Field(None, description="FK → team.id")
    position: str | None = Field(None)
    archetype: str | None = Field(None)
    career_highs: dict[str, float] = Field(
        default_factory=dict, description="Manually entered career highs"
    )

    class Config:
        """Pydantic configuration."""

        from_attributes = True
