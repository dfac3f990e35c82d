"""Team models."""

from pydantic import BaseModel, Field, field_validator


class TeamRecord(BaseModel):
    """Team reference row; colors are presentation-only."""

    id: str = Field(..., description="Team identifier, e.g. 'team-atl'")
    name: str = Field(..., description="Full team name")
    abbreviation: str | None = Field(None, min_length=2, max_length=5)
    conference: str | None = Field(None, description="'East' or 'West'")
    primary_color: str | None = Field(None)
    secondary_color: str | None = Field(None)

    @field_validator("conference")
    @classmethod
    def validate_conference(cls, v: str | None) -> str | None:
        if v is None:
            return v
        # Normalise legacy values
        if "east" in v.lower():
            return "East"
        if "west" in v.lower():
            return "West"
        raise ValueError(f"conference must be 'East' or 'West', got '{v}'")

    class Config:
        """Pydantic configuration."""

        from_attributes = True
