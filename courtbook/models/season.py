"""Season, season-totals and career-totals models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from courtbook.models.stats import StatLine, shooting_violations

PERCENTAGE_FIELDS: tuple[str, ...] = ("fg_percentage", "three_pt_percentage", "ft_percentage")


class Season(BaseModel):
    """A bounded year-pair period, e.g. 2024-25."""

    id: str = Field(..., description="Season identifier")
    year_start: int = Field(..., ge=1946, le=2099, description="First calendar year")
    year_end: int = Field(..., ge=1947, le=2100, description="Second calendar year")
    champion_team_id: str | None = Field(None, description="Team that won the title")
    champion_player_id: str | None = Field(None, description="Finals MVP player")

    @model_validator(mode="after")
    def check_year_order(self) -> Season:
        if self.year_end != self.year_start + 1:
            raise ValueError("year_end must be year_start + 1")
        return self

    @property
    def label(self) -> str:
        """Human-readable label, e.g. '2024-25'."""
        return f"{self.year_start}-{str(self.year_end)[-2:]}"


class SeasonTotals(BaseModel):
    """
    One row per (player, season).

    Derived from the season's games, or entered by hand when no games exist
    (``is_manual_entry``). Percentages always come from summed made/attempted
    counts, never from per-game percentages.

    Shooting rules apply to manual entries only. Game-derived totals are plain
    sums, and games that track only one side of a shooting pair can sum to
    made above attempted.
    """

    player_id: str = Field(..., description="FK → player.id")
    season_id: str = Field(..., description="FK → season.id")
    is_manual_entry: bool = Field(default=False)
    games_played: int = Field(default=0, ge=0)
    games_started: int | None = Field(None, ge=0)
    totals: StatLine = Field(default_factory=StatLine)
    averages: StatLine = Field(default_factory=StatLine)
    fg_percentage: float | None = Field(None, ge=0.0)
    three_pt_percentage: float | None = Field(None, ge=0.0)
    ft_percentage: float | None = Field(None, ge=0.0)
    double_doubles: int = Field(default=0, ge=0)
    triple_doubles: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_consistency(self) -> SeasonTotals:
        if self.games_started is not None and self.games_started > self.games_played:
            raise ValueError("Games started cannot exceed games played")
        if self.triple_doubles > self.double_doubles:
            raise ValueError("triple_doubles cannot exceed double_doubles")
        if not self.is_manual_entry:
            return self

        errors = shooting_violations(self.totals.model_dump())
        for name in PERCENTAGE_FIELDS:
            value = getattr(self, name)
            if value is not None and value > 1.0:
                errors.append(f"{name} ({value}) exceeds 1.0")
        if errors:
            raise ValueError("; ".join(errors))
        return self


class CareerTotals(BaseModel):
    """Career roll-up of every season's totals; derived, never persisted."""

    player_id: str | None = Field(None)
    seasons: int = Field(default=0, ge=0, description="Number of seasons summed")
    games_played: int = Field(default=0, ge=0)
    games_started: int = Field(default=0, ge=0)
    totals: StatLine = Field(default_factory=StatLine)
    averages: StatLine = Field(default_factory=StatLine)
    fg_percentage: float | None = Field(None)
    three_pt_percentage: float | None = Field(None)
    ft_percentage: float | None = Field(None)
    double_doubles: int = Field(default=0, ge=0)
    triple_doubles: int = Field(default=0, ge=0)
