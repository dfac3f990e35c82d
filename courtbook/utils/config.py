"""Configuration management using environment variables."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    db_path: str = Field(default="courtbook.sqlite", description="Path to SQLite database")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (json or console)")
    log_dir: str = Field(default="logs", description="Directory for log files")

    # Caching
    cache_enabled: bool = Field(default=True, description="Cache computed season totals")

    # Bracket behaviour
    conference_fallback: str = Field(
        default="unknown",
        description="Conference used for unrecognized team ids (east, west, unknown, error)",
    )
    match_series_by_team_name: bool = Field(
        default=True,
        description="Attach playoff games without a series reference by team names",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid option."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is a valid option."""
        if v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    @field_validator("conference_fallback")
    @classmethod
    def validate_conference_fallback(cls, v: str) -> str:
        """Validate the conference fallback is one of the supported policies."""
        allowed = {"east", "west", "unknown", "error"}
        if v.lower() not in allowed:
            raise ValueError(f"conference_fallback must be one of {allowed}")
        return v.lower()

    class Config:
        """Pydantic configuration."""

        env_prefix = "COURTBOOK_"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings.
    """
    return Settings()


def ensure_directories() -> None:
    """
    Ensure all required directories exist.

    This creates the log and database directories if they don't exist.
    """
    settings = get_settings()

    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)

    # Ensure database parent directory exists
    db_path = Path(settings.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
