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

    # Player source (Basketball Reference league pages)
    player_totals_url_template: str = Field(
        default="https://www.basketball-reference.com/leagues/NBA_{year}_totals.html",
        description="Player totals page, formatted with {year}",
    )
    player_advanced_url_template: str = Field(
        default="https://www.basketball-reference.com/leagues/NBA_{year}_advanced.html",
        description="Player advanced stats page, formatted with {year}",
    )
    player_totals_selector: str = Field(
        default="table#totals_stats", description="CSS selector of the totals table"
    )
    player_advanced_selector: str = Field(
        default="table#advanced_stats", description="CSS selector of the advanced table"
    )

    # Team source (paginated newest-first)
    team_url_template: str = Field(
        default="https://www.nbastuffer.com/team-stats/page/{page_index}/",
        description="Team stats page, formatted with {page_index}",
    )
    team_selector: str = Field(default="table", description="CSS selector of the team table")
    team_page_base_year: int = Field(
        default=2020, description="Season year of page index 0 (year = base - page_index)"
    )

    # Season range
    first_season: int = Field(default=2000, description="First season year to assemble")
    last_season: int = Field(default=2019, description="Last season year to assemble")

    # HTTP
    request_timeout: int = Field(default=30, description="HTTP timeout in seconds")
    user_agent: str = Field(
        default="Mozilla/5.0 (nba-trends)", description="User-Agent header for page requests"
    )

    # Cleaning / analysis
    team_aliases: dict[str, str] = Field(
        default_factory=lambda: {"TOT": "TOR"},
        description="Non-standard team codes mapped to canonical codes",
    )
    reference_team: str = Field(
        default="ATL", description="Baseline team for the year x team trend fit"
    )

    # Cache Configuration
    cache_dir: str = Field(default="cache", description="Directory for cached tables")
    cache_enabled: bool = Field(default=True, description="Enable table caching")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or console)")
    log_dir: str = Field(default="logs", description="Directory for log files")

    # Output
    output_dir: str = Field(default="data", description="Directory for exported datasets")
    export_format: str = Field(default="csv", description="Export format (csv or parquet)")

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

    @field_validator("export_format")
    @classmethod
    def validate_export_format(cls, v: str) -> str:
        """Validate export format is a supported file type."""
        if v not in {"csv", "parquet"}:
            raise ValueError("export_format must be 'csv' or 'parquet'")
        return v

    class Config:
        """Pydantic configuration."""

        env_prefix = ""
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

    This creates the cache, logs, and output directories if they don't exist.
    """
    settings = get_settings()

    for path_key in ["cache_dir", "log_dir", "output_dir"]:
        path = getattr(settings, path_key)
        Path(path).mkdir(parents=True, exist_ok=True)
