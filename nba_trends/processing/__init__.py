"""Cleaning and typing of the assembled datasets."""

from nba_trends.processing.cleaner import clean, clean_players, clean_teams
from nba_trends.processing.schema import (
    FOUR_FACTORS,
    PLAYER_SCHEMA,
    SCHEMAS,
    TEAM_SCHEMA,
    apply_schema,
)

__all__ = [
    "FOUR_FACTORS",
    "PLAYER_SCHEMA",
    "SCHEMAS",
    "TEAM_SCHEMA",
    "apply_schema",
    "clean",
    "clean_players",
    "clean_teams",
]
