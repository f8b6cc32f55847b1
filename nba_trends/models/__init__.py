"""Pydantic models for data validation."""

from nba_trends.models.records import (
    PlayerRecord,
    TeamSeasonRecord,
    to_player_records,
    to_team_records,
)
from nba_trends.models.tables import (
    Dataset,
    RawTable,
    SeasonOutcome,
    SeasonTable,
    is_header_row,
)

__all__ = [
    "Dataset",
    "PlayerRecord",
    "RawTable",
    "SeasonOutcome",
    "SeasonTable",
    "TeamSeasonRecord",
    "is_header_row",
    "to_player_records",
    "to_team_records",
]
