"""Season table ingestion.

Builders are imported here to trigger @register_builder decoration and make
them available via create_builder().
"""

from nba_trends.ingestion.assembler import (
    AssembledDataset,
    assemble,
    assemble_datasets,
    reduce_outcomes,
    season_range,
)
from nba_trends.ingestion.base import BaseSeasonBuilder
from nba_trends.ingestion.exceptions import FetchError, IngestionError, SchemaError
from nba_trends.ingestion.fetcher import HtmlTableFetcher, fetch_table
from nba_trends.ingestion.player_seasons import PlayerSeasonBuilder, build_player_season
from nba_trends.ingestion.registry import (
    create_builder,
    get_builder,
    register_builder,
)
from nba_trends.ingestion.team_seasons import TeamSeasonBuilder, build_team_season

__all__ = [
    "AssembledDataset",
    "BaseSeasonBuilder",
    "FetchError",
    "HtmlTableFetcher",
    "IngestionError",
    "PlayerSeasonBuilder",
    "SchemaError",
    "TeamSeasonBuilder",
    "assemble",
    "assemble_datasets",
    "build_player_season",
    "build_team_season",
    "create_builder",
    "fetch_table",
    "get_builder",
    "reduce_outcomes",
    "register_builder",
    "season_range",
]
