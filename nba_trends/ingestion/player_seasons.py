"""Player season table builder.

Source: Basketball Reference league pages, one totals table and one advanced
table per season. Both tables list every player-team stint; players traded
mid-season also get an aggregate row. The two tables are joined on the
columns they share that identify a row.
"""

import pandas as pd
import structlog

from nba_trends.ingestion.base import BaseSeasonBuilder, drop_empty_columns, drop_header_rows
from nba_trends.ingestion.fetcher import HtmlTableFetcher
from nba_trends.ingestion.registry import register_builder
from nba_trends.models.tables import SeasonTable
from nba_trends.processing.schema import ADVANCED_STATS, TOTALS_STATS
from nba_trends.utils.config import Settings, get_settings

logger = structlog.get_logger(__name__)

# Columns identifying one row in both the totals and the advanced table
JOIN_KEY = ["Player", "Rk", "Pos", "Age", "Tm", "G", "MP"]

# Page rank: a presentation artifact, not an identifier
RANK_COLUMN = "Rk"

TOTALS_COLUMNS = [*JOIN_KEY, *TOTALS_STATS]
ADVANCED_COLUMNS = [*JOIN_KEY, *ADVANCED_STATS]


def join_totals_advanced(totals: pd.DataFrame, advanced: pd.DataFrame) -> pd.DataFrame:
    """
    Left-join totals with advanced stats on JOIN_KEY.

    When a key occurs more than once on either side only its first
    occurrence is kept, so every key yields exactly one joined row. Columns
    present in both tables outside the key keep the totals value.
    """
    totals = totals.drop_duplicates(subset=JOIN_KEY, keep="first")
    advanced = advanced.drop_duplicates(subset=JOIN_KEY, keep="first")

    overlap = [c for c in advanced.columns if c in totals.columns and c not in JOIN_KEY]
    advanced = advanced.drop(columns=overlap)

    return totals.merge(advanced, on=JOIN_KEY, how="left", sort=False)


@register_builder
class PlayerSeasonBuilder(BaseSeasonBuilder):
    """
    Builder for one season of joined player totals and advanced stats.

    Usage:
        builder = PlayerSeasonBuilder()
        table = builder.build(2019)
    """

    dataset = "players"

    def __init__(self, fetcher: HtmlTableFetcher | None = None, settings: Settings | None = None):
        super().__init__(fetcher)
        self.settings = settings or get_settings()

    def unit_for_year(self, year: int) -> int:
        return year

    def _fetch_frame(
        self, url: str, selector: str, required: list[str], year: int
    ) -> pd.DataFrame:
        raw = self.fetcher.fetch_table(url, selector)
        frame = drop_empty_columns(raw.to_frame())
        self.require_columns(frame, required, year)
        return drop_header_rows(frame)

    def build(self, unit: int) -> SeasonTable:
        year = unit
        s = self.settings

        totals = self._fetch_frame(
            s.player_totals_url_template.format(year=year),
            s.player_totals_selector,
            TOTALS_COLUMNS,
            year,
        )
        advanced = self._fetch_frame(
            s.player_advanced_url_template.format(year=year),
            s.player_advanced_selector,
            ADVANCED_COLUMNS,
            year,
        )

        joined = join_totals_advanced(totals, advanced)
        duplicates = len(totals) - len(joined)
        if duplicates:
            self.logger.debug("Collapsed duplicate join keys", year=year, rows=duplicates)

        joined = joined.drop(columns=[RANK_COLUMN]).reset_index(drop=True)
        joined.insert(0, "Year", year)

        return SeasonTable(dataset=self.dataset, year=year, frame=joined)


def build_player_season(year: int, builder: PlayerSeasonBuilder | None = None) -> SeasonTable:
    """Build one player season with a default builder."""
    return (builder or PlayerSeasonBuilder()).build(year)
