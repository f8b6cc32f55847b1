"""Team season table builder.

Source: a team-stats site paginated newest-first (page 1 is the most recent
season). Its table carries the column labels as the first data row instead
of a real header, so the labels are recovered from that row.
"""

import pandas as pd
import structlog

from nba_trends.ingestion.base import BaseSeasonBuilder
from nba_trends.ingestion.exceptions import SchemaError
from nba_trends.ingestion.fetcher import HtmlTableFetcher
from nba_trends.ingestion.registry import register_builder
from nba_trends.models.tables import SeasonTable
from nba_trends.processing.schema import coerce_integer
from nba_trends.utils.config import Settings, get_settings

logger = structlog.get_logger(__name__)

# Source label -> canonical label shared with the player schema
FOUR_FACTORS_RENAME = {
    "Team EFg%": "eFG%",
    "Team FT Rate": "FT%",
    "Team TOV%": "TOV%",
    "Team ORB%": "ORB%",
}
RECORD_RENAME = {"Win": "W", "Loss": "L"}

SOURCE_COLUMNS = ["Team", *FOUR_FACTORS_RENAME, *RECORD_RENAME]
OUTPUT_COLUMNS = [
    "Year",
    "Team",
    *FOUR_FACTORS_RENAME.values(),
    *RECORD_RENAME.values(),
    "W/L%",
    "Rk",
]


def year_for_page(page_index: int, base_year: int = 2020) -> int:
    """Season year shown on a page (page 1 = ``base_year - 1``)."""
    return base_year - page_index


def page_for_year(year: int, base_year: int = 2020) -> int:
    """Page index holding a season year."""
    return base_year - year


def win_loss_ratio(wins: pd.Series, losses: pd.Series) -> pd.Series:
    """
    W / (W + L) as a nullable float.

    Missing when either count is missing or the team has no recorded games.
    """
    wins = coerce_integer(wins)
    losses = coerce_integer(losses)
    games = wins + losses
    ratio = wins.astype("Float64") / games.astype("Float64")
    return ratio.mask((games == 0).fillna(False))


def rank_by_ratio(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Sort by W/L% descending and number rows 1..N in ``Rk``.

    Ties are broken by team name; rows with no ratio rank last.
    """
    ranked = frame.sort_values(
        by=["W/L%", "Team"],
        ascending=[False, True],
        kind="mergesort",
        na_position="last",
    ).reset_index(drop=True)
    ranked["Rk"] = pd.array(range(1, len(ranked) + 1), dtype="Int64")
    return ranked


@register_builder
class TeamSeasonBuilder(BaseSeasonBuilder):
    """
    Builder for one season of team Four Factors and win/loss record.

    ``build`` takes the source's page index; ``unit_for_year`` converts.

    Usage:
        builder = TeamSeasonBuilder()
        table = builder.build(1)  # 2019 season
    """

    dataset = "teams"

    def __init__(self, fetcher: HtmlTableFetcher | None = None, settings: Settings | None = None):
        super().__init__(fetcher)
        self.settings = settings or get_settings()

    def unit_for_year(self, year: int) -> int:
        return page_for_year(year, self.settings.team_page_base_year)

    def build(self, unit: int) -> SeasonTable:
        page_index = unit
        year = year_for_page(page_index, self.settings.team_page_base_year)
        url = self.settings.team_url_template.format(page_index=page_index)

        raw = self.fetcher.fetch_table(url, self.settings.team_selector)
        if not raw.rows:
            raise SchemaError(self.dataset, year, SOURCE_COLUMNS)

        # First body row holds the labels; it and any repeat of it are dropped
        header = [cell.strip() for cell in raw.rows[0]]
        frame = pd.DataFrame(raw.without_header_rows(header), columns=header, dtype=object)
        self.require_columns(frame, SOURCE_COLUMNS, year)

        frame = frame[SOURCE_COLUMNS].rename(columns={**FOUR_FACTORS_RENAME, **RECORD_RENAME})
        frame.insert(0, "Year", year)

        frame["W"] = coerce_integer(frame["W"])
        frame["L"] = coerce_integer(frame["L"])
        frame["W/L%"] = win_loss_ratio(frame["W"], frame["L"])

        ranked = rank_by_ratio(frame)[OUTPUT_COLUMNS]
        return SeasonTable(dataset=self.dataset, year=year, frame=ranked)


def build_team_season(page_index: int, builder: TeamSeasonBuilder | None = None) -> SeasonTable:
    """Build one team season with a default builder."""
    return (builder or TeamSeasonBuilder()).build(page_index)
