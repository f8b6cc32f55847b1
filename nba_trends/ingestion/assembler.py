"""Dataset assembler.

Concatenates per-season tables into one master table per dataset. Seasons
are built lazily and independently; a failed season is recorded and the
rest still assemble.
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
import structlog
from pydantic import BaseModel, ConfigDict, Field

from nba_trends.ingestion.base import BaseSeasonBuilder
from nba_trends.ingestion.fetcher import HtmlTableFetcher
from nba_trends.ingestion.registry import create_builder
from nba_trends.models.tables import Dataset, SeasonOutcome
from nba_trends.utils.config import get_settings

logger = structlog.get_logger(__name__)


class AssembledDataset(BaseModel):
    """Master table for one dataset plus the seasons that failed to build."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dataset: Dataset
    frame: pd.DataFrame
    years: list[int] = Field(default_factory=list, description="Seasons included")
    failures: list[SeasonOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def reduce_outcomes(dataset: Dataset, outcomes: Iterable[SeasonOutcome]) -> AssembledDataset:
    """
    Fold season outcomes into one AssembledDataset.

    Successful tables are concatenated once, in the order they arrive.
    """
    frames: list[pd.DataFrame] = []
    years: list[int] = []
    failures: list[SeasonOutcome] = []

    for outcome in outcomes:
        if outcome.ok and outcome.table is not None:
            frames.append(outcome.table.frame)
            years.append(outcome.table.year)
        else:
            failures.append(outcome)

    frame = pd.concat(frames, ignore_index=True, sort=False) if frames else pd.DataFrame()
    return AssembledDataset(dataset=dataset, frame=frame, years=years, failures=failures)


def assemble(builder: BaseSeasonBuilder, years: Iterable[int]) -> AssembledDataset:
    """
    Build and concatenate every season in ``years`` with ``builder``.

    Args:
        builder: Season builder for one dataset.
        years: Season years to include.

    Returns:
        AssembledDataset with the master table and any failed seasons.
    """
    result = reduce_outcomes(builder.dataset, builder.ingest_years(years))

    logger.info(
        "Assembled dataset",
        dataset=builder.dataset,
        seasons=len(result.years),
        failed=len(result.failures),
        rows=len(result.frame),
    )
    return result


def season_range(start_year: int | None = None, end_year: int | None = None) -> range:
    """Inclusive season range, defaulting to the configured first/last season."""
    settings = get_settings()
    start = settings.first_season if start_year is None else start_year
    end = settings.last_season if end_year is None else end_year
    if start > end:
        raise ValueError(f"start year {start} is after end year {end}")
    return range(start, end + 1)


def assemble_datasets(
    start_year: int | None = None,
    end_year: int | None = None,
    fetcher: HtmlTableFetcher | None = None,
) -> tuple[AssembledDataset, AssembledDataset]:
    """
    Assemble the player and team master tables over a season range.

    Returns:
        (players, teams)
    """
    years = season_range(start_year, end_year)
    fetcher = fetcher or HtmlTableFetcher()

    assembled = []
    for dataset in ("players", "teams"):
        builder = create_builder(dataset, fetcher=fetcher)
        if builder is None:
            raise ValueError(f"No builder registered for dataset '{dataset}'")
        assembled.append(assemble(builder, years))

    players, teams = assembled
    return players, teams
