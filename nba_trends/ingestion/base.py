"""Base class for season table builders."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

import numpy as np
import pandas as pd
import structlog

from nba_trends.ingestion.exceptions import IngestionError, SchemaError
from nba_trends.ingestion.fetcher import HtmlTableFetcher
from nba_trends.models.tables import Dataset, SeasonOutcome, SeasonTable, is_header_row

logger = structlog.get_logger(__name__)


def drop_empty_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Drop every column with no value in any row.

    Works positionally, so blank or duplicated column names (spacer columns
    in rendered HTML tables) are handled.
    """
    keep = []
    for i in range(frame.shape[1]):
        col = frame.iloc[:, i]
        blank = col.isna() | col.astype(str).str.strip().eq("")
        if not blank.all():
            keep.append(i)
    return frame.iloc[:, keep]


def drop_header_rows(frame: pd.DataFrame) -> pd.DataFrame:
    """Drop rows that repeat the frame's own column names."""
    header = [str(c) for c in frame.columns]
    keep = np.array(
        [not is_header_row(list(row), header) for row in frame.itertuples(index=False)],
        dtype=bool,
    )
    return frame.loc[keep].reset_index(drop=True)


class BaseSeasonBuilder(ABC):
    """
    Abstract base class for season table builders.

    A builder turns one unit of work (a season year, or a page index for
    sources that paginate by page) into one SeasonTable. ``ingest`` wraps
    ``build`` so a failing season is reported instead of raised.
    """

    dataset: Dataset

    def __init__(self, fetcher: HtmlTableFetcher | None = None):
        """
        Initialize builder.

        Args:
            fetcher: Table fetcher. If None, creates default.
        """
        if not getattr(self, "dataset", None):
            raise AttributeError(f"{type(self).__name__} must define a non-empty 'dataset'")
        self.fetcher = fetcher or HtmlTableFetcher()
        self.logger = logger.bind(dataset=self.dataset)

    @abstractmethod
    def build(self, unit: int) -> SeasonTable:
        """
        Build one season's table.

        Args:
            unit: Season year or page index, depending on the source.

        Raises:
            FetchError: If a source table cannot be retrieved.
            SchemaError: If a source table lacks required columns.
        """
        pass

    @abstractmethod
    def unit_for_year(self, year: int) -> int:
        """Map a season year to the unit ``build`` expects."""
        pass

    def require_columns(self, frame: pd.DataFrame, required: Iterable[str], year: int) -> None:
        """Raise SchemaError if any required column is absent."""
        missing = set(required) - set(frame.columns)
        if missing:
            self.logger.error("Season table schema mismatch", year=year, missing=sorted(missing))
            raise SchemaError(self.dataset, year, missing)

    def ingest(self, unit: int) -> SeasonOutcome:
        """
        Build one season, isolating failures.

        ``dataset`` and ``unit`` are bound as log context for the duration,
        so fetcher and cache events carry the season they belong to.

        Returns:
            SeasonOutcome with status SUCCESS and the table, or FAILED with the error.
        """
        with structlog.contextvars.bound_contextvars(dataset=self.dataset, unit=unit):
            self.logger.info("Building season table")
            try:
                table = self.build(unit)
            except IngestionError as e:
                self.logger.error(
                    "Season build failed",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return SeasonOutcome(
                    dataset=self.dataset,
                    unit=unit,
                    status="FAILED",
                    error=type(e).__name__,
                    error_message=str(e),
                )

            self.logger.info("Season build completed", year=table.year, rows=len(table))
            return SeasonOutcome(dataset=self.dataset, unit=unit, status="SUCCESS", table=table)

    def ingest_years(self, years: Iterable[int]) -> Iterator[SeasonOutcome]:
        """Lazily build each season in ``years``."""
        for year in years:
            yield self.ingest(self.unit_for_year(year))
