"""Tabular models passed between the fetcher, the season builders and the assembler."""

from collections.abc import Sequence
from typing import Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

Dataset = Literal["players", "teams"]


def is_header_row(row: Sequence[str], header: Sequence[str]) -> bool:
    """
    Return True if a data row repeats the table header by value.

    Sources repeat their header row inside the table body (every ~20 rows on
    Basketball Reference, once at the top on the team source); such rows are
    sentinels, not data.

    Args:
        row: Cell values of one row.
        header: Declared column names.
    """
    if not header or len(row) != len(header):
        return False
    return all(str(cell).strip() == str(name).strip() for cell, name in zip(row, header))


class RawTable(BaseModel):
    """One HTML table parsed to strings: header plus data rows."""

    url: str = Field(..., description="Page the table was read from")
    selector: str = Field(..., description="CSS selector that located the table")
    header: list[str] = Field(default_factory=list, description="Column names from <thead>")
    rows: list[list[str]] = Field(default_factory=list, description="Data rows, cells as text")

    @model_validator(mode="after")
    def check_row_widths(self) -> "RawTable":
        """Every row must be as wide as the header when a header exists."""
        if self.header:
            width = len(self.header)
            for i, row in enumerate(self.rows):
                if len(row) != width:
                    raise ValueError(f"row {i} has {len(row)} cells, header has {width}")
        return self

    def without_header_rows(self, header: Sequence[str] | None = None) -> list[list[str]]:
        """Data rows with every repeat of ``header`` (default: own header) removed."""
        header = list(header) if header is not None else self.header
        return [row for row in self.rows if not is_header_row(row, header)]

    def to_frame(self) -> pd.DataFrame:
        """Build a string DataFrame; duplicate or blank column names are allowed."""
        return pd.DataFrame(self.rows, columns=self.header or None, dtype=object)


class SeasonTable(BaseModel):
    """Single-season intermediate table, before cross-season assembly."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dataset: Dataset
    year: int = Field(..., description="Season year (e.g. 2019 for 2018-19)")
    frame: pd.DataFrame

    @model_validator(mode="after")
    def check_year_column(self) -> "SeasonTable":
        if list(self.frame.columns[:1]) != ["Year"]:
            raise ValueError("Year must be the leading column")
        if len(self.frame) and not (self.frame["Year"] == self.year).all():
            raise ValueError(f"Year column does not match season {self.year}")
        return self

    @property
    def columns(self) -> list[str]:
        return list(self.frame.columns)

    def __len__(self) -> int:
        return len(self.frame)


class SeasonOutcome(BaseModel):
    """Result of building one season: the table, or why it failed."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dataset: Dataset
    unit: int = Field(..., description="Year or page index the builder was called with")
    status: Literal["SUCCESS", "FAILED"]
    table: SeasonTable | None = None
    error: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "SUCCESS"
