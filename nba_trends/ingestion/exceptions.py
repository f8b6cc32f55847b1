"""Domain-specific exceptions for ingestion operations."""

from collections.abc import Iterable


class IngestionError(Exception):
    """Base exception for ingestion failures."""

    pass


class FetchError(IngestionError):
    """Raised when a page cannot be retrieved or the table is not on it."""

    def __init__(self, url: str, selector: str, reason: str):
        self.url = url
        self.selector = selector
        self.reason = reason
        super().__init__(f"{reason} (url={url}, selector={selector})")


class SchemaError(IngestionError):
    """Raised when a season's table is missing columns the builder requires."""

    def __init__(self, dataset: str, year: int, missing: Iterable[str]):
        self.dataset = dataset
        self.year = year
        self.missing = sorted(missing)
        super().__init__(
            f"{dataset} table for {year} is missing columns: {', '.join(self.missing)}"
        )
