"""HTML table fetcher.

Retrieves a page with ``requests``, locates one table with a CSS selector and
parses it into a RawTable of strings. Basketball Reference ships some tables
inside HTML comments; those are searched when the selector does not match the
live document.
"""

from typing import Any

import requests
import structlog
from bs4 import BeautifulSoup, Comment, Tag
from pydantic import ValidationError

from nba_trends.ingestion.exceptions import FetchError
from nba_trends.models.tables import RawTable
from nba_trends.utils.cache import ContentCache
from nba_trends.utils.config import get_settings

logger = structlog.get_logger(__name__)


def _cell_texts(row: Tag) -> list[str]:
    return [cell.get_text(strip=True) for cell in row.find_all(["th", "td"], recursive=False)]


def parse_table(table: Tag, url: str, selector: str) -> RawTable:
    """
    Parse a ``<table>`` element into a RawTable.

    The header is the last ``<thead>`` row (over-header rows above it are
    ignored). Data rows come from ``<tbody>`` when present, otherwise from
    every ``<tr>`` of the table. Rows shorter than the header are padded
    with empty cells.

    Args:
        table: The table element.
        url: Source page, recorded on the result.
        selector: Selector used to find the table, recorded on the result.

    Raises:
        FetchError: If a data row is wider than the header.
    """
    header: list[str] = []
    thead = table.find("thead")
    if thead is not None:
        head_rows = thead.find_all("tr")
        if head_rows:
            header = _cell_texts(head_rows[-1])

    body = table.find("tbody")
    source_rows = body.find_all("tr") if body is not None else table.find_all("tr")
    if body is None and thead is not None:
        source_rows = [tr for tr in source_rows if tr.find_parent("thead") is None]

    rows = [cells for cells in (_cell_texts(tr) for tr in source_rows) if cells]

    width = len(header) or max((len(r) for r in rows), default=0)
    for i, cells in enumerate(rows):
        if len(cells) > width:
            raise FetchError(url, selector, f"row {i} has {len(cells)} cells, expected {width}")
        if len(cells) < width:
            rows[i] = cells + [""] * (width - len(cells))

    return RawTable(url=url, selector=selector, header=header, rows=rows)


def _find_table(soup: BeautifulSoup, selector: str) -> Tag | None:
    found = soup.select_one(selector)
    if found is not None:
        return found

    for comment in soup.find_all(string=lambda t: isinstance(t, Comment)):
        if "<table" not in comment:
            continue
        found = BeautifulSoup(comment, "html.parser").select_one(selector)
        if found is not None:
            return found
    return None


class HtmlTableFetcher:
    """
    Fetch and parse HTML tables.

    Parsed tables are cached by URL and selector, so fetching the same season
    twice in a run (or across runs) only hits the network once.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        cache: ContentCache | None = None,
        timeout: int | None = None,
    ):
        """
        Initialize fetcher.

        Args:
            session: HTTP session. If None, creates one with the configured User-Agent.
            cache: Content cache for parsed tables. If None, creates default.
            timeout: Request timeout in seconds. If None, uses settings.
        """
        settings = get_settings()
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": settings.user_agent})
        self.session = session
        self.cache = cache or ContentCache()
        self.timeout = timeout or settings.request_timeout
        self.logger = logger.bind(component="html_table_fetcher")

    def fetch_html(self, url: str, selector: str) -> str:
        """Download a page, raising FetchError on any transport or HTTP failure."""
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error("Failed to fetch page", url=url, error=str(e))
            raise FetchError(url, selector, f"request failed: {e}") from e
        return response.text

    def fetch_table(self, url: str, selector: str) -> RawTable:
        """
        Retrieve ``url`` and parse the first element matching ``selector``.

        Args:
            url: Page URL.
            selector: CSS selector of the table.

        Returns:
            RawTable with header and data rows as strings.

        Raises:
            FetchError: On network failure, HTTP error status, or missing table.
        """
        cache_key = f"table::{url}::{selector}"
        cached: Any = self.cache.get(cache_key)
        if cached is not None:
            try:
                raw = RawTable.model_validate(cached)
            except ValidationError as e:
                self.logger.warning(
                    "Discarding invalid cached table", url=url, selector=selector, error=str(e)
                )
            else:
                self.logger.debug("Cache hit for table", url=url, selector=selector)
                return raw

        self.logger.info("Fetching table", url=url, selector=selector)
        soup = BeautifulSoup(self.fetch_html(url, selector), "html.parser")

        table = _find_table(soup, selector)
        if table is None:
            self.logger.error("Table not found", url=url, selector=selector)
            raise FetchError(url, selector, "no element matches selector")

        raw = parse_table(table, url, selector)
        self.cache.set(cache_key, raw.model_dump())

        self.logger.info(
            "Fetched table", url=url, columns=len(raw.header), rows=len(raw.rows)
        )
        return raw


def fetch_table(url: str, selector: str) -> RawTable:
    """Fetch one table with a default HtmlTableFetcher."""
    return HtmlTableFetcher().fetch_table(url, selector)
