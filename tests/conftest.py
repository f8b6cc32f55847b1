"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pandas as pd
import pytest

from nba_trends.ingestion.exceptions import FetchError
from nba_trends.models.tables import RawTable
from nba_trends.processing.schema import ADVANCED_STATS, TOTALS_STATS

TOTALS_URL = "https://example.test/players/{year}/totals"
ADVANCED_URL = "https://example.test/players/{year}/advanced"
TEAM_URL = "https://example.test/teams/page/{page_index}"

ROW_KEY = ["Rk", "Player", "Pos", "Age", "Tm", "G", "MP"]
# Blank names are the spacer columns rendered between stat groups
TOTALS_HEADER = [*ROW_KEY, *TOTALS_STATS, ""]
ADVANCED_HEADER = [*ROW_KEY, *ADVANCED_STATS[:12], "", *ADVANCED_STATS[12:]]

TEAM_LABELS = [
    "Rank",
    "Team",
    "Team EFg%",
    "Team FT Rate",
    "Team TOV%",
    "Team ORB%",
    "Opp EFg%",
    "Win",
    "Loss",
]


@pytest.fixture
def sample_settings(tmp_path):
    """Settings pointing every source at example.test and every directory at tmp_path."""
    from nba_trends.utils.config import Settings

    return Settings(
        player_totals_url_template=TOTALS_URL,
        player_advanced_url_template=ADVANCED_URL,
        team_url_template=TEAM_URL,
        cache_dir=str(tmp_path / "cache"),
        cache_enabled=False,
        log_dir=str(tmp_path / "logs"),
        output_dir=str(tmp_path / "data"),
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def table_fetcher():
    """Return a factory for mock fetchers serving RawTables keyed by URL."""

    def _create(tables: dict[str, RawTable]):
        fetcher = MagicMock()

        def _fetch(url, selector):
            if url not in tables:
                raise FetchError(url, selector, "no element matches selector")
            return tables[url]

        fetcher.fetch_table.side_effect = _fetch
        return fetcher

    return _create


def stat_row(header, key, stats=None):
    """One data row: ``key`` fills ROW_KEY, ``stats`` overrides, other stats are "0"."""
    values = {**dict(zip(ROW_KEY, key)), **(stats or {})}
    return [values.get(col, "0") if col else "" for col in header]


@pytest.fixture
def totals_table():
    """Totals page for 2019: a repeated header row, a traded player and a duplicate key."""
    h = TOTALS_HEADER
    rows = [
        stat_row(
            h,
            ["1", "Stephen Curry*", "PG", "30", "GSW", "69", "2331"],
            {"GS": "69", "FG": "632", "FG%": ".472", "PTS": "1881"},
        ),
        stat_row(
            h,
            ["2", "Joe Harris", "SG", "27", "TOT", "60", "1400"],
            {"GS": "12", "FG": "200", "FG%": ".450", "PTS": "560"},
        ),
        stat_row(
            h,
            ["2", "Joe Harris", "SG", "27", "BRK", "40", "1000"],
            {"GS": "12", "FG": "150", "FG%": ".455", "PTS": "420"},
        ),
        stat_row(
            h,
            ["2", "Joe Harris", "SG", "27", "TOT", "60", "1400"],
            {"GS": "12", "FG": "999", "FG%": ".999", "PTS": "999"},
        ),
        list(h),
        stat_row(
            h,
            ["3", "Rookie Guy", "C", "20", "ATL", "5", "20"],
            {"FG": "1", "FG%": ".500", "PTS": "2"},
        ),
    ]
    return RawTable(
        url=TOTALS_URL.format(year=2019),
        selector="table#totals_stats",
        header=list(TOTALS_HEADER),
        rows=rows,
    )


@pytest.fixture
def advanced_table():
    """Advanced page for 2019; Rookie Guy has no advanced row."""
    h = ADVANCED_HEADER
    rows = [
        stat_row(
            h, ["1", "Stephen Curry*", "PG", "30", "GSW", "69", "2331"], {"PER": "24.4", "WS": "9.7"}
        ),
        stat_row(
            h, ["2", "Joe Harris", "SG", "27", "TOT", "60", "1400"], {"PER": "14.0", "WS": "3.1"}
        ),
        stat_row(
            h, ["2", "Joe Harris", "SG", "27", "TOT", "60", "1400"], {"PER": "88.8", "WS": "8.8"}
        ),
        list(h),
        stat_row(
            h, ["2", "Joe Harris", "SG", "27", "BRK", "40", "1000"], {"PER": "13.5", "WS": "2.0"}
        ),
    ]
    return RawTable(
        url=ADVANCED_URL.format(year=2019),
        selector="table#advanced_stats",
        header=list(ADVANCED_HEADER),
        rows=rows,
    )


@pytest.fixture
def team_table():
    """Team page 1 (2019): labels in the first body row, a tie and a team with no games."""
    rows = [
        list(TEAM_LABELS),
        ["1", "GSW", "0.550", "0.200", "0.120", "0.220", "0.500", "73", "9"],
        ["2", "SAS", "0.520", "0.210", "0.130", "0.230", "0.490", "67", "15"],
        ["3", "NEW", "", "", "", "", "", "0", "0"],
        ["4", "BOS", "0.510", "0.190", "0.125", "0.240", "0.505", "41", "41"],
        ["5", "ATL", "0.505", "0.220", "0.140", "0.250", "0.510", "41", "41"],
    ]
    return RawTable(url=TEAM_URL.format(page_index=1), selector="table", header=[], rows=rows)


@pytest.fixture
def raw_players():
    """Assembled, uncleaned player rows as the builders produce them."""
    return pd.DataFrame(
        {
            "Year": [2019, 2019, 2019, 2019],
            "Player": ["Stephen Curry*", "Player", "Kyle Lowry", "Rookie Guy"],
            "Pos": ["PG", "Pos", "PG", ""],
            "Age": ["30", "Age", "32", "twenty"],
            "Tm": ["GSW", "Tm", "TOT", "ATL"],
            "G": ["69", "G", "65", "5"],
            "MP": ["2331", "MP", "2213", ""],
            "FG%": [".472", "FG%", ".427", ""],
            "PER": ["24.4", "PER", "16.0", None],
        }
    )


@pytest.fixture
def raw_teams():
    """Assembled, uncleaned team rows as the team builder produces them."""
    return pd.DataFrame(
        {
            "Year": [2019, 2019, 2018],
            "Team": ["GSW", "TOT", "HOU"],
            "eFG%": ["0.550", "", "0.540"],
            "FT%": ["0.200", "0.190", "0.210"],
            "TOV%": ["0.120", "0.130", "0.125"],
            "ORB%": ["0.220", "0.230", "0.240"],
            "W": pd.array([73, 58, 65], dtype="Int64"),
            "L": pd.array([9, 24, 17], dtype="Int64"),
            "W/L%": pd.array([73 / 82, 58 / 82, 65 / 82], dtype="Float64"),
            "Rk": pd.array([1, 2, 1], dtype="Int64"),
        }
    )
