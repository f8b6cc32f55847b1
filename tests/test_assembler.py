"""Tests for cross-season dataset assembly."""

from unittest.mock import patch

import pandas as pd
import pytest

from nba_trends.ingestion.assembler import (
    assemble,
    assemble_datasets,
    reduce_outcomes,
    season_range,
)
from nba_trends.ingestion.team_seasons import TeamSeasonBuilder
from nba_trends.models.tables import RawTable, SeasonOutcome, SeasonTable

TEAM_LABELS = ["Rank", "Team", "Team EFg%", "Team FT Rate", "Team TOV%", "Team ORB%", "Opp EFg%", "Win", "Loss"]


def _team_page(settings, page_index, team, wins, losses):
    return RawTable(
        url=settings.team_url_template.format(page_index=page_index),
        selector="table",
        rows=[
            list(TEAM_LABELS),
            ["1", team, "0.5", "0.2", "0.1", "0.2", "0.5", str(wins), str(losses)],
        ],
    )


@pytest.fixture
def team_pages(sample_settings):
    """Pages for 2019 and 2017; 2018 (page 2) is absent."""
    pages = [
        _team_page(sample_settings, 1, "GSW", 57, 25),
        _team_page(sample_settings, 3, "HOU", 65, 17),
    ]
    return {page.url: page for page in pages}


def test_assemble_isolates_failed_season(sample_settings, table_fetcher, team_pages):
    builder = TeamSeasonBuilder(fetcher=table_fetcher(team_pages), settings=sample_settings)

    result = assemble(builder, range(2017, 2020))

    assert not result.ok
    assert result.dataset == "teams"
    assert result.years == [2017, 2019]
    assert [f.unit for f in result.failures] == [2]
    assert result.failures[0].error == "FetchError"
    assert result.frame["Team"].tolist() == ["HOU", "GSW"]


def test_assemble_columns_stable_across_seasons(sample_settings, table_fetcher, team_pages):
    builder = TeamSeasonBuilder(fetcher=table_fetcher(team_pages), settings=sample_settings)

    result = assemble(builder, [2017, 2019])

    assert result.ok
    assert list(result.frame.columns)[0] == "Year"
    assert result.frame["Year"].tolist() == [2017, 2019]
    assert result.frame.index.tolist() == [0, 1]


def test_reduce_outcomes_empty():
    result = reduce_outcomes("players", [])

    assert result.frame.empty
    assert result.years == []
    assert result.ok


def test_reduce_outcomes_keeps_arrival_order():
    frames = [pd.DataFrame({"Year": [year], "Player": [f"p{year}"]}) for year in (2001, 2000)]
    outcomes = [
        SeasonOutcome(
            dataset="players",
            unit=int(f["Year"][0]),
            status="SUCCESS",
            table=SeasonTable(dataset="players", year=int(f["Year"][0]), frame=f),
        )
        for f in frames
    ]

    result = reduce_outcomes("players", outcomes)

    assert result.frame["Player"].tolist() == ["p2001", "p2000"]
    assert result.years == [2001, 2000]


def test_season_range_inclusive():
    assert list(season_range(2017, 2019)) == [2017, 2018, 2019]


def test_season_range_defaults_to_settings(sample_settings):
    with patch("nba_trends.ingestion.assembler.get_settings", return_value=sample_settings):
        years = season_range()

    assert years[0] == sample_settings.first_season
    assert years[-1] == sample_settings.last_season


def test_season_range_rejects_inverted_bounds():
    with pytest.raises(ValueError, match="after end year"):
        season_range(2019, 2017)


def test_assemble_datasets_builds_both(
    sample_settings, table_fetcher, team_pages, totals_table, advanced_table
):
    fetcher = table_fetcher(
        {**team_pages, totals_table.url: totals_table, advanced_table.url: advanced_table}
    )

    with (
        patch("nba_trends.ingestion.player_seasons.get_settings", return_value=sample_settings),
        patch("nba_trends.ingestion.team_seasons.get_settings", return_value=sample_settings),
    ):
        players, teams = assemble_datasets(2019, 2019, fetcher=fetcher)

    assert players.dataset == "players"
    assert players.ok
    assert len(players.frame) == 4
    assert teams.dataset == "teams"
    assert teams.frame["Team"].tolist() == ["GSW"]
