"""Tests for the player season builder."""

import pandas as pd
import pytest

from nba_trends.ingestion.base import drop_empty_columns, drop_header_rows
from nba_trends.ingestion.exceptions import FetchError, SchemaError
from nba_trends.ingestion.player_seasons import (
    JOIN_KEY,
    PlayerSeasonBuilder,
    build_player_season,
    join_totals_advanced,
)
from nba_trends.models.tables import RawTable
from nba_trends.processing.schema import ADVANCED_STATS, TOTALS_STATS


@pytest.fixture
def builder(sample_settings, table_fetcher, totals_table, advanced_table):
    fetcher = table_fetcher({totals_table.url: totals_table, advanced_table.url: advanced_table})
    return PlayerSeasonBuilder(fetcher=fetcher, settings=sample_settings)


def test_build_joins_totals_and_advanced(builder):
    table = builder.build(2019)

    assert table.dataset == "players"
    assert table.year == 2019
    assert table.columns == [
        "Year", "Player", "Pos", "Age", "Tm", "G", "MP", *TOTALS_STATS, *ADVANCED_STATS,
    ]  # fmt: skip
    assert (table.frame["Year"] == 2019).all()


def test_build_drops_rank_and_spacer_columns(builder):
    table = builder.build(2019)

    assert "Rk" not in table.columns
    assert "" not in table.columns


def test_build_drops_repeated_header_rows(builder):
    table = builder.build(2019)

    assert "Player" not in set(table.frame["Player"])
    assert len(table) == 4


def test_build_keeps_first_of_duplicate_keys(builder):
    frame = builder.build(2019).frame
    harris_tot = frame[(frame["Player"] == "Joe Harris") & (frame["Tm"] == "TOT")]

    assert len(harris_tot) == 1
    assert harris_tot.iloc[0]["FG"] == "200"
    assert harris_tot.iloc[0]["PER"] == "14.0"


def test_build_keeps_traded_player_team_rows(builder):
    frame = builder.build(2019).frame
    harris = frame[frame["Player"] == "Joe Harris"]

    assert list(harris["Tm"]) == ["TOT", "BRK"]
    assert harris.iloc[1]["PER"] == "13.5"


def test_build_keeps_totals_row_without_advanced_match(builder):
    frame = builder.build(2019).frame
    rookie = frame[frame["Player"] == "Rookie Guy"].iloc[0]

    assert pd.isna(rookie["PER"])
    assert rookie["PTS"] == "2"


def test_build_requests_configured_urls(builder, sample_settings):
    builder.build(2019)

    calls = [c.args for c in builder.fetcher.fetch_table.call_args_list]
    assert calls == [
        (
            sample_settings.player_totals_url_template.format(year=2019),
            sample_settings.player_totals_selector,
        ),
        (
            sample_settings.player_advanced_url_template.format(year=2019),
            sample_settings.player_advanced_selector,
        ),
    ]


def test_build_missing_key_column_fails(sample_settings, table_fetcher, totals_table):
    advanced = RawTable(
        url=sample_settings.player_advanced_url_template.format(year=2019),
        selector="table#advanced_stats",
        header=["Player", "Age", "PER"],
        rows=[["Stephen Curry*", "30", "24.4"]],
    )
    fetcher = table_fetcher({totals_table.url: totals_table, advanced.url: advanced})
    builder = PlayerSeasonBuilder(fetcher=fetcher, settings=sample_settings)

    with pytest.raises(SchemaError) as exc_info:
        builder.build(2019)

    assert exc_info.value.year == 2019
    assert {"Rk", "Pos", "Tm", "G", "MP"} <= set(exc_info.value.missing)


@pytest.mark.parametrize("dropped", ["PTS", "GS"])
def test_build_missing_totals_stat_fails(
    sample_settings, table_fetcher, totals_table, advanced_table, dropped
):
    i = totals_table.header.index(dropped)
    totals = RawTable(
        url=totals_table.url,
        selector=totals_table.selector,
        header=totals_table.header[:i] + totals_table.header[i + 1 :],
        rows=[row[:i] + row[i + 1 :] for row in totals_table.rows],
    )
    fetcher = table_fetcher({totals.url: totals, advanced_table.url: advanced_table})
    builder = PlayerSeasonBuilder(fetcher=fetcher, settings=sample_settings)

    with pytest.raises(SchemaError) as exc_info:
        builder.build(2019)

    assert exc_info.value.missing == [dropped]


def test_build_missing_advanced_stat_fails(
    sample_settings, table_fetcher, totals_table, advanced_table
):
    i = advanced_table.header.index("VORP")
    advanced = RawTable(
        url=advanced_table.url,
        selector=advanced_table.selector,
        header=advanced_table.header[:i],
        rows=[row[:i] for row in advanced_table.rows],
    )
    fetcher = table_fetcher({totals_table.url: totals_table, advanced.url: advanced})
    builder = PlayerSeasonBuilder(fetcher=fetcher, settings=sample_settings)

    outcome = builder.ingest(2019)

    assert outcome.status == "FAILED"
    assert outcome.error == "SchemaError"
    assert "VORP" in outcome.error_message


def test_builder_requires_dataset(table_fetcher):
    class Nameless(PlayerSeasonBuilder):
        dataset = ""

    with pytest.raises(AttributeError, match="non-empty 'dataset'"):
        Nameless(fetcher=table_fetcher({}))


def test_build_fetch_failure_propagates(sample_settings, table_fetcher, totals_table):
    builder = PlayerSeasonBuilder(
        fetcher=table_fetcher({totals_table.url: totals_table}), settings=sample_settings
    )

    with pytest.raises(FetchError):
        builder.build(2019)


def test_ingest_isolates_failure(sample_settings, table_fetcher):
    builder = PlayerSeasonBuilder(fetcher=table_fetcher({}), settings=sample_settings)

    outcome = builder.ingest(2019)

    assert outcome.status == "FAILED"
    assert outcome.error == "FetchError"
    assert outcome.table is None


def test_build_player_season_helper(builder):
    assert build_player_season(2019, builder=builder).year == 2019


def test_join_totals_advanced_first_match():
    key = dict(zip(JOIN_KEY, ["A", "1", "G", "25", "TOT", "10", "100"]))
    totals = pd.DataFrame([{**key, "PTS": "50"}, {**key, "PTS": "70"}])
    advanced = pd.DataFrame([{**key, "PER": "11.0"}, {**key, "PER": "22.0"}])

    joined = join_totals_advanced(totals, advanced)

    assert len(joined) == 1
    assert joined.iloc[0]["PTS"] == "50"
    assert joined.iloc[0]["PER"] == "11.0"


def test_join_totals_advanced_overlap_keeps_totals_value():
    key = dict(zip(JOIN_KEY, ["A", "1", "G", "25", "BOS", "10", "100"]))
    totals = pd.DataFrame([{**key, "GS": "5"}])
    advanced = pd.DataFrame([{**key, "GS": "9", "PER": "11.0"}])

    joined = join_totals_advanced(totals, advanced)

    assert list(joined.columns) == [*JOIN_KEY, "GS", "PER"]
    assert joined.iloc[0]["GS"] == "5"


def test_drop_empty_columns_handles_duplicate_blank_names():
    frame = pd.DataFrame([["a", "", "b", " "], ["c", "", "d", None]], columns=["X", "", "Y", ""])

    assert list(drop_empty_columns(frame).columns) == ["X", "Y"]


def test_drop_header_rows_on_empty_frame():
    frame = pd.DataFrame(columns=["Player", "Tm"])

    assert drop_header_rows(frame).empty
