"""Data cleaner for the assembled player and team tables.

Rules run in a fixed order; later rules rely on blanks having been
normalized by earlier ones:

1. drop player rows that repeat the header label in the name column
2. empty strings -> missing, both tables
3. team code aliases -> canonical codes, both tables
4. strip trailing decoration characters from player names
5. apply the typed schema to every column

Cleaning is idempotent: running it on its own output changes nothing.
"""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd
import structlog

from nba_trends.processing.schema import PLAYER_SCHEMA, TEAM_SCHEMA, apply_schema
from nba_trends.utils.config import get_settings

logger = structlog.get_logger(__name__)

PLAYER_NAME_COLUMN = "Player"
PLAYER_TEAM_COLUMN = "Tm"
TEAM_NAME_COLUMN = "Team"

# Marks notable players on some seasons' pages; carries no reliable signal
NAME_DECORATION = "*"


def drop_header_label_rows(frame: pd.DataFrame, column: str) -> pd.DataFrame:
    """Drop rows whose ``column`` value is the column's own label."""
    if column not in frame.columns:
        return frame
    values = frame[column].astype("string").str.strip()
    sentinel = values.eq(column).fillna(False).to_numpy(dtype=bool)
    if sentinel.any():
        logger.info("Dropped repeated header rows", column=column, rows=int(sentinel.sum()))
    return frame.loc[~sentinel].reset_index(drop=True)


def blank_to_missing(frame: pd.DataFrame) -> pd.DataFrame:
    """Replace empty and whitespace-only strings with missing values."""
    cleaned = frame.copy()
    for col in cleaned.columns:
        series = cleaned[col]
        if series.dtype == object or isinstance(series.dtype, pd.StringDtype):
            blank = series.map(lambda v: isinstance(v, str) and not v.strip())
            cleaned[col] = series.mask(blank.astype(bool))
    return cleaned


def apply_team_aliases(
    frame: pd.DataFrame, column: str, aliases: Mapping[str, str]
) -> pd.DataFrame:
    """Rewrite non-standard team codes in ``column`` through ``aliases``."""
    if column not in frame.columns or not aliases:
        return frame
    cleaned = frame.copy()
    hits = cleaned[column].isin(list(aliases)).fillna(False)
    if hits.any():
        logger.info("Normalized team aliases", column=column, rows=int(hits.sum()))
        cleaned[column] = cleaned[column].replace(dict(aliases))
    return cleaned


def strip_name_decoration(frame: pd.DataFrame, column: str = PLAYER_NAME_COLUMN) -> pd.DataFrame:
    """Remove every trailing decoration character from names."""
    if column not in frame.columns:
        return frame

    def _strip(value):
        if isinstance(value, str):
            return value.rstrip(NAME_DECORATION)
        return value

    cleaned = frame.copy()
    cleaned[column] = cleaned[column].map(_strip)
    return cleaned


def clean_players(players: pd.DataFrame, aliases: Mapping[str, str]) -> pd.DataFrame:
    """Apply every cleaning rule to the player table."""
    players = drop_header_label_rows(players, PLAYER_NAME_COLUMN)
    players = blank_to_missing(players)
    players = apply_team_aliases(players, PLAYER_TEAM_COLUMN, aliases)
    players = strip_name_decoration(players, PLAYER_NAME_COLUMN)
    return apply_schema(players, PLAYER_SCHEMA)


def clean_teams(teams: pd.DataFrame, aliases: Mapping[str, str]) -> pd.DataFrame:
    """Apply every cleaning rule that concerns the team table."""
    teams = blank_to_missing(teams)
    teams = apply_team_aliases(teams, TEAM_NAME_COLUMN, aliases)
    return apply_schema(teams, TEAM_SCHEMA)


def clean(
    players_raw: pd.DataFrame,
    teams_raw: pd.DataFrame,
    aliases: Mapping[str, str] | None = None,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Clean the assembled player and team tables.

    Args:
        players_raw: Concatenated player season tables.
        teams_raw: Concatenated team season tables.
        aliases: Team code corrections. If None, uses the ``team_aliases`` setting.

    Returns:
        (players, teams), uniformly typed with nullable pandas dtypes.
    """
    if aliases is None:
        aliases = get_settings().team_aliases

    players = clean_players(players_raw, aliases)
    teams = clean_teams(teams_raw, aliases)

    logger.info("Cleaned datasets", players=len(players), teams=len(teams))
    return players, teams
