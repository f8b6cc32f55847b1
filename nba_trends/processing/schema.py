"""Typed column schemas for the player and team datasets.

Every column is declared integer, decimal or text. Coercion never raises: a
cell that does not parse under its declared type becomes missing.
"""

from __future__ import annotations

import math
from typing import Any, Literal

import pandas as pd
import structlog

logger = structlog.get_logger(__name__)

ColumnType = Literal["integer", "decimal", "text"]

# Canonical Four Factors labels, shared by both datasets
FOUR_FACTORS: tuple[str, ...] = ("eFG%", "FT%", "TOV%", "ORB%")

_PLAYER_INTEGER = [
    "Year", "Age", "G", "GS", "MP", "FG", "FGA", "3P", "3PA", "2P", "2PA",
    "FT", "FTA", "ORB", "DRB", "TRB", "AST", "STL", "BLK", "TOV", "PF", "PTS",
]  # fmt: skip
_PLAYER_DECIMAL = [
    "FG%", "3P%", "2P%", "eFG%", "FT%", "PER", "TS%", "3PAr", "FTr", "ORB%",
    "DRB%", "TRB%", "AST%", "STL%", "BLK%", "TOV%", "USG%", "OWS", "DWS", "WS",
    "WS/48", "OBPM", "DBPM", "BPM", "VORP",
]  # fmt: skip

# Stat columns every season's source table must carry, outside the join key
TOTALS_STATS: tuple[str, ...] = (
    "GS", "FG", "FGA", "FG%", "3P", "3PA", "3P%", "2P", "2PA", "2P%", "eFG%",
    "FT", "FTA", "FT%", "ORB", "DRB", "TRB", "AST", "STL", "BLK", "TOV", "PF", "PTS",
)  # fmt: skip
ADVANCED_STATS: tuple[str, ...] = (
    "PER", "TS%", "3PAr", "FTr", "ORB%", "DRB%", "TRB%", "AST%", "STL%", "BLK%",
    "TOV%", "USG%", "OWS", "DWS", "WS", "WS/48", "OBPM", "DBPM", "BPM", "VORP",
)  # fmt: skip

PLAYER_SCHEMA: dict[str, ColumnType] = {
    "Player": "text",
    "Pos": "text",
    "Tm": "text",
    **{col: "integer" for col in _PLAYER_INTEGER},
    **{col: "decimal" for col in _PLAYER_DECIMAL},
}

TEAM_SCHEMA: dict[str, ColumnType] = {
    "Year": "integer",
    "Team": "text",
    **{col: "decimal" for col in FOUR_FACTORS},
    "W": "integer",
    "L": "integer",
    "W/L%": "decimal",
    "Rk": "integer",
}

SCHEMAS: dict[str, dict[str, ColumnType]] = {"players": PLAYER_SCHEMA, "teams": TEAM_SCHEMA}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _safe_float(value: Any) -> float | None:
    """Convert value to a finite float, returning None for empty/invalid values."""
    if _is_missing(value):
        return None
    text = str(value).strip().replace(",", "")
    if text in {"", "-"}:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _safe_int(value: Any) -> int | None:
    """Convert value to int, returning None for empty, invalid or fractional values."""
    number = _safe_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _safe_text(value: Any) -> str | None:
    if _is_missing(value):
        return None
    return str(value)


def coerce_integer(series: pd.Series) -> pd.Series:
    """Coerce to nullable ``Int64``."""
    return pd.Series(pd.array([_safe_int(v) for v in series], dtype="Int64"), index=series.index)


def coerce_decimal(series: pd.Series) -> pd.Series:
    """Coerce to nullable ``Float64``."""
    return pd.Series(
        pd.array([_safe_float(v) for v in series], dtype="Float64"), index=series.index
    )


def coerce_text(series: pd.Series) -> pd.Series:
    """Coerce to pandas ``string`` dtype."""
    return pd.Series(pd.array([_safe_text(v) for v in series], dtype="string"), index=series.index)


_COERCERS = {"integer": coerce_integer, "decimal": coerce_decimal, "text": coerce_text}


def apply_schema(frame: pd.DataFrame, schema: dict[str, ColumnType]) -> pd.DataFrame:
    """
    Coerce every column of ``frame`` to its declared type.

    Columns the schema does not declare are kept as text and logged.

    Args:
        frame: Table to type.
        schema: Column name -> declared type.

    Returns:
        A new DataFrame with nullable pandas dtypes.
    """
    typed = frame.copy()
    undeclared = [col for col in typed.columns if col not in schema]
    if undeclared:
        logger.warning("Columns not in schema kept as text", columns=undeclared)

    for col in typed.columns:
        typed[col] = _COERCERS[schema.get(col, "text")](typed[col])
    return typed
