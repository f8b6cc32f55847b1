"""
Pydantic models for cleaned player and team season rows.

Field aliases are the column labels used by the cleaned DataFrames (the
Basketball Reference abbreviations), so a row can be validated directly from
``DataFrame.to_dict(orient="records")``.
"""

from typing import Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class PlayerRecord(BaseModel):
    """One player's statistics for one season on one team (or the TOT aggregate)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    year: int = Field(..., alias="Year", description="Season year")
    player: str = Field(..., alias="Player", description="Player name, decorations stripped")
    position: Optional[str] = Field(None, alias="Pos")
    age: Optional[int] = Field(None, alias="Age")
    team: Optional[str] = Field(None, alias="Tm", description="Team code, aliases normalized")

    # Totals
    games: Optional[int] = Field(None, alias="G")
    games_started: Optional[int] = Field(None, alias="GS")
    minutes: Optional[int] = Field(None, alias="MP")
    fg: Optional[int] = Field(None, alias="FG")
    fga: Optional[int] = Field(None, alias="FGA")
    fg_pct: Optional[float] = Field(None, alias="FG%")
    fg3: Optional[int] = Field(None, alias="3P")
    fg3a: Optional[int] = Field(None, alias="3PA")
    fg3_pct: Optional[float] = Field(None, alias="3P%")
    fg2: Optional[int] = Field(None, alias="2P")
    fg2a: Optional[int] = Field(None, alias="2PA")
    fg2_pct: Optional[float] = Field(None, alias="2P%")
    efg_pct: Optional[float] = Field(None, alias="eFG%")
    ft: Optional[int] = Field(None, alias="FT")
    fta: Optional[int] = Field(None, alias="FTA")
    ft_pct: Optional[float] = Field(None, alias="FT%")
    orb: Optional[int] = Field(None, alias="ORB")
    drb: Optional[int] = Field(None, alias="DRB")
    trb: Optional[int] = Field(None, alias="TRB")
    ast: Optional[int] = Field(None, alias="AST")
    stl: Optional[int] = Field(None, alias="STL")
    blk: Optional[int] = Field(None, alias="BLK")
    tov: Optional[int] = Field(None, alias="TOV")
    pf: Optional[int] = Field(None, alias="PF")
    pts: Optional[int] = Field(None, alias="PTS")

    # Advanced
    per: Optional[float] = Field(None, alias="PER")
    ts_pct: Optional[float] = Field(None, alias="TS%")
    fg3a_rate: Optional[float] = Field(None, alias="3PAr")
    ft_rate: Optional[float] = Field(None, alias="FTr")
    orb_pct: Optional[float] = Field(None, alias="ORB%")
    drb_pct: Optional[float] = Field(None, alias="DRB%")
    trb_pct: Optional[float] = Field(None, alias="TRB%")
    ast_pct: Optional[float] = Field(None, alias="AST%")
    stl_pct: Optional[float] = Field(None, alias="STL%")
    blk_pct: Optional[float] = Field(None, alias="BLK%")
    tov_pct: Optional[float] = Field(None, alias="TOV%")
    usg_pct: Optional[float] = Field(None, alias="USG%")
    ows: Optional[float] = Field(None, alias="OWS")
    dws: Optional[float] = Field(None, alias="DWS")
    ws: Optional[float] = Field(None, alias="WS")
    ws_per_48: Optional[float] = Field(None, alias="WS/48")
    obpm: Optional[float] = Field(None, alias="OBPM")
    dbpm: Optional[float] = Field(None, alias="DBPM")
    bpm: Optional[float] = Field(None, alias="BPM")
    vorp: Optional[float] = Field(None, alias="VORP")


class TeamSeasonRecord(BaseModel):
    """One team's Four Factors and record for one season."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    year: int = Field(..., alias="Year", description="Season year")
    team: str = Field(..., alias="Team")
    effective_fg_pct: Optional[float] = Field(None, alias="eFG%")
    free_throw_rate: Optional[float] = Field(None, alias="FT%")
    turnover_pct: Optional[float] = Field(None, alias="TOV%")
    offensive_rebound_pct: Optional[float] = Field(None, alias="ORB%")
    wins: Optional[int] = Field(None, ge=0, alias="W")
    losses: Optional[int] = Field(None, ge=0, alias="L")
    win_loss_pct: Optional[float] = Field(None, ge=0, le=1, alias="W/L%")
    rank: Optional[int] = Field(None, ge=1, alias="Rk", description="1 = best W/L% that season")


def _native_rows(frame: pd.DataFrame) -> list[dict]:
    """Rows as dicts of plain Python values with missing cells as None."""
    return [
        {key: (None if pd.isna(value) else value) for key, value in row.items()}
        for row in frame.astype(object).to_dict(orient="records")
    ]


def to_player_records(players: pd.DataFrame) -> list[PlayerRecord]:
    """Validate a cleaned player table into PlayerRecord models."""
    return [PlayerRecord.model_validate(row) for row in _native_rows(players)]


def to_team_records(teams: pd.DataFrame) -> list[TeamSeasonRecord]:
    """Validate a cleaned team table into TeamSeasonRecord models."""
    return [TeamSeasonRecord.model_validate(row) for row in _native_rows(teams)]
