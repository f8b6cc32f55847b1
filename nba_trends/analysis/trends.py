"""Per-team win/loss trend estimator.

Fits ``W/L% ~ Year + Team + Year:Team`` by ordinary least squares. The
reference team is dropped from the team encoding, so the plain ``Year``
coefficient is the reference team's slope and every other team's slope is
that baseline plus its own ``Year:Team`` coefficient.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import structlog
from pydantic import BaseModel, Field
from sklearn.linear_model import LinearRegression

from nba_trends.utils.config import get_settings

logger = structlog.get_logger(__name__)


class TeamTrend(BaseModel):
    """Estimated change in W/L% per season for one team."""

    team: str
    slope: float = Field(..., description="Absolute W/L% change per year")
    interaction: float = Field(..., description="Slope difference from the reference team")
    is_reference: bool = False


class TrendFit(BaseModel):
    """Result of the year x team interaction fit."""

    reference_team: str
    intercept: float
    baseline_slope: float = Field(..., description="Year coefficient (reference team's slope)")
    r_squared: float
    n_obs: int
    trends: list[TeamTrend]

    def to_frame(self) -> pd.DataFrame:
        """Trends as a DataFrame sorted by slope, steepest improvement first."""
        frame = pd.DataFrame([t.model_dump() for t in self.trends])
        return frame.sort_values("slope", ascending=False, kind="mergesort").reset_index(
            drop=True
        )

    def slope_for(self, team: str) -> float:
        for trend in self.trends:
            if trend.team == team:
                return trend.slope
        raise KeyError(team)


def design_matrix(years: np.ndarray, teams: pd.Series, reference_team: str) -> pd.DataFrame:
    """
    Columns: ``Year``, one ``Team[t]`` dummy and one ``Year:Team[t]`` product
    per non-reference team, in sorted team order.
    """
    others = sorted(t for t in teams.unique() if t != reference_team)
    columns: dict[str, np.ndarray] = {"Year": years}
    dummies = {t: (teams == t).to_numpy(dtype=float) for t in others}
    for team, dummy in dummies.items():
        columns[f"Team[{team}]"] = dummy
    for team, dummy in dummies.items():
        columns[f"Year:Team[{team}]"] = years * dummy
    return pd.DataFrame(columns, index=teams.index)


def estimate_trends(teams: pd.DataFrame, reference_team: str | None = None) -> TrendFit:
    """
    Fit W/L% against year and team with an interaction term.

    Args:
        teams: Clean team table with ``Year``, ``Team`` and ``W/L%``.
        reference_team: Baseline team. If None, uses the ``reference_team`` setting.

    Returns:
        TrendFit with every team's absolute slope.

    Raises:
        ValueError: If the table has no usable rows or the reference team is absent.
    """
    reference_team = reference_team or get_settings().reference_team

    data = teams[["Year", "Team", "W/L%"]].dropna()
    if data.empty:
        raise ValueError("No rows with Year, Team and W/L% to fit")

    team_labels = data["Team"].astype(str)
    if reference_team not in set(team_labels):
        raise ValueError(f"Reference team '{reference_team}' not found in data")

    seasons_per_team = data.groupby(team_labels)["Year"].nunique()
    thin = sorted(seasons_per_team[seasons_per_team < 2].index)
    if thin:
        logger.warning("Teams with fewer than two seasons have no identifiable trend", teams=thin)

    years = data["Year"].astype(float).to_numpy()
    target = data["W/L%"].astype(float).to_numpy()
    X = design_matrix(years, team_labels, reference_team)

    model = LinearRegression()
    model.fit(X.to_numpy(), target)
    coef = dict(zip(X.columns, model.coef_))

    baseline = float(coef["Year"])
    trends = [TeamTrend(team=reference_team, slope=baseline, interaction=0.0, is_reference=True)]
    for column, value in coef.items():
        if column.startswith("Year:Team["):
            team = column[len("Year:Team[") : -1]
            trends.append(
                TeamTrend(team=team, slope=baseline + float(value), interaction=float(value))
            )

    fit = TrendFit(
        reference_team=reference_team,
        intercept=float(model.intercept_),
        baseline_slope=baseline,
        r_squared=float(model.score(X.to_numpy(), target)),
        n_obs=len(data),
        trends=trends,
    )
    logger.info(
        "Fitted team trends",
        reference_team=reference_team,
        teams=len(trends),
        n_obs=fit.n_obs,
        r_squared=round(fit.r_squared, 4),
    )
    return fit
