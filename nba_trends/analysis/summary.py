"""League-level summaries of the team dataset."""

import pandas as pd

from nba_trends.processing.schema import FOUR_FACTORS


def season_averages(teams: pd.DataFrame) -> pd.DataFrame:
    """League mean of each Four Factor and of W/L% per season, ordered by year."""
    columns = [*FOUR_FACTORS, "W/L%"]
    numeric = teams[["Year", *columns]].astype({col: "Float64" for col in columns})
    return numeric.groupby("Year", sort=True)[columns].mean().reset_index()


def four_factor_correlations(teams: pd.DataFrame) -> pd.Series:
    """Pearson correlation of each Four Factor with W/L% across all team-seasons."""
    numeric = teams[[*FOUR_FACTORS, "W/L%"]].astype(float)
    return numeric[list(FOUR_FACTORS)].corrwith(numeric["W/L%"]).rename("corr_with_wl")
