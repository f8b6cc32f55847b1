"""Trend fitting and summaries over the cleaned datasets."""

from nba_trends.analysis.summary import four_factor_correlations, season_averages
from nba_trends.analysis.trends import TeamTrend, TrendFit, estimate_trends

__all__ = [
    "TeamTrend",
    "TrendFit",
    "estimate_trends",
    "four_factor_correlations",
    "season_averages",
]
