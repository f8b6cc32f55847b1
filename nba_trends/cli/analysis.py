"""Analysis commands: trends, summary."""

from pathlib import Path

import structlog
import typer

analysis_app = typer.Typer(help="Analysis over an exported team dataset.")

logger = structlog.get_logger(__name__)


def _load_teams(teams_file: Path):
    from nba_trends.storage import read_dataset

    try:
        return read_dataset(teams_file, "teams")
    except (OSError, ValueError) as e:
        logger.error("Cannot read team dataset", path=str(teams_file), error=str(e))
        typer.echo(f"[FAIL] Cannot read {teams_file}: {e}", err=True)
        raise typer.Exit(code=1) from e


@analysis_app.command()
def trends(
    teams_file: Path = typer.Argument(..., help="Exported teams.csv or teams.parquet"),
    reference_team: str = typer.Option(
        None,
        "--reference-team",
        "-r",
        help="Baseline team for the fit (default: REFERENCE_TEAM setting)",
    ),
) -> None:
    """
    Fit W/L% against year and team and print each team's trend.

    The slope is the change in W/L% per season.
    """
    from nba_trends.analysis import estimate_trends

    teams = _load_teams(teams_file)
    try:
        fit = estimate_trends(teams, reference_team)
    except ValueError as e:
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(
        f"Reference team: {fit.reference_team}  "
        f"(baseline slope {fit.baseline_slope:+.4f}, R^2 {fit.r_squared:.3f}, n={fit.n_obs})"
    )
    for row in fit.to_frame().itertuples(index=False):
        marker = " (reference)" if row.is_reference else ""
        typer.echo(f"{row.team:<8} {row.slope:+.4f}{marker}")


@analysis_app.command()
def summary(
    teams_file: Path = typer.Argument(..., help="Exported teams.csv or teams.parquet"),
) -> None:
    """Print league averages per season and Four Factors correlations with W/L%."""
    from nba_trends.analysis import four_factor_correlations, season_averages

    teams = _load_teams(teams_file)

    typer.echo("League averages by season:")
    typer.echo(season_averages(teams).round(3).to_string(index=False))
    typer.echo("")
    typer.echo("Correlation with W/L%:")
    for factor, value in four_factor_correlations(teams).items():
        typer.echo(f"{factor:<6} {value:+.3f}")
