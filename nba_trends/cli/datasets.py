"""Dataset commands: build."""

from pathlib import Path

import structlog
import typer

from nba_trends.utils.config import get_settings
from nba_trends.utils.logging import get_active_log_file

datasets_app = typer.Typer(help="Scrape, assemble, clean and export the datasets.")

logger = structlog.get_logger(__name__)


@datasets_app.command()
def build(
    start_year: int = typer.Option(
        None,
        "--start-year",
        help="First season year (default: FIRST_SEASON setting)",
    ),
    end_year: int = typer.Option(
        None,
        "--end-year",
        help="Last season year (default: LAST_SEASON setting)",
    ),
    output_dir: Path = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for exported files (default: OUTPUT_DIR setting)",
    ),
    format: str = typer.Option(
        None,
        "--format",
        "-f",
        help="Export format: csv or parquet (default: EXPORT_FORMAT setting)",
    ),
) -> None:
    """
    Build the player and team datasets.

    Scrapes every season in the range, assembles one table per dataset,
    cleans and types them, and writes players.<fmt> and teams.<fmt>.
    Seasons that fail to scrape are reported and skipped.
    """
    from nba_trends.ingestion import assemble_datasets
    from nba_trends.processing import clean
    from nba_trends.storage import SUPPORTED_FORMATS, write_dataset

    settings = get_settings()
    output_dir = output_dir or Path(settings.output_dir)
    format = format or settings.export_format

    if format not in SUPPORTED_FORMATS:
        typer.echo(f"[FAIL] Unknown export format '{format}'", err=True)
        raise typer.Exit(code=1)

    try:
        players, teams = assemble_datasets(start_year, end_year)
    except ValueError as e:
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e

    for assembled in (players, teams):
        for failure in assembled.failures:
            typer.echo(
                f"[WARN] {assembled.dataset} season {failure.unit} skipped: "
                f"{failure.error_message}",
                err=True,
            )

    if players.frame.empty or teams.frame.empty:
        empty = [a.dataset for a in (players, teams) if a.frame.empty]
        typer.echo(f"[FAIL] No seasons built for: {', '.join(empty)}", err=True)
        raise typer.Exit(code=1)

    try:
        players_clean, teams_clean = clean(players.frame, teams.frame)
        players_path = write_dataset(players_clean, output_dir, "players", format)
        teams_path = write_dataset(teams_clean, output_dir, "teams", format)
    except Exception as e:
        logger.exception("Dataset build failed", error=str(e))
        typer.echo(f"[FAIL] Dataset build failed: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"[OK] {len(players_clean)} player rows -> {players_path}")
    typer.echo(f"[OK] {len(teams_clean)} team rows -> {teams_path}")

    log_file = get_active_log_file()
    if log_file is not None:
        typer.echo(f"Log: {log_file}")
