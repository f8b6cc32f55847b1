"""Command-line interface for NBA Trends."""

import typer

from nba_trends.utils.config import ensure_directories
from nba_trends.utils.logging import setup_logging

from .analysis import analysis_app
from .cache import cache_app
from .datasets import datasets_app

ensure_directories()
setup_logging()

app = typer.Typer(
    name="nba-trends",
    help="NBA Trends - season datasets and team win/loss trends",
    add_completion=False,
)

app.add_typer(datasets_app, name="datasets")
app.add_typer(analysis_app, name="analysis")
app.add_typer(cache_app, name="cache")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
