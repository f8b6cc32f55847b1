"""Cache commands: stats, clear."""

import typer

from nba_trends.utils.cache import ContentCache

cache_app = typer.Typer(help="Scraped table cache commands.")


@cache_app.command()
def stats() -> None:
    """Show the number and size of cached tables."""
    info = ContentCache().stats()
    typer.echo(f"{info['files']} cached table(s), {info['size_mb']} MB")


@cache_app.command()
def clear() -> None:
    """Delete every cached table so the next build re-fetches all pages."""
    removed = ContentCache().clear()
    typer.echo(f"[OK] Removed {removed} cached table(s)")
