"""CLI commands for the analysis cache."""

import typer

from tracer.cache import clear_analysis_cache, get_cache_dir

# Subcommand group for cache management
cache_app = typer.Typer(
    name="cache",
    help="Manage cached analyses in ~/.tracer/",
    add_completion=False,
)


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove all cached analyses."""
    try:
        removed = clear_analysis_cache()
    except OSError as e:
        typer.echo(f"Error clearing cache: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Removed {removed} cached analysis file(s) from {get_cache_dir()}")
