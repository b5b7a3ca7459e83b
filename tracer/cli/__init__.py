"""CLI entry point for tracer.

This module provides the main CLI application that combines the review
command and its subcommand groups into a single interface.
"""

import typer

from tracer.cli.cache import cache_app
from tracer.cli.config import config_app
from tracer.cli.difftool import difftool_command
from tracer.cli.main import main_command

# Re-export utility functions used by tests
from tracer.cli.utils import (
    load_changeset as _load_changeset,
    load_or_run_analysis as _load_or_run_analysis,
    show_in_pager as _show_in_pager,
)

# Main application
app = typer.Typer(
    name="tracer",
    help="tracer: review git changes hunk by hunk, optionally in AI-ordered segments",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")
app.add_typer(cache_app, name="cache")

# Add standalone commands
app.command("difftool")(difftool_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "cache_app",
    "config_app",
    "difftool_command",
    "main_command",
    # Utility functions (prefixed with _ for internal use)
    "_load_changeset",
    "_load_or_run_analysis",
    "_show_in_pager",
]
