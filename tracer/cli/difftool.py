"""CLI command used as a git difftool backend.

Configure with:
    git config difftool.tracer.cmd 'tracer difftool "$LOCAL" "$REMOTE"'
"""

from typing import Optional

import typer

from tracer import global_config
from tracer.cli.utils import column_width, show_in_pager
from tracer.config import ViewMode
from tracer.diff import parse_unified_diff
from tracer.formatters import format_file
from tracer.git import GitError, get_path_diff
from tracer.global_config import GlobalConfigError


def difftool_command(
    local: str = typer.Argument(..., help="Old version of the file ($LOCAL)"),
    remote: str = typer.Argument(..., help="New version of the file ($REMOTE)"),
    split: Optional[bool] = typer.Option(
        None,
        "--split/--unified",
        help="Side-by-side or unified layout (default from config)",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colors"),
    no_pager: bool = typer.Option(False, "--no-pager", help="Print directly instead of using a pager"),
) -> None:
    """Show the difference between two files, for use as a git difftool."""
    try:
        if split is None:
            view = global_config.get_view_mode()
        else:
            view = ViewMode.SPLIT if split else ViewMode.UNIFIED

        diff_text = get_path_diff(local, remote)
    except (GitError, GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    files, _ = parse_unified_diff(diff_text)
    files = [f for f in files if f.hunks]
    if not files:
        typer.echo("No changes to display")
        raise typer.Exit(0)

    width = column_width()
    output = "\n\n".join(
        format_file(f, view, color=not no_color, column_width=width) for f in files
    )

    if no_pager:
        typer.echo(output)
    else:
        show_in_pager(output)
