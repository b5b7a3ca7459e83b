"""Main CLI command for reviewing a diff."""

from typing import Optional

import typer

from tracer import __version__, global_config
from tracer.analysis import AnalysisError, AnalysisResult, count_breaking
from tracer.cli.utils import column_width, load_changeset, load_or_run_analysis, show_in_pager
from tracer.config import AnalysisModel, ViewMode, parse_model
from tracer.engine import LinearIndex, resegment_files
from tracer.formatters import format_file
from tracer.git import GitError, NoChangesError
from tracer.global_config import GlobalConfigError


def _resolve_model(model: Optional[str]) -> AnalysisModel:
    if not model:
        return global_config.get_preferred_model()
    try:
        selected = parse_model(model)
    except ValueError:
        valid = ", ".join(m.value for m in AnalysisModel)
        typer.echo(f"Invalid model: {model}. Must be one of: {valid}", err=True)
        raise typer.Exit(1)
    # An explicit --model becomes the preferred model
    try:
        global_config.set_preferred_model(selected)
    except GlobalConfigError as e:
        typer.echo(f"Warning: could not save preferred model: {e}", err=True)
    return selected


def main_command(
    ctx: typer.Context,
    staged: bool = typer.Option(
        False,
        "--staged",
        "-s",
        help="Review staged changes",
    ),
    commit: Optional[str] = typer.Option(
        None,
        "--commit",
        "-c",
        help="Review the changes of a specific commit",
    ),
    split: Optional[bool] = typer.Option(
        None,
        "--split/--unified",
        help="Side-by-side or unified layout (default from config)",
    ),
    intelligent: bool = typer.Option(
        False,
        "--intelligent",
        "-i",
        help="Re-segment hunks into AI-ordered review chunks",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Analysis model for intelligent mode (claude, codex, anthropic, openai)",
    ),
    hunk: Optional[int] = typer.Option(
        None,
        "--hunk",
        "-n",
        help="Show only the N-th hunk of the whole changeset (1-based)",
    ),
    regenerate: bool = typer.Option(
        False,
        "--regenerate",
        "-r",
        help="Ignore the cached analysis and run the model again",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colors"),
    no_pager: bool = typer.Option(False, "--no-pager", help="Print directly instead of using a pager"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Print diagnostic information"),
    version: bool = typer.Option(False, "--version", help="Show the version and exit"),
) -> None:
    """Review git changes hunk by hunk."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    if version:
        typer.echo(f"tracer {__version__}")
        raise typer.Exit(0)

    try:
        selected_model = _resolve_model(model)
        if split is None:
            view = global_config.get_view_mode()
        else:
            view = ViewMode.SPLIT if split else ViewMode.UNIFIED

        # Step 1: Fetch and filter the diff
        diff_text, files = load_changeset(staged=staged, commit=commit, debug=debug)
        if not files:
            typer.echo("No reviewable changes (all files filtered out).")
            raise typer.Exit(0)

        # Step 2: Re-segment along the analysis in intelligent mode
        analysis: Optional[AnalysisResult] = None
        if intelligent:
            try:
                analysis = load_or_run_analysis(
                    diff_text, selected_model, commit=commit, regenerate=regenerate, debug=debug
                )
            except AnalysisError as e:
                typer.echo(f"Warning: analysis failed, showing plain hunks.\n{e}", err=True)
            if analysis is not None:
                if debug:
                    typer.echo(f"[debug] {len(analysis.hunks)} segment(s) received", err=True)
                files = resegment_files(files, analysis.hunks)

        # Step 3: Render
        output = _render(files, view, analysis, hunk, color=not no_color)

    except NoChangesError:
        typer.echo("No changes to review.")
        raise typer.Exit(0)
    except (GitError, GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if no_pager:
        typer.echo(output)
    else:
        show_in_pager(output)


def _render(files, view: ViewMode, analysis: Optional[AnalysisResult], hunk: Optional[int], color: bool) -> str:
    width = column_width()
    index = LinearIndex.from_files(files)

    header = []
    if analysis is not None:
        breaking = count_breaking(analysis)
        if breaking:
            header.append(f"{breaking} breaking change(s)")

    def file_analysis(file_diff):
        return analysis.for_file(file_diff.name) if analysis is not None and file_diff.name else None

    def file_segments(file_diff):
        if analysis is None:
            return None
        return [s for s in analysis.hunks if s.file == file_diff.name]

    def render_file(file_diff, hunk_indices=None):
        return format_file(
            file_diff,
            view,
            file_analysis(file_diff),
            color=color,
            column_width=width,
            hunk_indices=hunk_indices,
            segments=file_segments(file_diff),
        )

    if hunk is not None:
        if index.total == 0:
            return "\n".join(header + ["No hunks to show."])
        position = index.unlinear(hunk - 1)
        current = index.linear(position.file_index, position.hunk_index) + 1
        header.append(f"Hunk {current}/{index.total}")
        body = render_file(files[position.file_index], [position.hunk_index])
        return "\n".join(header + [body, "", _hunk_footer(index, position, current)])

    bodies = [render_file(f) for f in files]
    return "\n\n".join(["\n".join(header)] + bodies if header else bodies)


def _hunk_footer(index: LinearIndex, position, current: int) -> str:
    """'Previous: --hunk N  Next: --hunk M', omitting the ends of the changeset."""
    parts = []
    previous = index.step(position, -1)
    if previous != position:
        parts.append(f"Previous: --hunk {index.linear(previous.file_index, previous.hunk_index) + 1}")
    following = index.step(position, 1)
    if following != position:
        parts.append(f"Next: --hunk {index.linear(following.file_index, following.hunk_index) + 1}")
    return "  ".join(parts) if parts else f"Only hunk ({current}/{index.total})"
