"""Shared helpers for tracer CLI commands.

Contains:
- load_changeset: Fetch, parse, filter and order the diff under review
- load_or_run_analysis: Cached analysis of a diff, running the model on a miss
- show_in_pager: Display text in a scrollable pager
- column_width: Width of one split-view column for the current terminal
"""

import shutil
import subprocess
from typing import Optional

import typer

from tracer import global_config
from tracer.analysis import AnalysisResult, analyze_diff
from tracer.cache import compute_analysis_key, load_cached_analysis, save_analysis_cache
from tracer.config import AnalysisModel
from tracer.diff import filter_files, parse_unified_diff, sort_by_size
from tracer.engine import FileDiff
from tracer.git import GitError, build_diff_args, get_commit_key, get_diff, get_repo_root


def load_changeset(
    staged: bool = False, commit: Optional[str] = None, debug: bool = False
) -> tuple[str, list[FileDiff]]:
    """Fetch the diff under review and turn it into reviewable files.

    Args:
        staged: Review the index.
        commit: Review a single commit.
        debug: Print parser warnings and filter statistics.

    Returns:
        Tuple of (raw diff text, filtered files ordered by size).

    Raises:
        GitError: If git fails.
        NoChangesError: If the diff is empty.
        GlobalConfigError: If the configuration cannot be read.
    """
    if debug:
        typer.echo(f"[debug] diff source: git {' '.join(build_diff_args(staged, commit))}", err=True)
    diff_text = get_diff(staged=staged, commit=commit)
    files, warnings = parse_unified_diff(diff_text)

    kept = filter_files(
        files,
        patterns=global_config.get_ignore_patterns(),
        max_file_lines=global_config.get_max_file_lines(),
    )

    if debug:
        for warning in warnings:
            typer.echo(f"[debug] {warning}", err=True)
        typer.echo(f"[debug] {len(files)} file(s) parsed, {len(kept)} kept after filtering", err=True)

    return diff_text, sort_by_size(kept)


def load_or_run_analysis(
    diff_text: str,
    model: AnalysisModel,
    commit: Optional[str] = None,
    regenerate: bool = False,
    debug: bool = False,
) -> AnalysisResult:
    """Return a cached analysis for this diff and model, or run the model.

    Caching needs a repository root and a resolvable commit; without them
    the model always runs.

    Raises:
        AnalysisError: If the model fails.
    """
    try:
        repo_dir: Optional[str] = str(get_repo_root())
    except GitError:
        repo_dir = None
    commit_key = get_commit_key(commit) if repo_dir else None
    key = compute_analysis_key(diff_text, model.value)

    if debug:
        typer.echo(f"[debug] analysis key {key} (repo={repo_dir}, commit={commit_key})", err=True)

    if repo_dir and commit_key and not regenerate:
        cached = load_cached_analysis(repo_dir, commit_key, key)
        if cached is not None:
            if debug:
                typer.echo("[debug] analysis cache hit", err=True)
            return cached

    if debug:
        typer.echo(f"[debug] running analysis with {model.value}", err=True)
    analysis = analyze_diff(diff_text, model)

    if repo_dir and commit_key:
        save_analysis_cache(repo_dir, commit_key, key, analysis)
    return analysis


def show_in_pager(text: str) -> None:
    """Display text in a scrollable pager.

    Uses the system pager (less) which supports arrow-key scrolling
    and q/Q to quit. Falls back to direct output if pager is unavailable.

    Args:
        text: The text to display.
    """
    less_path = shutil.which("less")
    if less_path:
        try:
            proc = subprocess.Popen(
                [less_path, "-R", "--quit-if-one-screen"],
                stdin=subprocess.PIPE,
                encoding="utf-8",
            )
            proc.communicate(input=text)
            return
        except (OSError, BrokenPipeError):
            pass

    typer.echo(text)


def column_width() -> int:
    """Width of one split-view column, leaving room for the separator."""
    return max(40, (shutil.get_terminal_size((160, 40)).columns - 3) // 2)
