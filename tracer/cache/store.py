"""Analysis cache operations for tracer.

Contains functions for caching analysis results:
- read_diff_index / write_diff_index: Load and store the repo/commit index
- load_cached_analysis: Load an analysis if it is still valid
- save_analysis_cache: Store an analysis and index it
- clear_analysis_cache: Remove all cached analyses
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tracer.analysis.models import AnalysisResult
from tracer.cache.paths import get_analysis_dir, get_analysis_file, get_diff_index_file
from tracer.cache.utils import ANALYSIS_CACHE_VERSION


DiffIndex = dict[str, dict[str, str]]


def read_diff_index(root: Optional[Path] = None) -> DiffIndex:
    """Load the repo/commit index; a missing or corrupt index is empty."""
    index_file = get_diff_index_file(root)
    if not index_file.exists():
        return {}
    try:
        index = json.loads(index_file.read_text())
    except (OSError, json.JSONDecodeError):
        return {}
    return index if isinstance(index, dict) else {}


def write_diff_index(index: DiffIndex, root: Optional[Path] = None) -> None:
    """Store the repo/commit index."""
    get_diff_index_file(root).write_text(json.dumps(index, indent=2))


def load_cached_analysis(
    repo_dir: str,
    commit_key: str,
    key: str,
    root: Optional[Path] = None,
) -> Optional[AnalysisResult]:
    """Load a cached analysis for the current diff.

    Args:
        repo_dir: Repository root the diff came from.
        commit_key: Short sha of the reviewed commit.
        key: Content key from compute_analysis_key.
        root: Override for the cache root.

    Returns:
        The cached AnalysisResult, or None if absent, stale or unreadable.
    """
    index = read_diff_index(root)
    if index.get(repo_dir, {}).get(commit_key) != key:
        return None

    analysis_file = get_analysis_file(key, root)
    if not analysis_file.exists():
        return None

    try:
        cached = AnalysisResult.model_validate_json(analysis_file.read_text())
    except (OSError, ValidationError):
        return None

    if cached.version != ANALYSIS_CACHE_VERSION:
        return None
    return cached


def save_analysis_cache(
    repo_dir: str,
    commit_key: str,
    key: str,
    analysis: AnalysisResult,
    root: Optional[Path] = None,
) -> None:
    """Save an analysis and point the repo/commit index at it.

    Args:
        repo_dir: Repository root the diff came from.
        commit_key: Short sha of the reviewed commit.
        key: Content key from compute_analysis_key.
        analysis: The analysis to store.
        root: Override for the cache root.
    """
    get_analysis_file(key, root).write_text(analysis.model_dump_json(by_alias=True))

    index = read_diff_index(root)
    index.setdefault(repo_dir, {})[commit_key] = key
    write_diff_index(index, root)


def clear_analysis_cache(root: Optional[Path] = None) -> int:
    """Remove all cached analyses and the index.

    Returns:
        Number of analysis files removed.
    """
    removed = 0
    for analysis_file in get_analysis_dir(root).glob("*.json"):
        analysis_file.unlink()
        removed += 1
    index_file = get_diff_index_file(root)
    if index_file.exists():
        index_file.unlink()
    return removed
