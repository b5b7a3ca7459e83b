"""Cache file path utilities for tracer.

Contains functions for getting paths to cache files:
- get_cache_dir: Get the ~/.tracer directory
- get_analysis_dir: Get the directory holding analysis results
- get_analysis_file: Get the path of one cached analysis
- get_diff_index_file: Get the path of the repo/commit index
"""

from pathlib import Path
from typing import Optional

from tracer.global_config import get_global_config_dir


def get_cache_dir(root: Optional[Path] = None) -> Path:
    """Return the cache root directory, creating it if needed.

    Args:
        root: Override for the cache root (defaults to ~/.tracer).

    Returns:
        Path to the cache directory.
    """
    cache_dir = root if root is not None else get_global_config_dir()
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def get_analysis_dir(root: Optional[Path] = None) -> Path:
    """Return the analysis directory, creating it if needed."""
    analysis_dir = get_cache_dir(root) / "analysis"
    analysis_dir.mkdir(exist_ok=True)
    return analysis_dir


def get_analysis_file(key: str, root: Optional[Path] = None) -> Path:
    """Return path to the cached analysis for ``key``.

    Returns:
        Path to analysis/<key>.json.
    """
    return get_analysis_dir(root) / f"{key}.json"


def get_diff_index_file(root: Optional[Path] = None) -> Path:
    """Return path to the index mapping repo and commit to an analysis key.

    Returns:
        Path to diffs.json.
    """
    return get_cache_dir(root) / "diffs.json"
