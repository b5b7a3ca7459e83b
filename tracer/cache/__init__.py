"""Cache module for tracer.

This package caches analysis results to prevent redundant model calls:
- utils: ANALYSIS_CACHE_VERSION, compute_analysis_key
- paths: Functions for getting cache file paths
- store: Loading, saving and clearing cached analyses
"""

# Key computation
from tracer.cache.utils import (
    ANALYSIS_CACHE_VERSION,
    compute_analysis_key,
)

# Path utilities
from tracer.cache.paths import (
    get_analysis_dir,
    get_analysis_file,
    get_cache_dir,
    get_diff_index_file,
)

# Store operations
from tracer.cache.store import (
    clear_analysis_cache,
    load_cached_analysis,
    read_diff_index,
    save_analysis_cache,
    write_diff_index,
)


__all__ = [
    # Key computation
    "ANALYSIS_CACHE_VERSION",
    "compute_analysis_key",
    # Path utilities
    "get_analysis_dir",
    "get_analysis_file",
    "get_cache_dir",
    "get_diff_index_file",
    # Store operations
    "clear_analysis_cache",
    "load_cached_analysis",
    "read_diff_index",
    "save_analysis_cache",
    "write_diff_index",
]
