"""Cache utility functions for tracer.

Contains:
- ANALYSIS_CACHE_VERSION: Schema tag mixed into every cache key
- compute_analysis_key: Content key for an analysis of a diff by a model
"""

import hashlib

from tracer.analysis.models import ANALYSIS_VERSION


ANALYSIS_CACHE_VERSION = ANALYSIS_VERSION


def compute_analysis_key(diff_text: str, model: str, version: str = ANALYSIS_CACHE_VERSION) -> str:
    """Compute the cache key of an analysis.

    The version tag and model are hashed together with the diff so that
    different models never share an entry and a schema bump invalidates
    all earlier entries.

    Args:
        diff_text: The full diff text.
        model: The model identifier (e.g. "claude").
        version: Schema version tag.

    Returns:
        SHA1 hex digest.
    """
    return hashlib.sha1(f"{version}:{model}:{diff_text}".encode()).hexdigest()
