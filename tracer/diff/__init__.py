"""Diff text handling for tracer.

This package turns raw diff text into engine models:
- parser: parse_unified_diff, parse_hunk_header
- filters: DEFAULT_IGNORED_FILES, should_ignore_file, filter_files, sort_by_size
"""

from tracer.diff.parser import (
    parse_hunk_header,
    parse_unified_diff,
)

from tracer.diff.filters import (
    DEFAULT_IGNORED_FILES,
    filter_files,
    should_ignore_file,
    sort_by_size,
)


__all__ = [
    "parse_hunk_header",
    "parse_unified_diff",
    "DEFAULT_IGNORED_FILES",
    "filter_files",
    "should_ignore_file",
    "sort_by_size",
]
