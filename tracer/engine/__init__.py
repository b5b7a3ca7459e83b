"""Diff hunk transformation and pairing engine.

This package provides pure, deterministic functions over parsed diffs:
- models: LineKind, LineOp, Hunk, FileDiff, ClassifiedSegment
- similarity: edit_distance, similarity
- pairing: LinePair, pair_lines
- worddiff: diff_words, word_diff_pair, WORD_DIFF_THRESHOLD
- rows: build_display_lines, build_split_rows, build_unified_rows
- resegment: resegment_hunks, resegment_files
- navigation: LinearIndex, HunkPosition
"""

# Models
from tracer.engine.models import (
    DEV_NULL,
    ClassificationType,
    ClassifiedSegment,
    FileDiff,
    Hunk,
    LineKind,
    LineOp,
    RiskLevel,
)

# Similarity
from tracer.engine.similarity import (
    edit_distance,
    similarity,
)

# Pairing
from tracer.engine.pairing import (
    LinePair,
    pair_lines,
)

# Word diff
from tracer.engine.worddiff import (
    WORD_DIFF_THRESHOLD,
    InlineSpan,
    WordSegment,
    added_spans,
    diff_words,
    removed_spans,
    tokenize_words,
    word_diff_pair,
)

# Rows
from tracer.engine.rows import (
    DisplayLine,
    RowSide,
    SplitRow,
    UnifiedRow,
    build_display_lines,
    build_split_rows,
    build_unified_rows,
    line_number_widths,
)

# Resegmentation
from tracer.engine.resegment import (
    CaptureState,
    capture_segment,
    capture_step,
    resegment_files,
    resegment_hunks,
)

# Navigation
from tracer.engine.navigation import (
    HunkPosition,
    LinearIndex,
)


__all__ = [
    # Models
    "DEV_NULL",
    "ClassificationType",
    "ClassifiedSegment",
    "FileDiff",
    "Hunk",
    "LineKind",
    "LineOp",
    "RiskLevel",
    # Similarity
    "edit_distance",
    "similarity",
    # Pairing
    "LinePair",
    "pair_lines",
    # Word diff
    "WORD_DIFF_THRESHOLD",
    "InlineSpan",
    "WordSegment",
    "added_spans",
    "diff_words",
    "removed_spans",
    "tokenize_words",
    "word_diff_pair",
    # Rows
    "DisplayLine",
    "RowSide",
    "SplitRow",
    "UnifiedRow",
    "build_display_lines",
    "build_split_rows",
    "build_unified_rows",
    "line_number_widths",
    # Resegmentation
    "CaptureState",
    "capture_segment",
    "capture_step",
    "resegment_files",
    "resegment_hunks",
    # Navigation
    "HunkPosition",
    "LinearIndex",
]
