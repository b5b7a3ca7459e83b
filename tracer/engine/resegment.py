"""Resegmentation of a file's hunks along classified line ranges.

Contains:
- CaptureState: Accumulators of the single-pass capture fold
- capture_step: Fold one hunk line into a CaptureState
- capture_segment: Slice one hunk to a segment's range
- resegment_hunks: Synthetic hunks for one file
- resegment_files: Synthetic hunks for a whole changeset
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from tracer.engine.models import ClassifiedSegment, FileDiff, Hunk, LineKind, LineOp


@dataclass(frozen=True)
class CaptureState:
    """Running counters of a capture walk over one hunk."""

    old_line: int
    new_line: int
    capturing: bool = False
    segment_old_start: Optional[int] = None
    captured: tuple[LineOp, ...] = ()
    closed: bool = False

    @classmethod
    def start(cls, hunk: Hunk) -> "CaptureState":
        return cls(old_line=hunk.old_start, new_line=hunk.new_start)


def capture_step(state: CaptureState, line: LineOp, segment: ClassifiedSegment) -> CaptureState:
    """Advance the capture walk by one line.

    Removed lines are captured only while capturing is on. Added and
    context lines are captured when the new-file counter lies inside the
    segment; the first such line switches capturing on and records the
    old-file start. Once capturing, the first line past the segment end
    closes the walk.

    Args:
        state: State before this line.
        line: The hunk line being visited.
        segment: The segment whose range is being captured.

    Returns:
        State after this line.
    """
    if state.closed:
        return state

    if line.kind is LineKind.REMOVE:
        captured = state.captured + (line,) if state.capturing else state.captured
        return replace(state, old_line=state.old_line + 1, captured=captured)

    capturing = state.capturing
    segment_old_start = state.segment_old_start
    captured = state.captured

    if segment.line_start <= state.new_line <= segment.line_end:
        captured = captured + (line,)
        if not capturing:
            capturing = True
            segment_old_start = state.old_line
    elif capturing and state.new_line > segment.line_end:
        return replace(state, closed=True)

    return replace(
        state,
        old_line=state.old_line + 1 if line.kind is LineKind.CONTEXT else state.old_line,
        new_line=state.new_line + 1,
        capturing=capturing,
        segment_old_start=segment_old_start,
        captured=captured,
    )


def _overlaps(hunk: Hunk, segment: ClassifiedSegment) -> bool:
    hunk_end = hunk.new_start + hunk.new_lines - 1
    return segment.line_start <= hunk_end and segment.line_end >= hunk.new_start


def capture_segment(hunk: Hunk, segment: ClassifiedSegment) -> Optional[Hunk]:
    """Slice ``hunk`` to the lines covered by ``segment``.

    Returns:
        A synthetic hunk with recomputed starts and counts, or None when
        nothing was captured.
    """
    state = CaptureState.start(hunk)
    for line in hunk.lines:
        state = capture_step(state, line, segment)
        if state.closed:
            break

    if not state.captured:
        return None

    old_lines = sum(1 for line in state.captured if line.kind is not LineKind.ADD)
    new_lines = sum(1 for line in state.captured if line.kind is not LineKind.REMOVE)
    return Hunk(
        old_start=state.segment_old_start,
        old_lines=old_lines,
        new_start=segment.line_start,
        new_lines=new_lines,
        lines=state.captured,
    )


def resegment_hunks(
    hunks: Sequence[Hunk], segments: Iterable[ClassifiedSegment]
) -> Sequence[Hunk]:
    """Re-slice one file's hunks into synthetic hunks, one per segment.

    Segments are processed in ascending ``line_start`` order. Each segment
    only consults the first hunk whose new-file range overlaps it.

    Args:
        hunks: The file's original hunks.
        segments: Segments already filtered to this file.

    Returns:
        The synthetic hunks, or ``hunks`` itself when none were produced.
    """
    ordered = sorted(segments, key=lambda seg: seg.line_start)
    synthetic: list[Hunk] = []

    for segment in ordered:
        if segment.is_empty_range:
            continue
        hunk = next((h for h in hunks if _overlaps(h, segment)), None)
        if hunk is None:
            continue
        sliced = capture_segment(hunk, segment)
        if sliced is not None:
            synthetic.append(sliced)

    return synthetic if synthetic else hunks


def resegment_files(
    files: Sequence[FileDiff], segments: Iterable[ClassifiedSegment]
) -> list[FileDiff]:
    """Apply resegment_hunks to every file of a changeset.

    Files keep their input order. A file without matching segments, or whose
    segments capture nothing, is returned unchanged.
    """
    by_file: dict[str, list[ClassifiedSegment]] = {}
    for segment in segments:
        by_file.setdefault(segment.file, []).append(segment)

    result: list[FileDiff] = []
    for file_diff in files:
        file_segments = by_file.get(file_diff.name) if file_diff.name else None
        if not file_segments:
            result.append(file_diff)
            continue
        hunks = resegment_hunks(file_diff.hunks, file_segments)
        result.append(file_diff if hunks is file_diff.hunks else file_diff.with_hunks(hunks))
    return result
