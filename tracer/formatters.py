"""Plain terminal output of engine rows.

Contains:
- format_file_title: 'Created/Deleted/Updated <file> with N additions ...'
- format_unified_rows: One text line per unified row
- format_split_rows: Side-by-side text lines per split row
- segment_for_hunk: Classified segment a hunk belongs to
- format_segment_header: 'LABEL | Risk: x' line and description of a segment
- format_file: Title plus all hunks of a file
"""

from typing import Optional, Sequence

from tracer.analysis.models import FileAnalysis
from tracer.analysis.ordering import classification_tag, risk_color
from tracer.config import ViewMode
from tracer.engine import (
    ClassifiedSegment,
    FileDiff,
    Hunk,
    InlineSpan,
    LineKind,
    SplitRow,
    UnifiedRow,
    build_display_lines,
    build_split_rows,
    build_unified_rows,
    line_number_widths,
)

RED = "\033[31m"
GREEN = "\033[32m"
DIM = "\033[2m"
BOLD = "\033[1m"
RED_BG = "\033[41m"
GREEN_BG = "\033[42m"
RESET = "\033[0m"

_MARKERS = {LineKind.ADD: "+", LineKind.REMOVE: "-", LineKind.CONTEXT: " "}
_FG = {LineKind.ADD: GREEN, LineKind.REMOVE: RED}
_HIGHLIGHT_BG = {LineKind.ADD: GREEN_BG, LineKind.REMOVE: RED_BG}

SPLIT_SEPARATOR = " │ "


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _hex_to_ansi(hex_color: str) -> str:
    """Truecolor foreground escape for '#rrggbb'."""
    value = hex_color.lstrip("#")
    red, green, blue = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return f"\033[38;2;{red};{green};{blue}m"


def format_file_title(
    file_diff: FileDiff, file_analysis: Optional[FileAnalysis] = None, color: bool = True
) -> str:
    """Describe a file's change, e.g. 'Updated src/app.py with 3 additions and 1 removal'."""
    additions = file_diff.additions
    removals = file_diff.removals

    if additions > 0 and removals == 0:
        verb = "Created"
    elif removals > 0 and additions == 0:
        verb = "Deleted"
    else:
        verb = "Updated"

    name = file_diff.name or ""
    title = f"{verb} {BOLD}{name}{RESET}" if color else f"{verb} {name}"

    counts = []
    if additions:
        counts.append(_plural(additions, "addition"))
    if removals:
        counts.append(_plural(removals, "removal"))
    if counts:
        title += " with " + " and ".join(counts)

    if file_analysis is not None:
        label, hex_color = classification_tag(file_analysis.classification)
        tag = f"[{label}]"
        title += f" {_hex_to_ansi(hex_color)}{tag}{RESET}" if color else f" {tag}"
    return title


def _render_text(text: str, kind: LineKind, spans: Optional[Sequence[InlineSpan]], color: bool) -> str:
    if not color:
        return text
    fg = _FG.get(kind)
    if fg is None:
        return text
    if not spans:
        return f"{fg}{text}{RESET}"
    parts = []
    for span in spans:
        if span.highlight:
            parts.append(f"{_HIGHLIGHT_BG[kind]}{span.text}{RESET}{fg}")
        else:
            parts.append(span.text)
    return f"{fg}{''.join(parts)}{RESET}"


def format_unified_rows(rows: Sequence[UnifiedRow], number_width: int, color: bool = True) -> list[str]:
    """Render unified rows; removals leave the number column blank."""
    lines = []
    for row in rows:
        number = str(row.number) if row.number is not None else ""
        marker = _MARKERS[row.kind]
        text = _render_text(row.text, row.kind, row.spans, color)
        lines.append(f"{number:>{number_width}} {marker}{text}")
    return lines


def _split_cell(side, number_width: int, column_width: int, color: bool) -> str:
    if side is None:
        return " " * column_width
    prefix = f"{side.number:>{number_width}} {_MARKERS[side.kind]}"
    plain_length = len(prefix) + len(side.text)
    padding = " " * max(0, column_width - plain_length)
    return prefix + _render_text(side.text, side.kind, side.spans, color) + padding


def format_split_rows(
    rows: Sequence[SplitRow],
    left_width: int,
    right_width: int,
    column_width: int = 80,
    color: bool = True,
) -> list[str]:
    """Render split rows as 'old | new' text lines."""
    lines = []
    for row in rows:
        left = _split_cell(row.left, left_width, column_width, color)
        right = _split_cell(row.right, right_width, 0, color)
        lines.append((left + SPLIT_SEPARATOR + right).rstrip())
    return lines


def segment_for_hunk(hunk: Hunk, segments: Sequence[ClassifiedSegment]) -> Optional[ClassifiedSegment]:
    """Return the first segment whose line range contains the hunk's new start."""
    for segment in segments:
        if segment.line_start <= hunk.new_start <= segment.line_end:
            return segment
    return None


def format_segment_header(segment: ClassifiedSegment, color: bool = True) -> list[str]:
    """Render 'LABEL | Risk: level' and the description of a segment."""
    label, hex_color = classification_tag(segment.classification)
    risk = segment.risk.value
    if color:
        line = (
            f"{BOLD}{_hex_to_ansi(hex_color)}{label}{RESET} | "
            f"Risk: {_hex_to_ansi(risk_color(segment.risk))}{risk}{RESET}"
        )
    else:
        line = f"{label} | Risk: {risk}"
    lines = [line]
    if segment.description:
        lines.append(f"{DIM}{segment.description}{RESET}" if color else segment.description)
    return lines


def format_file(
    file_diff: FileDiff,
    view: ViewMode = ViewMode.SPLIT,
    file_analysis: Optional[FileAnalysis] = None,
    color: bool = True,
    column_width: int = 80,
    hunk_indices: Optional[Sequence[int]] = None,
    segments: Optional[Sequence[ClassifiedSegment]] = None,
) -> str:
    """Render a file title and its hunks, separated by an ellipsis line.

    Args:
        file_diff: The file to render.
        view: Split or unified layout.
        file_analysis: Optional classification shown in the title.
        color: Emit ANSI colors.
        column_width: Width of each split-view column.
        hunk_indices: Only render these hunks (all when None).
        segments: Classified segments of this file; a matching segment's
            label, risk and description are shown above each hunk.

    Returns:
        The rendered text.
    """
    left_width, right_width = line_number_widths(file_diff.hunks)
    indices = list(range(len(file_diff.hunks))) if hunk_indices is None else list(hunk_indices)

    out = [format_file_title(file_diff, file_analysis, color), ""]
    for position, hunk_index in enumerate(indices):
        hunk = file_diff.hunks[hunk_index]
        segment = segment_for_hunk(hunk, segments) if segments else None
        if segment is not None:
            out.extend(format_segment_header(segment, color))
        header = f"{DIM}{hunk.header}{RESET}" if color else hunk.header
        out.append(header)
        display_lines = build_display_lines(hunk)
        if view is ViewMode.UNIFIED:
            out.extend(
                format_unified_rows(build_unified_rows(display_lines), max(left_width, right_width), color)
            )
        else:
            out.extend(
                format_split_rows(build_split_rows(display_lines), left_width, right_width, column_width, color)
            )
        if position < len(indices) - 1:
            out.append(" " * (left_width + 2) + "…")
    return "\n".join(out)
