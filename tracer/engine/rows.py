"""Display row construction for unified and split views.

Contains:
- DisplayLine: One hunk line with resolved line numbers and pairing info
- RowSide, SplitRow: Split-view rows (left = old, right = new)
- UnifiedRow: Unified-view rows with a single line number column
- build_display_lines: Resolve numbers, snippets and word diffs for a hunk
- build_split_rows: Collapse paired lines into side-by-side rows
- build_unified_rows: One row per line
- line_number_widths: Column widths for a file's line numbers
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from tracer.engine.models import Hunk, LineKind
from tracer.engine.pairing import LinePair, pair_lines
from tracer.engine.worddiff import InlineSpan, word_diff_pair


@dataclass(frozen=True)
class DisplayLine:
    """A hunk line ready for layout."""

    index: int
    kind: LineKind
    text: str
    old_number: int
    new_number: int
    snippet_id: Optional[str] = None
    paired_with: Optional[int] = None
    spans: Optional[tuple[InlineSpan, ...]] = None  # Word-diff spans when highlighted


@dataclass(frozen=True)
class RowSide:
    """One side of a split-view row."""

    number: int
    text: str
    kind: LineKind
    snippet_id: Optional[str] = None
    spans: Optional[tuple[InlineSpan, ...]] = None


@dataclass(frozen=True)
class SplitRow:
    """A split-view row; a side is None when it is blank."""

    left: Optional[RowSide]
    right: Optional[RowSide]

    @property
    def snippet_id(self) -> Optional[str]:
        if self.left is not None and self.left.snippet_id:
            return self.left.snippet_id
        if self.right is not None:
            return self.right.snippet_id
        return None


@dataclass(frozen=True)
class UnifiedRow:
    """A unified-view row.

    ``number`` is the new-file line number, or None for removals. The
    removal's own old-file number stays available in ``old_number``.
    """

    number: Optional[int]
    old_number: int
    text: str
    kind: LineKind
    snippet_id: Optional[str] = None
    spans: Optional[tuple[InlineSpan, ...]] = None


def build_display_lines(
    hunk: Hunk, pairs: Optional[Sequence[LinePair]] = None
) -> list[DisplayLine]:
    """Resolve line numbers, snippet ids and word diffs for one hunk.

    Args:
        hunk: The hunk to lay out.
        pairs: Pairing results; computed with pair_lines when omitted.

    Returns:
        One DisplayLine per hunk line, in hunk order.
    """
    if pairs is None:
        pairs = pair_lines(hunk.lines)

    partner: dict[int, int] = {}
    spans_by_index: dict[int, tuple[InlineSpan, ...]] = {}
    for remove_idx, add_idx in pairs:
        partner[remove_idx] = add_idx
        partner[add_idx] = remove_idx
        highlighted = word_diff_pair(hunk.lines[remove_idx].text, hunk.lines[add_idx].text)
        if highlighted is not None:
            spans_by_index[remove_idx] = tuple(highlighted[0])
            spans_by_index[add_idx] = tuple(highlighted[1])

    old_number = hunk.old_start
    new_number = hunk.new_start
    snippet_counter = 0
    active_snippet: Optional[str] = None
    result: list[DisplayLine] = []

    for index, line in enumerate(hunk.lines):
        if line.is_change:
            if active_snippet is None:
                snippet_counter += 1
                active_snippet = f"snippet-{snippet_counter}"
        else:
            active_snippet = None

        result.append(
            DisplayLine(
                index=index,
                kind=line.kind,
                text=line.text,
                old_number=old_number,
                new_number=new_number,
                snippet_id=active_snippet,
                paired_with=partner.get(index),
                spans=spans_by_index.get(index),
            )
        )

        if line.kind is LineKind.REMOVE:
            old_number += 1
        elif line.kind is LineKind.ADD:
            new_number += 1
        else:
            old_number += 1
            new_number += 1

    return result


def _old_side(line: DisplayLine) -> RowSide:
    return RowSide(line.old_number, line.text, line.kind, line.snippet_id, line.spans)


def _new_side(line: DisplayLine) -> RowSide:
    return RowSide(line.new_number, line.text, line.kind, line.snippet_id, line.spans)


def build_split_rows(lines: Sequence[DisplayLine]) -> list[SplitRow]:
    """Collapse display lines into side-by-side rows.

    Paired removals share a row with their addition; unpaired changes get a
    blank opposite side; context appears on both sides. Rows keep the input
    line order.
    """
    rows: list[SplitRow] = []
    consumed: set[int] = set()

    for position, line in enumerate(lines):
        if position in consumed:
            continue

        if line.kind is LineKind.REMOVE and line.paired_with is not None:
            partner = lines[line.paired_with]
            rows.append(SplitRow(left=_old_side(line), right=_new_side(partner)))
            consumed.add(line.paired_with)
        elif line.kind is LineKind.REMOVE:
            rows.append(SplitRow(left=_old_side(line), right=None))
        elif line.kind is LineKind.ADD:
            rows.append(SplitRow(left=None, right=_new_side(line)))
        else:
            rows.append(SplitRow(left=_old_side(line), right=_new_side(line)))
        consumed.add(position)

    return rows


def build_unified_rows(lines: Sequence[DisplayLine]) -> list[UnifiedRow]:
    """One row per display line, numbered in the new file."""
    return [
        UnifiedRow(
            number=None if line.kind is LineKind.REMOVE else line.new_number,
            old_number=line.old_number,
            text=line.text,
            kind=line.kind,
            snippet_id=line.snippet_id,
            spans=line.spans,
        )
        for line in lines
    ]


def line_number_widths(hunks: Iterable[Hunk]) -> tuple[int, int]:
    """Digit widths of the largest old and new line numbers shown for a file."""
    max_old = 0
    max_new = 0
    for hunk in hunks:
        old_number = hunk.old_start
        new_number = hunk.new_start
        for line in hunk.lines:
            if line.kind is not LineKind.ADD:
                max_old = max(max_old, old_number)
                old_number += 1
            if line.kind is not LineKind.REMOVE:
                max_new = max(max_new, new_number)
                new_number += 1
    return len(str(max_old)), len(str(max_new))
