"""Pairing of removed and added lines within one hunk.

Contains:
- LinePair: A (remove_index, add_index) pair
- pair_lines: Greedy positional pairing of adjacent remove/add runs
"""

from typing import NamedTuple, Sequence

from tracer.engine.models import LineKind, LineOp


class LinePair(NamedTuple):
    """Indices of a removed line and the added line it is paired with."""

    remove: int
    add: int


def pair_lines(lines: Sequence[LineOp]) -> list[LinePair]:
    """Pair each run of removed lines with the run of added lines after it.

    Hunks that do not contain both a removal and an addition produce no
    pairs. Within a remove run followed directly by an add run, lines are
    paired by position up to the length of the shorter run; the excess
    stays unpaired.

    Args:
        lines: The ordered lines of one hunk.

    Returns:
        Pairs in the order they occur in the hunk.
    """
    kinds = [line.kind for line in lines]
    if LineKind.REMOVE not in kinds or LineKind.ADD not in kinds:
        return []

    pairs: list[LinePair] = []
    i = 0
    while i < len(kinds):
        if kinds[i] is not LineKind.REMOVE:
            i += 1
            continue

        removes: list[int] = []
        j = i
        while j < len(kinds) and kinds[j] is LineKind.REMOVE:
            removes.append(j)
            j += 1

        adds: list[int] = []
        while j < len(kinds) and kinds[j] is LineKind.ADD:
            adds.append(j)
            j += 1

        pairs.extend(LinePair(r, a) for r, a in zip(removes, adds))
        i = j

    return pairs
