"""Flat hunk navigation across files.

Contains:
- HunkPosition: A (file_index, hunk_index) coordinate
- LinearIndex: Maps coordinates to a single hunk sequence and back
"""

from typing import Iterable, NamedTuple, Sequence

from tracer.engine.models import FileDiff


class HunkPosition(NamedTuple):
    file_index: int
    hunk_index: int


class LinearIndex:
    """Flattened view over the hunks of an ordered file list."""

    def __init__(self, hunk_counts: Iterable[int]):
        self.hunk_counts: tuple[int, ...] = tuple(hunk_counts)

    @classmethod
    def from_files(cls, files: Sequence[FileDiff]) -> "LinearIndex":
        return cls(len(file_diff.hunks) for file_diff in files)

    @property
    def total(self) -> int:
        return sum(self.hunk_counts)

    def linear(self, file_index: int, hunk_index: int) -> int:
        """Position of a hunk in the flat sequence."""
        return sum(self.hunk_counts[:file_index]) + hunk_index

    def unlinear(self, n: int) -> HunkPosition:
        """Coordinate of the n-th hunk, clamping n to the valid range.

        An index without any hunks maps everything to (0, 0).
        """
        total = self.total
        if total == 0:
            return HunkPosition(0, 0)
        remaining = min(max(n, 0), total - 1)
        for file_index, count in enumerate(self.hunk_counts):
            if remaining < count:
                return HunkPosition(file_index, remaining)
            remaining -= count
        return HunkPosition(len(self.hunk_counts) - 1, self.hunk_counts[-1] - 1)

    def step(self, position: HunkPosition, delta: int) -> HunkPosition:
        """Move ``delta`` hunks forward (or backward) from ``position``."""
        return self.unlinear(self.linear(position.file_index, position.hunk_index) + delta)

    def __len__(self) -> int:
        return self.total
