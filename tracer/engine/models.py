"""Data models for the tracer diff engine.

Contains:
- LineKind: Kind of a single diff line (context, add, remove)
- LineOp: A single diff line without its leading marker
- Hunk: A contiguous block of a unified diff
- FileDiff: Diff for a single file containing multiple hunks
- ClassificationType, RiskLevel: Tags attached to classified segments
- coerce_classification, coerce_risk: Tolerant parsing of model-produced tags
- ClassifiedSegment: An externally produced line range with a classification
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Name used by unified diffs for the missing side of a created/deleted file
DEV_NULL = "/dev/null"


class LineKind(str, Enum):
    """Kind of a single diff line."""

    CONTEXT = "context"
    ADD = "add"
    REMOVE = "remove"


_MARKERS = {
    LineKind.CONTEXT: " ",
    LineKind.ADD: "+",
    LineKind.REMOVE: "-",
}


@dataclass(frozen=True)
class LineOp:
    """A single diff line."""

    kind: LineKind
    text: str  # Content without the leading marker

    @classmethod
    def from_raw(cls, raw: str) -> "LineOp":
        """Build a LineOp from a raw hunk line such as '+foo' or ' bar'.

        Unknown markers are treated as context so traversal never fails
        on malformed input.
        """
        if raw.startswith("+"):
            kind = LineKind.ADD
        elif raw.startswith("-"):
            kind = LineKind.REMOVE
        else:
            kind = LineKind.CONTEXT
        return cls(kind=kind, text=raw[1:])

    @property
    def raw(self) -> str:
        """The line with its unified diff marker."""
        return _MARKERS[self.kind] + self.text

    @property
    def is_change(self) -> bool:
        return self.kind is not LineKind.CONTEXT


@dataclass(frozen=True)
class Hunk:
    """A contiguous block of a unified diff.

    The declared counts are advisory. Positions are always derived by
    walking ``lines``.
    """

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: tuple[LineOp, ...] = ()

    @classmethod
    def from_raw_lines(
        cls,
        old_start: int,
        old_lines: int,
        new_start: int,
        new_lines: int,
        raw_lines: list[str],
    ) -> "Hunk":
        """Build a Hunk from raw marked lines."""
        return cls(
            old_start=old_start,
            old_lines=old_lines,
            new_start=new_start,
            new_lines=new_lines,
            lines=tuple(LineOp.from_raw(raw) for raw in raw_lines),
        )

    @property
    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"

    @property
    def raw_lines(self) -> list[str]:
        return [line.raw for line in self.lines]

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.ADD)

    @property
    def removals(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.REMOVE)


@dataclass(frozen=True)
class FileDiff:
    """Diff for a single file containing multiple hunks."""

    old_name: Optional[str] = None
    new_name: Optional[str] = None
    hunks: tuple[Hunk, ...] = field(default_factory=tuple)
    is_binary: bool = False

    @property
    def name(self) -> Optional[str]:
        """Display name of the file, ignoring the /dev/null sentinel."""
        if self.new_name and self.new_name != DEV_NULL:
            return self.new_name
        if self.old_name and self.old_name != DEV_NULL:
            return self.old_name
        return None

    @property
    def is_new_file(self) -> bool:
        return self.old_name == DEV_NULL

    @property
    def is_deleted_file(self) -> bool:
        return self.new_name == DEV_NULL

    @property
    def additions(self) -> int:
        return sum(hunk.additions for hunk in self.hunks)

    @property
    def removals(self) -> int:
        return sum(hunk.removals for hunk in self.hunks)

    @property
    def total_lines(self) -> int:
        return sum(len(hunk.lines) for hunk in self.hunks)

    def with_hunks(self, hunks) -> "FileDiff":
        """Return a copy of this file diff holding ``hunks``."""
        return replace(self, hunks=tuple(hunks))


class ClassificationType(str, Enum):
    """Semantic classification of a change."""

    BREAKING = "breaking"
    FEATURE = "feature"
    REFACTOR = "refactor"
    FIX = "fix"
    TEST = "test"
    DOCS = "docs"
    STYLE = "style"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    """Review risk attached to a change."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def coerce_classification(value):
    """Map unrecognized classification tags to 'unknown'."""
    if isinstance(value, str):
        try:
            return ClassificationType(value.strip().lower())
        except ValueError:
            return ClassificationType.UNKNOWN
    return value


def coerce_risk(value):
    """Map unrecognized risk tags to 'medium'."""
    if isinstance(value, str):
        try:
            return RiskLevel(value.strip().lower())
        except ValueError:
            return RiskLevel.MEDIUM
    return value


class ClassifiedSegment(BaseModel):
    """A classified line range in the new-file numbering (inclusive, 1-based)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    file: str
    line_start: int = Field(alias="lineStart")
    line_end: int = Field(alias="lineEnd")
    classification: ClassificationType = ClassificationType.UNKNOWN
    risk: RiskLevel = RiskLevel.MEDIUM
    description: str = ""

    @field_validator("classification", mode="before")
    @classmethod
    def normalize_classification(cls, value):
        return coerce_classification(value)

    @field_validator("risk", mode="before")
    @classmethod
    def normalize_risk(cls, value):
        return coerce_risk(value)

    @property
    def is_empty_range(self) -> bool:
        return self.line_end < self.line_start
