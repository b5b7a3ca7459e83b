"""Unified diff parser for tracer.

Contains functions for parsing unified diff text into engine models:
- parse_unified_diff: Parse git diff / git show output
- parse_hunk_header: Parse an @@ header line
- _names_from_git_header: Extract file names from a 'diff --git' line
- _FileBuilder: Mutable accumulator for one file block
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from tracer.engine.models import DEV_NULL, FileDiff, Hunk


_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_GIT_HEADER_PREFIXED_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")


@dataclass
class _HunkBuilder:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    raw_lines: list[str] = field(default_factory=list)
    old_remaining: int = 0
    new_remaining: int = 0

    def accepts_more(self) -> bool:
        return self.old_remaining > 0 or self.new_remaining > 0

    def add(self, raw: str) -> None:
        self.raw_lines.append(raw)
        if raw.startswith("+"):
            self.new_remaining -= 1
        elif raw.startswith("-"):
            self.old_remaining -= 1
        else:
            self.old_remaining -= 1
            self.new_remaining -= 1

    def build(self) -> Hunk:
        return Hunk.from_raw_lines(
            self.old_start, self.old_lines, self.new_start, self.new_lines, self.raw_lines
        )


@dataclass
class _FileBuilder:
    old_name: Optional[str] = None
    new_name: Optional[str] = None
    hunks: list[_HunkBuilder] = field(default_factory=list)
    is_binary: bool = False
    saw_file_headers: bool = False
    # None when the file had no 'diff --git' line
    git_prefixed: Optional[bool] = None

    def build(self) -> FileDiff:
        old_name, new_name = _strip_prefixes(self.old_name, self.new_name, self.git_prefixed)
        return FileDiff(
            old_name=old_name,
            new_name=new_name,
            hunks=tuple(h.build() for h in self.hunks),
            is_binary=self.is_binary,
        )


def parse_hunk_header(header: str) -> Optional[tuple[int, int, int, int]]:
    """Parse '@@ -a,b +c,d @@' into (old_start, old_lines, new_start, new_lines).

    Omitted counts default to 1, as in unified diff output.

    Args:
        header: The @@ header line.

    Returns:
        The four numbers, or None if the line is not a hunk header.
    """
    match = _HUNK_HEADER_RE.match(header)
    if not match:
        return None
    old_start = int(match.group(1))
    old_lines = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_lines = int(match.group(4)) if match.group(4) is not None else 1
    return old_start, old_lines, new_start, new_lines


def _names_from_git_header(line: str) -> tuple[Optional[str], Optional[str]]:
    """Extract (old, new) names from a 'diff --git' line.

    Handles both prefixed (a/ b/) and --no-prefix output.
    """
    match = _GIT_HEADER_PREFIXED_RE.match(line)
    if match:
        return "a/" + match.group(1), "b/" + match.group(2)

    rest = line[len("diff --git "):]
    # With --no-prefix both paths are usually identical: "path path"
    middle = len(rest) // 2
    if len(rest) % 2 == 1 and rest[middle] == " " and rest[:middle] == rest[middle + 1:]:
        return rest[:middle], rest[middle + 1:]
    if " " in rest:
        old, new = rest.split(" ", 1)
        return old, new
    return rest or None, rest or None


def _strip_prefixes(
    old: Optional[str],
    new: Optional[str],
    git_prefixed: Optional[bool] = None,
) -> tuple[Optional[str], Optional[str]]:
    """Remove a/ and b/ prefixes when the diff uses them.

    With a 'diff --git' line, its form decides. Without one, names are only
    stripped when both sides are real paths carrying the prefixes, so a
    file named 'b/x.py' next to /dev/null keeps its name.
    """
    if git_prefixed is None:
        real = old not in (None, DEV_NULL) and new not in (None, DEV_NULL)
        git_prefixed = real and old.startswith("a/") and new.startswith("b/")
    if not git_prefixed:
        return old, new
    if old and old != DEV_NULL and old.startswith("a/"):
        old = old[2:]
    if new and new != DEV_NULL and new.startswith("b/"):
        new = new[2:]
    return old, new


def _file_header_name(line: str) -> str:
    # '--- path\t2024-01-01 ...' -> 'path'
    return line[4:].split("\t", 1)[0].rstrip()


def parse_unified_diff(diff_output: str) -> tuple[list[FileDiff], list[str]]:
    """Parse unified diff text into FileDiff objects.

    Args:
        diff_output: Raw output from git diff or git show.

    Returns:
        Tuple of (list of FileDiff objects, list of warning messages)
    """
    files: list[FileDiff] = []
    warnings: list[str] = []

    if not diff_output.strip():
        return files, warnings

    current: Optional[_FileBuilder] = None
    hunk: Optional[_HunkBuilder] = None

    def flush() -> None:
        if current is not None:
            file_diff = current.build()
            if file_diff.is_binary:
                warnings.append(f"Binary file skipped: {file_diff.name}")
            files.append(file_diff)

    lines = diff_output.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for line in lines:
        if line.startswith("diff --git "):
            flush()
            current = _FileBuilder()
            current.old_name, current.new_name = _names_from_git_header(line)
            current.git_prefixed = bool(_GIT_HEADER_PREFIXED_RE.match(line))
            hunk = None
            continue

        in_hunk_body = hunk is not None and hunk.accepts_more()

        if line.startswith("--- ") and not in_hunk_body:
            # A second '---' without 'diff --git' starts a plain unified diff file
            if current is None or current.saw_file_headers:
                flush()
                current = _FileBuilder()
            current.old_name = _file_header_name(line)
            current.saw_file_headers = True
            hunk = None
            continue

        if line.startswith("+++ ") and not in_hunk_body and current is not None:
            current.new_name = _file_header_name(line)
            continue

        if line.startswith("@@"):
            header = parse_hunk_header(line)
            if header is None or current is None:
                warnings.append(f"Malformed hunk header skipped: {line}")
                hunk = None
                continue
            old_start, old_lines, new_start, new_lines = header
            hunk = _HunkBuilder(
                old_start, old_lines, new_start, new_lines,
                old_remaining=old_lines, new_remaining=new_lines,
            )
            current.hunks.append(hunk)
            continue

        if current is None:
            continue

        if hunk is None:
            if line.startswith("Binary files") or line.startswith("GIT binary patch"):
                current.is_binary = True
            elif line.startswith("rename from "):
                current.old_name = ("a/" if current.git_prefixed else "") + line[len("rename from "):]
            elif line.startswith("rename to "):
                current.new_name = ("b/" if current.git_prefixed else "") + line[len("rename to "):]
            elif line.startswith("new file mode") and not current.saw_file_headers:
                current.old_name = DEV_NULL
            elif line.startswith("deleted file mode") and not current.saw_file_headers:
                current.new_name = DEV_NULL
            continue

        # '\ No newline at end of file' carries no content
        if line.startswith("\\"):
            continue
        # Past the declared counts only marked lines still belong to the hunk
        if not in_hunk_body and not line.startswith(("+", "-", " ")):
            continue
        hunk.add(line)

    flush()
    return files, warnings
