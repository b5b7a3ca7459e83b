"""Word-level diff between a paired removed and added line.

Contains:
- WORD_DIFF_THRESHOLD: Minimum similarity for word-level highlighting
- WordSegment: One segment of a word diff
- InlineSpan: A piece of rendered line text with a highlight flag
- tokenize_words: Split text into word and whitespace tokens
- diff_words: Token-level diff covering both texts
- removed_spans / added_spans: Project a word diff onto one side
- word_diff_pair: Spans for both sides, or None below the threshold
"""

import difflib
import re
from dataclasses import dataclass
from typing import Optional

from tracer.engine.similarity import similarity


WORD_DIFF_THRESHOLD = 0.5

_TOKEN_RE = re.compile(r"\s+|\S+")


@dataclass(frozen=True)
class WordSegment:
    """A run of tokens that is unchanged, added or removed."""

    value: str
    added: bool = False
    removed: bool = False


@dataclass(frozen=True)
class InlineSpan:
    """Text on one side of a paired line; highlight marks changed words."""

    text: str
    highlight: bool = False


def tokenize_words(text: str) -> list[str]:
    """Split text into alternating word and whitespace tokens.

    Joining the tokens gives back the original text.
    """
    return _TOKEN_RE.findall(text)


def _append(segments: list[WordSegment], value: str, added: bool = False, removed: bool = False) -> None:
    # Merge with the previous segment when it has the same kind
    if segments and segments[-1].added == added and segments[-1].removed == removed:
        previous = segments.pop()
        value = previous.value + value
    segments.append(WordSegment(value=value, added=added, removed=removed))


def diff_words(old: str, new: str) -> list[WordSegment]:
    """Compute a token-level diff between two lines.

    Args:
        old: The removed line text.
        new: The added line text.

    Returns:
        Ordered segments. Segments that are not ``added`` rebuild ``old``;
        segments that are not ``removed`` rebuild ``new``.
    """
    old_tokens = tokenize_words(old)
    new_tokens = tokenize_words(new)
    matcher = difflib.SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    segments: list[WordSegment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append(segments, "".join(old_tokens[i1:i2]))
            continue
        # Removed text always precedes added text inside a replacement
        if i2 > i1:
            _append(segments, "".join(old_tokens[i1:i2]), removed=True)
        if j2 > j1:
            _append(segments, "".join(new_tokens[j1:j2]), added=True)
    return segments


def removed_spans(segments: list[WordSegment]) -> list[InlineSpan]:
    """Spans for the removed line: unchanged text plus highlighted removals."""
    return [InlineSpan(seg.value, highlight=seg.removed) for seg in segments if not seg.added]


def added_spans(segments: list[WordSegment]) -> list[InlineSpan]:
    """Spans for the added line: unchanged text plus highlighted additions."""
    return [InlineSpan(seg.value, highlight=seg.added) for seg in segments if not seg.removed]


def word_diff_pair(
    old: str, new: str, threshold: float = WORD_DIFF_THRESHOLD
) -> Optional[tuple[list[InlineSpan], list[InlineSpan]]]:
    """Build highlighted spans for a paired remove/add line.

    Args:
        old: The removed line text.
        new: The added line text.
        threshold: Minimum similarity required for word-level highlighting.

    Returns:
        ``(old_spans, new_spans)``, or None when the lines are too dissimilar
        and should be shown as plain lines.
    """
    if similarity(old, new) < threshold:
        return None
    segments = diff_words(old, new)
    return removed_spans(segments), added_spans(segments)
