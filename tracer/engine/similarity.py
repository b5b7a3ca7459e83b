"""Line similarity scoring.

Contains:
- edit_distance: Single-character insert/delete/substitute distance
- similarity: Normalized similarity in [0, 1]
"""


def edit_distance(a: str, b: str) -> int:
    """Compute the Levenshtein distance between two strings (unit costs).

    Args:
        a: First string.
        b: Second string.

    Returns:
        Minimum number of single-character edits turning ``a`` into ``b``.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return ``(maxLen - editDistance) / maxLen`` for two lines.

    Two empty strings are identical and score 1.0.

    Args:
        a: First line text.
        b: Second line text.

    Returns:
        Similarity in the closed range [0, 1].
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - edit_distance(a, b)) / max_len
