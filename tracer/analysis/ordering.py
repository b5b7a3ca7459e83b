"""Classification ordering and labels.

Contains:
- CLASSIFICATION_PRIORITY: Review priority per classification
- CLASSIFICATION_TAGS: Short label and color per classification
- semantic_sort: Order files by classification priority, then size
- classification_tag: Label and color for a classification
- RISK_COLORS, risk_color: Color per risk level
- count_breaking: Number of files classified as breaking

semantic_sort is not applied by resegmentation, which only orders
segments within a file.
"""

from typing import Sequence

from tracer.analysis.models import AnalysisResult
from tracer.engine.models import ClassificationType, FileDiff, RiskLevel


CLASSIFICATION_PRIORITY = {
    ClassificationType.BREAKING: 0,
    ClassificationType.FEATURE: 1,
    ClassificationType.FIX: 2,
    ClassificationType.REFACTOR: 3,
    ClassificationType.TEST: 4,
    ClassificationType.DOCS: 5,
    ClassificationType.STYLE: 6,
    ClassificationType.UNKNOWN: 7,
}

CLASSIFICATION_TAGS = {
    ClassificationType.BREAKING: ("BREAKING", "#ff0000"),
    ClassificationType.FEATURE: ("FEATURE", "#00ff00"),
    ClassificationType.REFACTOR: ("REFACTOR", "#0099ff"),
    ClassificationType.FIX: ("FIX", "#ffaa00"),
    ClassificationType.TEST: ("TEST", "#9999ff"),
    ClassificationType.DOCS: ("DOCS", "#666666"),
    ClassificationType.STYLE: ("STYLE", "#999999"),
    ClassificationType.UNKNOWN: ("UNKNOWN", "#666666"),
}

RISK_COLORS = {
    RiskLevel.HIGH: "#ff0000",
    RiskLevel.MEDIUM: "#ffaa00",
    RiskLevel.LOW: "#00ff00",
}


def semantic_sort(files: Sequence[FileDiff], analysis: AnalysisResult) -> list[FileDiff]:
    """Order files by classification priority, smaller changes first on ties.

    Files without a classification sort as 'unknown'.

    Args:
        files: The files to order.
        analysis: Analysis holding file-level classifications.

    Returns:
        A new, sorted list; the input is not modified.
    """
    by_name = {fa.file: fa.classification for fa in analysis.files}

    def sort_key(file_diff: FileDiff) -> tuple[int, int]:
        classification = by_name.get(file_diff.name or "", ClassificationType.UNKNOWN)
        return CLASSIFICATION_PRIORITY[classification], file_diff.total_lines

    return sorted(files, key=sort_key)


def classification_tag(classification: ClassificationType) -> tuple[str, str]:
    """Return the (label, hex color) shown for a classification."""
    return CLASSIFICATION_TAGS[classification]


def risk_color(risk: RiskLevel) -> str:
    """Return the hex color shown for a risk level."""
    return RISK_COLORS[risk]


def count_breaking(analysis: AnalysisResult) -> int:
    """Count files classified as breaking."""
    return sum(1 for fa in analysis.files if fa.classification is ClassificationType.BREAKING)
