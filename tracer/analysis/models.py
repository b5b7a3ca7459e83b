"""Data models for diff analysis results.

Contains:
- ANALYSIS_VERSION: Schema version stored with every result
- FileAnalysis: Classification of one changed file
- AnalysisResult: Full analysis of a diff (files and classified segments)
"""

import time
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tracer.engine.models import (
    ClassificationType,
    ClassifiedSegment,
    RiskLevel,
    coerce_classification,
    coerce_risk,
)


ANALYSIS_VERSION = "v2"


class FileAnalysis(BaseModel):
    """Classification of one changed file."""

    file: str
    classification: ClassificationType = ClassificationType.UNKNOWN
    risk: RiskLevel = RiskLevel.MEDIUM
    summary: str = ""

    @field_validator("classification", mode="before")
    @classmethod
    def normalize_classification(cls, value):
        return coerce_classification(value)

    @field_validator("risk", mode="before")
    @classmethod
    def normalize_risk(cls, value):
        return coerce_risk(value)


def _now_ms() -> int:
    return int(time.time() * 1000)


class AnalysisResult(BaseModel):
    """Analysis of a diff as returned by a model and stored in the cache."""

    version: str = ANALYSIS_VERSION
    timestamp: int = Field(default_factory=_now_ms)
    model: Optional[str] = None
    files: list[FileAnalysis] = []
    hunks: list[ClassifiedSegment] = []  # Segments in narrative order

    def for_file(self, file_name: str) -> Optional[FileAnalysis]:
        """Return the file-level classification for ``file_name``, if any."""
        for file_analysis in self.files:
            if file_analysis.file == file_name:
                return file_analysis
        return None
