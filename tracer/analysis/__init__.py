"""Diff analysis for tracer.

This package classifies a diff into files and narrative segments using
either an agent CLI (claude, codex) or an API backend (anthropic, openai).
"""

from dotenv import load_dotenv

from tracer.analysis.base import BaseAnalyzer
from tracer.analysis.exceptions import AnalysisError, JSONParseError, MissingAPIKeyError
from tracer.analysis.models import ANALYSIS_VERSION, AnalysisResult, FileAnalysis
from tracer.analysis.ordering import (
    CLASSIFICATION_PRIORITY,
    classification_tag,
    count_breaking,
    risk_color,
    semantic_sort,
)
from tracer.analysis.parsing import parse_json_response, validate_analysis_json
from tracer.analysis.prompt import build_analysis_prompt
from tracer.config import DEFAULT_MODEL, AnalysisModel

# Load environment variables from .env file
load_dotenv()


def get_analyzer(model: AnalysisModel | None = None) -> BaseAnalyzer:
    """Get an analysis backend instance.

    Args:
        model: The backend to use. Defaults to DEFAULT_MODEL.

    Returns:
        An instance of the matching analyzer.

    Raises:
        ValueError: If the model is not supported.
    """
    model = model or DEFAULT_MODEL

    if model in (AnalysisModel.CLAUDE, AnalysisModel.CODEX):
        from tracer.analysis.cli_backend import CLIAnalyzer

        return CLIAnalyzer(model=model)

    elif model == AnalysisModel.ANTHROPIC:
        from tracer.analysis.anthropic_provider import AnthropicAnalyzer

        return AnthropicAnalyzer()

    elif model == AnalysisModel.OPENAI:
        from tracer.analysis.openai_provider import OpenAIAnalyzer

        return OpenAIAnalyzer()

    else:
        raise ValueError(f"Unsupported model: {model}")


def analyze_diff(diff_text: str, model: AnalysisModel | None = None) -> AnalysisResult:
    """Classify a diff into files and segments.

    This is the main entry point for analysis.

    Args:
        diff_text: The full unified diff under review.
        model: The backend to use. Defaults to DEFAULT_MODEL.

    Returns:
        The validated AnalysisResult.

    Raises:
        MissingAPIKeyError: If an API key is not set.
        JSONParseError: If the response cannot be parsed.
        AnalysisError: For other backend errors.
    """
    return get_analyzer(model).analyze(diff_text)


__all__ = [
    "ANALYSIS_VERSION",
    "AnalysisError",
    "AnalysisResult",
    "BaseAnalyzer",
    "CLASSIFICATION_PRIORITY",
    "FileAnalysis",
    "JSONParseError",
    "MissingAPIKeyError",
    "analyze_diff",
    "build_analysis_prompt",
    "classification_tag",
    "count_breaking",
    "risk_color",
    "get_analyzer",
    "parse_json_response",
    "semantic_sort",
    "validate_analysis_json",
]
