"""JSON parsing and validation utilities for analysis responses.

Contains functions for parsing and validating model responses:
- parse_json_response: Parse raw model output as JSON
- validate_analysis_json: Validate parsed JSON against AnalysisResult
"""

import json
import re

from pydantic import ValidationError

from tracer.analysis.exceptions import JSONParseError
from tracer.analysis.models import AnalysisResult


_FENCE_RE = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")


def parse_json_response(raw_response: str) -> dict:
    """Parse the model response as JSON.

    Args:
        raw_response: The raw text response from the model.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        JSONParseError: If parsing fails.
    """
    cleaned = raw_response.strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        match = _FENCE_RE.search(cleaned)
        if match:
            cleaned = match.group(1)

    # Try to extract JSON object if there's extra content
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")

    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise JSONParseError(
            f"Failed to parse analysis response as JSON.\n"
            f"Error: {e}\n"
            f"Raw response:\n{raw_response}"
        )

    if not isinstance(parsed, dict):
        raise JSONParseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def validate_analysis_json(parsed: dict, model: str) -> AnalysisResult:
    """Validate parsed JSON and build an AnalysisResult.

    Missing ``files`` or ``hunks`` keys are treated as empty lists.

    Args:
        parsed: The parsed JSON dictionary.
        model: Identifier of the model that produced the response.

    Returns:
        A validated AnalysisResult.

    Raises:
        JSONParseError: If validation fails.
    """
    try:
        return AnalysisResult(
            model=model,
            files=parsed.get("files") or [],
            hunks=parsed.get("hunks") or [],
        )
    except ValidationError as e:
        raise JSONParseError(
            f"Analysis response does not match expected schema.\n"
            f"Error: {e}\n"
            f"Parsed JSON: {parsed}"
        )
