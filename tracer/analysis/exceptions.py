"""Analysis-related exception classes.

Contains all exception classes for diff analysis:
- AnalysisError: Base exception for analysis errors
- MissingAPIKeyError: Raised when an API key is not set
- JSONParseError: Raised when a model response cannot be parsed
"""


class AnalysisError(Exception):
    """Base exception for analysis-related errors."""

    pass


class MissingAPIKeyError(AnalysisError):
    """Raised when the required API key is not set."""

    pass


class JSONParseError(AnalysisError):
    """Raised when the model response cannot be parsed as valid JSON."""

    pass
