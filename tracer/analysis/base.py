"""Base class and shared helpers for analysis backends."""

import os
from abc import ABC, abstractmethod

from tracer.analysis.exceptions import MissingAPIKeyError
from tracer.analysis.models import AnalysisResult
from tracer.analysis.parsing import parse_json_response, validate_analysis_json


class BaseAnalyzer(ABC):
    """Abstract base class for analysis backends."""

    #: Identifier recorded in results and mixed into cache keys
    model_id: str = ""

    @abstractmethod
    def analyze(self, diff_text: str) -> AnalysisResult:
        """Classify a diff into files and segments.

        Args:
            diff_text: The full unified diff under review.

        Returns:
            The validated analysis.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            JSONParseError: If the response cannot be parsed.
            AnalysisError: For other backend errors.
        """
        pass

    def _build_result(self, raw_response: str) -> AnalysisResult:
        parsed = parse_json_response(raw_response)
        return validate_analysis_json(parsed, self.model_id)

    def _get_api_key_with_fallback(self, env_var_name: str, provider_name: str) -> str:
        """Get an API key from the environment or the credentials file.

        Args:
            env_var_name: Environment variable name to check.
            provider_name: Human-readable provider name for error messages.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        api_key = os.getenv(env_var_name)
        if api_key:
            return api_key

        from tracer.global_config import get_credential

        api_key = get_credential(env_var_name)
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{provider_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: tracer config set-key {provider_name.lower()}\n"
            f"  3. Manually add to ~/.tracer/credentials"
        )
