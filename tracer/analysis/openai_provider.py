"""OpenAI API analysis backend."""

from openai import OpenAI

from tracer.analysis.base import BaseAnalyzer
from tracer.analysis.exceptions import AnalysisError
from tracer.analysis.models import AnalysisResult
from tracer.analysis.prompt import build_analysis_prompt
from tracer.config import (
    API_KEY_ENV_VARS,
    DEFAULT_API_MODELS,
    DEFAULT_MAX_TOKENS,
    AnalysisModel,
)


class OpenAIAnalyzer(BaseAnalyzer):
    """OpenAI GPT analysis backend."""

    def __init__(self, model: str | None = None, max_tokens: int = DEFAULT_MAX_TOKENS):
        """Initialize the OpenAI backend.

        Args:
            model: The API model name. Defaults to DEFAULT_API_MODELS.
            max_tokens: Response token budget.
        """
        self.model = model or DEFAULT_API_MODELS[AnalysisModel.OPENAI]
        self.model_id = AnalysisModel.OPENAI.value
        self.max_tokens = max_tokens
        self.api_key_env_var = API_KEY_ENV_VARS[AnalysisModel.OPENAI]

    def get_api_key(self) -> str:
        return self._get_api_key_with_fallback(self.api_key_env_var, "OpenAI")

    def analyze(self, diff_text: str) -> AnalysisResult:
        """Analyze the diff with the OpenAI Chat Completions API."""
        api_key = self.get_api_key()
        client = OpenAI(api_key=api_key)
        prompt = build_analysis_prompt(diff_text=diff_text)

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            raw_response = response.choices[0].message.content or ""
        except Exception as e:
            raise AnalysisError(f"OpenAI API call failed: {e}")

        return self._build_result(raw_response)
