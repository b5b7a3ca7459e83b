"""Analysis through locally installed agent CLIs (claude, codex)."""

import os
import subprocess
import tempfile
import time

from tracer.analysis.base import BaseAnalyzer
from tracer.analysis.exceptions import AnalysisError
from tracer.analysis.models import AnalysisResult
from tracer.analysis.prompt import build_analysis_prompt
from tracer.config import CLI_COMMANDS, CLI_TIMEOUT_SECONDS, AnalysisModel


class CLIAnalyzer(BaseAnalyzer):
    """Runs an agent CLI with the prompt on stdin and reads JSON from stdout."""

    def __init__(self, model: AnalysisModel = AnalysisModel.CLAUDE, timeout: int = CLI_TIMEOUT_SECONDS):
        """Initialize the CLI analyzer.

        Args:
            model: Which CLI to run (claude or codex).
            timeout: Seconds before the subprocess is abandoned.
        """
        if model not in CLI_COMMANDS:
            raise ValueError(f"No CLI command configured for model: {model.value}")
        self.model = model
        self.model_id = model.value
        self.command = list(CLI_COMMANDS[model])
        self.timeout = timeout

    def analyze(self, diff_text: str) -> AnalysisResult:
        """Write the diff to a temp file and let the agent CLI analyze it."""
        fd, diff_path = tempfile.mkstemp(prefix=f"tracer-{int(time.time() * 1000)}-", suffix=".diff")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(diff_text)

            prompt = build_analysis_prompt(diff_path=diff_path)
            try:
                result = subprocess.run(
                    self.command,
                    input=prompt,
                    capture_output=True,
                    text=True,
                    check=True,
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                raise AnalysisError(f"'{self.command[0]}' is not installed or not in PATH.")
            except subprocess.TimeoutExpired:
                raise AnalysisError(f"'{' '.join(self.command)}' timed out after {self.timeout}s.")
            except subprocess.CalledProcessError as e:
                raise AnalysisError(
                    f"'{' '.join(self.command)}' failed with exit code {e.returncode}\n"
                    f"{(e.stderr or '').strip()}"
                )
        finally:
            if os.path.exists(diff_path):
                os.unlink(diff_path)

        return self._build_result(result.stdout)
