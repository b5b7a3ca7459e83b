"""Configuration constants for tracer.

User settings are loaded from ~/.tracer/config.yaml
Use 'tracer config' commands to modify settings.
"""

from enum import Enum


class AnalysisModel(Enum):
    """Backends that can classify a diff into segments."""

    CLAUDE = "claude"  # claude CLI (claude -p)
    CODEX = "codex"  # codex CLI (codex exec)
    ANTHROPIC = "anthropic"  # Anthropic API
    OPENAI = "openai"  # OpenAI API


class ViewMode(Enum):
    """Layout of diff rows."""

    SPLIT = "split"
    UNIFIED = "unified"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.tracer/config.yaml doesn't set them

DEFAULT_MODEL = AnalysisModel.CLAUDE
DEFAULT_VIEW = ViewMode.SPLIT
DEFAULT_MAX_FILE_LINES = 6000
DEFAULT_MAX_TOKENS = 4096

# Model names used by the API backends
DEFAULT_API_MODELS = {
    AnalysisModel.ANTHROPIC: "claude-sonnet-4-20250514",
    AnalysisModel.OPENAI: "gpt-4.1",
}

# Commands for the CLI backends; the prompt is written to stdin
CLI_COMMANDS = {
    AnalysisModel.CLAUDE: ["claude", "-p"],
    AnalysisModel.CODEX: ["codex", "exec"],
}

# Upper bound for a single analysis subprocess, in seconds
CLI_TIMEOUT_SECONDS = 600


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    AnalysisModel.ANTHROPIC: "ANTHROPIC_API_KEY",
    AnalysisModel.OPENAI: "OPENAI_API_KEY",
}


def parse_model(value: str) -> AnalysisModel:
    """Parse a model identifier, case-insensitively.

    Raises:
        ValueError: If the identifier is not a known backend.
    """
    return AnalysisModel(value.strip().lower())
