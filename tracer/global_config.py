"""Global configuration management for tracer.

Handles user-level configuration stored in ~/.tracer/:
- config.yaml: Preferred model, view mode and filter settings
- credentials: API keys for the API analysis backends
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from tracer.config import (
    DEFAULT_MAX_FILE_LINES,
    DEFAULT_MODEL,
    DEFAULT_VIEW,
    AnalysisModel,
    ViewMode,
)


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".tracer"


def get_global_config_dir() -> Path:
    """Get the global tracer directory.

    Returns:
        Path to ~/.tracer/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.tracer/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.tracer/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file.

    Returns:
        Path to ~/.tracer/credentials
    """
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.tracer/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.tracer/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _read_credentials_file(credentials_file: Path) -> Dict[str, str]:
    credentials = {}
    with open(credentials_file, "r") as f:
        for line in f:
            line = line.strip()
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse KEY=value format
            if "=" in line:
                key, value = line.split("=", 1)
                credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.tracer/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        return _read_credentials_file(credentials_file)
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(provider_key: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "ANTHROPIC_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[provider_key] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# tracer API credentials\n")
            f.write("# Format: PROVIDER_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    """Get an API key from credentials file.

    Args:
        provider_key: Environment variable name (e.g., "ANTHROPIC_API_KEY")

    Returns:
        The API key if found, None otherwise.
    """
    return load_credentials().get(provider_key)


def get_preferred_model() -> AnalysisModel:
    """Get the preferred analysis model, falling back to the default."""
    value = load_global_config().get("preferred_model")
    if not value:
        return DEFAULT_MODEL
    try:
        return AnalysisModel(str(value).lower())
    except ValueError:
        return DEFAULT_MODEL


def set_preferred_model(model: AnalysisModel) -> None:
    """Persist the preferred analysis model."""
    config = load_global_config()
    config["preferred_model"] = model.value
    save_global_config(config)


def get_view_mode() -> ViewMode:
    """Get the configured view mode, falling back to the default."""
    value = load_global_config().get("view")
    if not value:
        return DEFAULT_VIEW
    try:
        return ViewMode(str(value).lower())
    except ValueError:
        return DEFAULT_VIEW


def set_view_mode(view: ViewMode) -> None:
    """Persist the view mode."""
    config = load_global_config()
    config["view"] = view.value
    save_global_config(config)


def get_ignore_patterns() -> list:
    """Get extra ignore patterns from global config.

    Returns:
        List of glob patterns, empty if not configured.
    """
    patterns = load_global_config().get("ignore", [])
    return [str(p) for p in patterns] if isinstance(patterns, list) else []


def get_max_file_lines() -> int:
    """Get the per-file line limit above which files are hidden."""
    value = load_global_config().get("max_file_lines")
    if value is None:
        return DEFAULT_MAX_FILE_LINES
    try:
        return int(value)
    except (TypeError, ValueError):
        raise GlobalConfigError(f"max_file_lines must be an integer, got {value!r}")
