"""Terminal diff review tool with AI-ordered hunks."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("tracer")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
