"""File filtering applied before diffs reach the engine.

Contains:
- DEFAULT_IGNORED_FILES: Lock files and other generated files never shown
- should_ignore_file: Check a path against ignore rules
- filter_files: Drop ignored and oversized files
- sort_by_size: Order files by changed line count
"""

import fnmatch
from pathlib import PurePosixPath
from typing import Optional, Sequence

from tracer.config import DEFAULT_MAX_FILE_LINES
from tracer.engine.models import FileDiff


# Auto-generated dependency lock files; reviewing them is noise
DEFAULT_IGNORED_FILES = [
    # JavaScript/Node.js
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "npm-shrinkwrap.json",
    "deno.lock",
    # Python
    "Pipfile.lock",
    "poetry.lock",
    "pdm.lock",
    "uv.lock",
    # Other languages
    "Cargo.lock",  # Rust
    "Gemfile.lock",  # Ruby
    "composer.lock",  # PHP
    "go.sum",  # Go
    "Package.resolved",  # Swift
    "Podfile.lock",  # iOS CocoaPods
    "Cartfile.resolved",  # iOS Carthage
    "pubspec.lock",  # Dart/Flutter
    "packages.lock.json",  # .NET
    "mix.lock",  # Elixir
    ".terraform.lock.hcl",  # Terraform
    "gradle.lockfile",  # Java/Gradle
    "Manifest.toml",  # Julia
    "renv.lock",  # R
    "shard.lock",  # Crystal
    "flake.lock",  # Nix
    "conan.lock",  # C++ Conan
    "vcpkg-lock.json",  # C++ vcpkg
]


def should_ignore_file(filename: str, patterns: Optional[Sequence[str]] = None) -> bool:
    """Check if a file should be hidden from review.

    Supports glob patterns like *.min.js, build/*, etc.

    Args:
        filename: The file path to check.
        patterns: Extra user patterns matched against path and basename.

    Returns:
        True if the file should be excluded.
    """
    basename = PurePosixPath(filename).name
    if basename in DEFAULT_IGNORED_FILES or basename.endswith(".lock"):
        return True
    for pattern in patterns or []:
        if filename == pattern:
            return True
        if fnmatch.fnmatch(filename, pattern):
            return True
        if fnmatch.fnmatch(basename, pattern):
            return True
    return False


def filter_files(
    files: Sequence[FileDiff],
    patterns: Optional[Sequence[str]] = None,
    max_file_lines: int = DEFAULT_MAX_FILE_LINES,
) -> list[FileDiff]:
    """Drop unnamed, ignored and oversized files.

    Args:
        files: Parsed file diffs.
        patterns: Extra ignore patterns from configuration.
        max_file_lines: Files with more hunk lines than this are dropped.

    Returns:
        The files that should be reviewed, in input order.
    """
    kept = []
    for file_diff in files:
        name = file_diff.name
        if not name or should_ignore_file(name, patterns):
            continue
        if file_diff.total_lines > max_file_lines:
            continue
        kept.append(file_diff)
    return kept


def sort_by_size(files: Sequence[FileDiff]) -> list[FileDiff]:
    """Order files from the smallest to the largest change (stable)."""
    return sorted(files, key=lambda f: f.total_lines)
