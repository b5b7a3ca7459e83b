"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
- resolve_short_commit: Resolve a ref to its abbreviated sha
"""

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from tracer.git.exceptions import GitError

# Parsed output must stay uncolored with unquoted paths
_GIT_ENV_ARGS = ["-c", "core.quotepath=off", "-c", "color.ui=never"]


def _run_git_command(
    args: list[str],
    strip: bool = True,
    ok_codes: Sequence[int] = (0,),
) -> str:
    """Run a git command and return its output.

    Some commands report results through the exit code ('git diff
    --no-index' exits 1 when the inputs differ), so callers list the codes
    that still count as success.

    Args:
        args: List of arguments to pass to git.
        strip: Strip surrounding whitespace from stdout.
        ok_codes: Exit codes treated as success.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If git is missing or exits with any other code.
    """
    try:
        result = subprocess.run(
            ["git"] + _GIT_ENV_ARGS + args,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    if result.returncode not in ok_codes:
        detail = (result.stderr or "").strip() or f"exit code {result.returncode}"
        raise GitError(f"Git command failed: git {' '.join(args)}\n{detail}")
    return result.stdout.strip() if strip else result.stdout


def get_repo_root() -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"])
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")


def resolve_short_commit(target: str) -> Optional[str]:
    """Resolve a ref to its abbreviated commit sha.

    Args:
        target: Any commit-ish (HEAD, branch, sha).

    Returns:
        The short sha, or None if the ref cannot be resolved.
    """
    try:
        return _run_git_command(["rev-parse", "--short", target]) or None
    except GitError:
        return None
