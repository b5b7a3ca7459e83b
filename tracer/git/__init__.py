"""Git integration for tracer.

This package provides:
- exceptions: GitError, NoChangesError
- runner: get_repo_root, resolve_short_commit
- diff: build_diff_args, get_diff, get_commit_key, get_path_diff
"""

from tracer.git.exceptions import GitError, NoChangesError
from tracer.git.runner import _run_git_command, get_repo_root, resolve_short_commit
from tracer.git.diff import build_diff_args, get_commit_key, get_diff, get_path_diff


__all__ = [
    "GitError",
    "NoChangesError",
    "_run_git_command",
    "get_repo_root",
    "resolve_short_commit",
    "build_diff_args",
    "get_commit_key",
    "get_diff",
    "get_path_diff",
]
