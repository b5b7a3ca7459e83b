"""Diff source selection.

Contains:
- build_diff_args: git arguments for the selected diff source
- get_diff: Run git and return the raw diff text
- get_commit_key: Short sha identifying the reviewed state for caching
- get_path_diff: Diff two files for git difftool
"""

from typing import Optional

from tracer.git.exceptions import NoChangesError
from tracer.git.runner import _run_git_command, resolve_short_commit


def build_diff_args(staged: bool = False, commit: Optional[str] = None) -> list[str]:
    """Build the git arguments that produce the diff to review.

    Args:
        staged: Review the index instead of the working tree.
        commit: Review a single commit (git show).

    Returns:
        Arguments for git, without the leading 'git'.
    """
    if staged:
        return ["diff", "--cached", "--no-prefix"]
    if commit:
        return ["show", commit, "--no-prefix"]
    return ["diff", "--no-prefix"]


def get_diff(staged: bool = False, commit: Optional[str] = None) -> str:
    """Get the raw diff text for the selected source.

    Working tree reviews first mark untracked files with intent-to-add so
    new files show up in the diff.

    Raises:
        GitError: If a git command fails.
        NoChangesError: If the diff is empty.
    """
    if not staged and not commit:
        _run_git_command(["add", "-N", "."])

    diff = _run_git_command(build_diff_args(staged, commit), strip=False)
    if not diff.strip():
        raise NoChangesError("No changes to review.")
    return diff


def get_commit_key(commit: Optional[str] = None) -> Optional[str]:
    """Resolve the commit the reviewed diff belongs to.

    Args:
        commit: Explicit commit under review, if any.

    Returns:
        Short sha of ``commit`` when it resolves, else of HEAD, else None.
    """
    if commit:
        resolved = resolve_short_commit(commit)
        if resolved:
            return resolved
    return resolve_short_commit("HEAD")


def get_path_diff(local: str, remote: str) -> str:
    """Diff two paths outside the index, as git difftool hands them over.

    Args:
        local: Path of the old version.
        remote: Path of the new version.

    Returns:
        The raw diff text, empty when the files are identical.

    Raises:
        GitError: If git fails (exit codes other than 0 and 1).
    """
    return _run_git_command(
        ["diff", "--no-ext-diff", "--no-index", "--no-prefix", "--", local, remote],
        strip=False,
        ok_codes=(0, 1),
    )
