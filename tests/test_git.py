"""Tests for tracer.git package."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tracer.git import (
    GitError,
    NoChangesError,
    _run_git_command,
    build_diff_args,
    get_commit_key,
    get_diff,
    get_path_diff,
    get_repo_root,
    resolve_short_commit,
)


class TestRunGitCommand:
    """Tests for _run_git_command function."""

    def test_returns_stdout(self, mocker):
        """Test stdout is returned stripped."""
        mock_run = mocker.patch(
            "tracer.git.runner.subprocess.run",
            return_value=MagicMock(returncode=0, stdout="  out\n", stderr=""),
        )

        assert _run_git_command(["status"]) == "out"
        command = mock_run.call_args.args[0]
        assert command[0] == "git"
        assert command[-1] == "status"
        assert "color.ui=never" in command

    def test_keeps_whitespace(self, mocker):
        """Test strip=False keeps the raw output."""
        mocker.patch(
            "tracer.git.runner.subprocess.run",
            return_value=MagicMock(returncode=0, stdout=" out\n", stderr=""),
        )

        assert _run_git_command(["diff"], strip=False) == " out\n"

    def test_failure(self, mocker):
        """Test non-zero exit raises GitError with stderr."""
        mocker.patch(
            "tracer.git.runner.subprocess.run",
            return_value=MagicMock(returncode=128, stdout="", stderr="fatal: bad revision\n"),
        )

        with pytest.raises(GitError) as exc_info:
            _run_git_command(["show", "nope"])
        assert "fatal: bad revision" in str(exc_info.value)
        assert "git show nope" in str(exc_info.value)

    def test_failure_without_stderr(self, mocker):
        """Test the exit code is reported when git prints nothing."""
        mocker.patch(
            "tracer.git.runner.subprocess.run",
            return_value=MagicMock(returncode=2, stdout="", stderr=""),
        )

        with pytest.raises(GitError) as exc_info:
            _run_git_command(["diff"])
        assert "exit code 2" in str(exc_info.value)

    def test_accepted_exit_code(self, mocker):
        """Test listed exit codes return stdout instead of raising."""
        mocker.patch(
            "tracer.git.runner.subprocess.run",
            return_value=MagicMock(returncode=1, stdout="diff text\n", stderr=""),
        )

        assert _run_git_command(["diff", "--no-index"], strip=False, ok_codes=(0, 1)) == "diff text\n"

    def test_exit_one_fails_by_default(self, mocker):
        """Test exit code 1 is an error unless accepted."""
        mocker.patch(
            "tracer.git.runner.subprocess.run",
            return_value=MagicMock(returncode=1, stdout="", stderr="error: pathspec"),
        )

        with pytest.raises(GitError):
            _run_git_command(["add", "missing"])

    def test_git_missing(self, mocker):
        """Test a missing git binary raises GitError."""
        mocker.patch("tracer.git.runner.subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(GitError) as exc_info:
            _run_git_command(["status"])
        assert "not installed" in str(exc_info.value)


class TestRepoHelpers:
    """Tests for get_repo_root and resolve_short_commit."""

    def test_repo_root(self, mocker):
        """Test the repository root is returned as a Path."""
        mocker.patch("tracer.git.runner._run_git_command", return_value="/work/repo")
        assert get_repo_root() == Path("/work/repo")

    def test_not_a_repo(self, mocker):
        """Test a friendly error outside a repository."""
        mocker.patch("tracer.git.runner._run_git_command", side_effect=GitError("fatal"))

        with pytest.raises(GitError) as exc_info:
            get_repo_root()
        assert "Not in a git repository" in str(exc_info.value)

    def test_resolve_short_commit(self, mocker):
        """Test refs resolve to short shas."""
        mocker.patch("tracer.git.runner._run_git_command", return_value="abc1234")
        assert resolve_short_commit("HEAD") == "abc1234"

    def test_resolve_unknown_ref(self, mocker):
        """Test unknown refs resolve to None."""
        mocker.patch("tracer.git.runner._run_git_command", side_effect=GitError("bad"))
        assert resolve_short_commit("nope") is None


class TestBuildDiffArgs:
    """Tests for build_diff_args function."""

    def test_working_tree(self):
        """Test the default source is the working tree."""
        assert build_diff_args() == ["diff", "--no-prefix"]

    def test_staged(self):
        """Test staged changes use --cached."""
        assert build_diff_args(staged=True) == ["diff", "--cached", "--no-prefix"]

    def test_commit(self):
        """Test commits are shown with git show."""
        assert build_diff_args(commit="HEAD~1") == ["show", "HEAD~1", "--no-prefix"]


class TestGetDiff:
    """Tests for get_diff function."""

    def test_working_tree_marks_untracked(self, mocker):
        """Test untracked files are added with intent-to-add first."""
        mock_git = mocker.patch("tracer.git.diff._run_git_command", side_effect=["", "diff text\n"])

        assert get_diff() == "diff text\n"
        assert mock_git.call_args_list[0].args[0] == ["add", "-N", "."]
        assert mock_git.call_args_list[1].args[0] == ["diff", "--no-prefix"]

    def test_staged_skips_intent_to_add(self, mocker):
        """Test staged reviews do not touch the index."""
        mock_git = mocker.patch("tracer.git.diff._run_git_command", return_value="diff text\n")

        get_diff(staged=True)

        mock_git.assert_called_once_with(["diff", "--cached", "--no-prefix"], strip=False)

    def test_empty_diff(self, mocker):
        """Test an empty diff raises NoChangesError."""
        mocker.patch("tracer.git.diff._run_git_command", return_value="  \n")

        with pytest.raises(NoChangesError):
            get_diff(commit="abc")

    def test_no_changes_is_git_error(self):
        """Test NoChangesError can be handled as GitError."""
        assert issubclass(NoChangesError, GitError)


class TestGetCommitKey:
    """Tests for get_commit_key function."""

    def test_explicit_commit(self, mocker):
        """Test an explicit commit is resolved."""
        mock_resolve = mocker.patch("tracer.git.diff.resolve_short_commit", return_value="abc1234")

        assert get_commit_key("feature") == "abc1234"
        mock_resolve.assert_called_once_with("feature")

    def test_falls_back_to_head(self, mocker):
        """Test HEAD is used without a commit or when it does not resolve."""
        mock_resolve = mocker.patch("tracer.git.diff.resolve_short_commit", side_effect=[None, "def5678"])

        assert get_commit_key("missing") == "def5678"
        assert mock_resolve.call_args.args[0] == "HEAD"

    def test_no_commits(self, mocker):
        """Test a repository without commits has no key."""
        mocker.patch("tracer.git.diff.resolve_short_commit", return_value=None)
        assert get_commit_key() is None


class TestGetPathDiff:
    """Tests for get_path_diff function."""

    def test_runs_no_index_diff(self, mocker):
        """Test both paths are diffed outside the index, accepting exit code 1."""
        mock_git = mocker.patch("tracer.git.diff._run_git_command", return_value="diff text\n")

        assert get_path_diff("/tmp/old.py", "src/new.py") == "diff text\n"
        mock_git.assert_called_once_with(
            ["diff", "--no-ext-diff", "--no-index", "--no-prefix", "--", "/tmp/old.py", "src/new.py"],
            strip=False,
            ok_codes=(0, 1),
        )
