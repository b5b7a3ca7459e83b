"""Tests for tracer.cache module."""

import hashlib
import json

from tracer.analysis import AnalysisResult, validate_analysis_json
from tracer.cache import (
    clear_analysis_cache,
    compute_analysis_key,
    get_analysis_file,
    get_cache_dir,
    get_diff_index_file,
    load_cached_analysis,
    read_diff_index,
    save_analysis_cache,
)


class TestComputeAnalysisKey:
    """Tests for compute_analysis_key function."""

    def test_matches_versioned_sha1(self):
        """Test the key hashes version, model and diff together."""
        expected = hashlib.sha1(b"v2:claude:+x\n").hexdigest()
        assert compute_analysis_key("+x\n", "claude") == expected

    def test_model_changes_key(self):
        """Test different models never share a key."""
        assert compute_analysis_key("+x", "claude") != compute_analysis_key("+x", "codex")

    def test_version_changes_key(self):
        """Test a schema bump changes every key."""
        assert compute_analysis_key("+x", "claude", "v2") != compute_analysis_key("+x", "claude", "v3")

    def test_deterministic(self):
        """Test identical inputs give identical keys."""
        assert compute_analysis_key("diff", "openai") == compute_analysis_key("diff", "openai")


class TestCachePaths:
    """Tests for cache path helpers."""

    def test_layout(self, temp_dir):
        """Test analyses and the index live under the cache root."""
        assert get_cache_dir(temp_dir) == temp_dir
        assert get_analysis_file("abc", temp_dir) == temp_dir / "analysis" / "abc.json"
        assert get_diff_index_file(temp_dir) == temp_dir / "diffs.json"
        assert (temp_dir / "analysis").is_dir()

    def test_default_root(self, config_dir):
        """Test the default root is the global config directory."""
        assert get_cache_dir() == config_dir
        assert config_dir.exists()


class TestAnalysisCache:
    """Tests for saving and loading cached analyses."""

    def test_save_then_load(self, temp_dir, sample_analysis_dict):
        """Test a saved analysis is returned for the same repo, commit and key."""
        analysis = validate_analysis_json(sample_analysis_dict, "claude")

        save_analysis_cache("/repo", "abc1234", "key1", analysis, root=temp_dir)
        loaded = load_cached_analysis("/repo", "abc1234", "key1", root=temp_dir)

        assert loaded == analysis
        assert read_diff_index(temp_dir) == {"/repo": {"abc1234": "key1"}}

    def test_index_uses_aliases_on_disk(self, temp_dir, sample_analysis_dict):
        """Test cached files keep the lineStart/lineEnd field names."""
        analysis = validate_analysis_json(sample_analysis_dict, "claude")

        save_analysis_cache("/repo", "abc1234", "key1", analysis, root=temp_dir)

        stored = json.loads(get_analysis_file("key1", temp_dir).read_text())
        assert "lineStart" in stored["hunks"][0]

    def test_miss_on_different_key(self, temp_dir):
        """Test a changed diff misses the cache."""
        save_analysis_cache("/repo", "abc1234", "key1", AnalysisResult(), root=temp_dir)

        assert load_cached_analysis("/repo", "abc1234", "key2", root=temp_dir) is None

    def test_miss_on_unknown_commit(self, temp_dir):
        """Test other commits and repos miss the cache."""
        save_analysis_cache("/repo", "abc1234", "key1", AnalysisResult(), root=temp_dir)

        assert load_cached_analysis("/repo", "fff0000", "key1", root=temp_dir) is None
        assert load_cached_analysis("/other", "abc1234", "key1", root=temp_dir) is None

    def test_miss_on_old_version(self, temp_dir):
        """Test entries written by an older schema are ignored."""
        save_analysis_cache("/repo", "abc1234", "key1", AnalysisResult(version="v1"), root=temp_dir)

        assert load_cached_analysis("/repo", "abc1234", "key1", root=temp_dir) is None

    def test_corrupt_file(self, temp_dir):
        """Test unreadable entries are treated as misses."""
        save_analysis_cache("/repo", "abc1234", "key1", AnalysisResult(), root=temp_dir)
        get_analysis_file("key1", temp_dir).write_text("{not json")

        assert load_cached_analysis("/repo", "abc1234", "key1", root=temp_dir) is None

    def test_corrupt_index(self, temp_dir):
        """Test a corrupt index reads as empty."""
        get_diff_index_file(temp_dir).write_text("[broken")

        assert read_diff_index(temp_dir) == {}

    def test_multiple_commits(self, temp_dir):
        """Test one repo can index several commits."""
        save_analysis_cache("/repo", "aaa", "k1", AnalysisResult(), root=temp_dir)
        save_analysis_cache("/repo", "bbb", "k2", AnalysisResult(), root=temp_dir)

        assert read_diff_index(temp_dir) == {"/repo": {"aaa": "k1", "bbb": "k2"}}


class TestClearAnalysisCache:
    """Tests for clear_analysis_cache function."""

    def test_clears_everything(self, temp_dir):
        """Test all analyses and the index are removed."""
        save_analysis_cache("/repo", "aaa", "k1", AnalysisResult(), root=temp_dir)
        save_analysis_cache("/repo", "bbb", "k2", AnalysisResult(), root=temp_dir)

        assert clear_analysis_cache(temp_dir) == 2
        assert not get_diff_index_file(temp_dir).exists()
        assert load_cached_analysis("/repo", "aaa", "k1", root=temp_dir) is None

    def test_empty_cache(self, temp_dir):
        """Test clearing an empty cache removes nothing."""
        assert clear_analysis_cache(temp_dir) == 0
