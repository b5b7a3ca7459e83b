"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from tracer.engine import ClassifiedSegment, FileDiff, Hunk


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point ~/.tracer at a temporary directory."""
    mock_dir = temp_dir / ".tracer"
    mocker.patch("tracer.global_config._CONFIG_DIR", mock_dir)
    return mock_dir


@pytest.fixture
def sample_diff():
    """Sample 'git diff --no-prefix' output with three files."""
    return """diff --git src/app.py src/app.py
index 1234567..89abcde 100644
--- src/app.py
+++ src/app.py
@@ -1,4 +1,4 @@
 import os
-value = compute(1)
+value = compute(2)
 print(value)
 done()
@@ -10,2 +10,3 @@
 def helper():
+    return None
     pass
diff --git docs/new.md docs/new.md
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ docs/new.md
@@ -0,0 +1,2 @@
+# Title
+Body
diff --git poetry.lock poetry.lock
index 1111111..2222222 100644
--- poetry.lock
+++ poetry.lock
@@ -1 +1 @@
-a
+b
"""


@pytest.fixture
def make_hunk():
    """Factory for hunks built from raw marked lines."""

    def _make(raw_lines, old_start=1, new_start=1):
        old_lines = sum(1 for raw in raw_lines if not raw.startswith("+"))
        new_lines = sum(1 for raw in raw_lines if not raw.startswith("-"))
        return Hunk.from_raw_lines(old_start, old_lines, new_start, new_lines, raw_lines)

    return _make


@pytest.fixture
def make_segment():
    """Factory for classified segments."""

    def _make(line_start, line_end, file="src/app.py", **kwargs):
        return ClassifiedSegment(file=file, lineStart=line_start, lineEnd=line_end, **kwargs)

    return _make


@pytest.fixture
def sample_file(make_hunk):
    """A small updated file with two hunks."""
    return FileDiff(
        old_name="src/app.py",
        new_name="src/app.py",
        hunks=(
            make_hunk([" import os", "-value = 1", "+value = 2", " print(value)"]),
            make_hunk([" def helper():", "+    return None", "     pass"], old_start=10, new_start=10),
        ),
    )


@pytest.fixture
def sample_analysis_dict():
    """Sample analysis JSON as returned by a model."""
    return {
        "files": [
            {"file": "src/app.py", "classification": "feature", "risk": "medium", "summary": "Adds helper"},
        ],
        "hunks": [
            {
                "file": "src/app.py",
                "lineStart": 11,
                "lineEnd": 11,
                "classification": "feature",
                "risk": "low",
                "description": "Return None from helper",
            },
            {
                "file": "src/app.py",
                "lineStart": 2,
                "lineEnd": 2,
                "classification": "fix",
                "risk": "low",
                "description": "Change value",
            },
        ],
    }
