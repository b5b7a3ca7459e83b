"""Prompts for diff analysis.

Contains:
- ANALYSIS_PROMPT_TEMPLATE: Instructions and output schema
- build_analysis_prompt: Fill the template for a diff file or inline diff
"""

from typing import Optional


ANALYSIS_PROMPT_TEMPLATE = """You are reviewing a git diff. {diff_source}

Split the changes into segments a reviewer should read one at a time, and
classify each changed file.

Return ONLY valid JSON in this exact format (no markdown, no code blocks, no explanation):
{{
  "files": [
    {{
      "file": "path/to/file",
      "classification": "breaking|feature|refactor|fix|test|docs|style",
      "risk": "high|medium|low",
      "summary": "brief description"
    }}
  ],
  "hunks": [
    {{
      "file": "path/to/file",
      "lineStart": 10,
      "lineEnd": 24,
      "classification": "breaking|feature|refactor|fix|test|docs|style",
      "risk": "high|medium|low",
      "description": "what this segment changes"
    }}
  ]
}}

Segment rules:
- lineStart and lineEnd are 1-based, inclusive line numbers in the NEW version of the file.
- Every segment must lie inside one changed region of the diff.
- List segments in the order a reviewer should read them, starting with the core change.

Classification guide:
- breaking: API changes, removing features, incompatible changes
- feature: New functionality, new files with substantial logic
- refactor: Code reorganization without behavior change
- fix: Bug fixes, corrections
- test: Test file changes only
- docs: Documentation, comments, README
- style: Formatting, whitespace, linting

Risk levels:
- high: Breaking changes, core logic modifications
- medium: New features, significant refactors
- low: Tests, docs, style, minor fixes

Analyze the diff and return the JSON now."""


def build_analysis_prompt(diff_path: Optional[str] = None, diff_text: Optional[str] = None) -> str:
    """Build the analysis prompt.

    Args:
        diff_path: Path of a file holding the diff (for CLI agents that read files).
        diff_text: The diff itself, inlined into the prompt.

    Returns:
        The formatted prompt.
    """
    if diff_path is not None:
        diff_source = f"Read the diff from {diff_path}."
    else:
        diff_source = f"The diff is below.\n\n[DIFF]\n{diff_text or ''}\n[/DIFF]"
    return ANALYSIS_PROMPT_TEMPLATE.format(diff_source=diff_source)
