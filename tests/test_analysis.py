"""Tests for tracer.analysis package."""

import json
import os
import subprocess
from unittest.mock import MagicMock

import pytest

from tracer.analysis import (
    AnalysisError,
    AnalysisResult,
    JSONParseError,
    MissingAPIKeyError,
    analyze_diff,
    build_analysis_prompt,
    get_analyzer,
    parse_json_response,
    validate_analysis_json,
)
from tracer.config import AnalysisModel
from tracer.engine.models import ClassificationType, RiskLevel


class TestParseJsonResponse:
    """Tests for parse_json_response function."""

    def test_plain_json(self):
        """Test parsing a bare JSON object."""
        assert parse_json_response('{"files": [], "hunks": []}') == {"files": [], "hunks": []}

    def test_code_fence(self):
        """Test markdown fences are removed."""
        raw = '```json\n{"files": [], "hunks": []}\n```'
        assert parse_json_response(raw) == {"files": [], "hunks": []}

    def test_surrounding_text(self):
        """Test text around the object is ignored."""
        raw = 'Here is the analysis:\n{"hunks": []}\nLet me know!'
        assert parse_json_response(raw) == {"hunks": []}

    def test_invalid_json(self):
        """Test unparseable responses raise JSONParseError."""
        with pytest.raises(JSONParseError) as exc_info:
            parse_json_response("not json at all")
        assert "Failed to parse" in str(exc_info.value)

    def test_non_object(self):
        """Test a JSON array is rejected."""
        with pytest.raises(JSONParseError):
            parse_json_response("[1, 2, 3]")


class TestValidateAnalysisJson:
    """Tests for validate_analysis_json function."""

    def test_valid(self, sample_analysis_dict):
        """Test a well-formed response validates."""
        result = validate_analysis_json(sample_analysis_dict, "claude")

        assert isinstance(result, AnalysisResult)
        assert result.model == "claude"
        assert result.version == "v2"
        assert result.files[0].classification is ClassificationType.FEATURE
        assert result.hunks[0].line_start == 11
        assert result.hunks[1].description == "Change value"

    def test_missing_keys(self):
        """Test absent lists default to empty."""
        result = validate_analysis_json({}, "codex")
        assert result.files == []
        assert result.hunks == []

    def test_unknown_tags_normalized(self):
        """Test unknown classification and risk fall back."""
        parsed = {
            "hunks": [
                {"file": "a.py", "lineStart": 1, "lineEnd": 2, "classification": "Chore", "risk": "extreme"},
            ]
        }

        segment = validate_analysis_json(parsed, "claude").hunks[0]

        assert segment.classification is ClassificationType.UNKNOWN
        assert segment.risk is RiskLevel.MEDIUM

    def test_case_insensitive_tags(self):
        """Test tags are matched case-insensitively."""
        parsed = {"files": [{"file": "a.py", "classification": "BREAKING", "risk": "High"}]}

        file_analysis = validate_analysis_json(parsed, "claude").files[0]

        assert file_analysis.classification is ClassificationType.BREAKING
        assert file_analysis.risk is RiskLevel.HIGH

    def test_schema_mismatch(self):
        """Test a segment without line numbers raises JSONParseError."""
        with pytest.raises(JSONParseError):
            validate_analysis_json({"hunks": [{"file": "a.py"}]}, "claude")


class TestAnalysisResult:
    """Tests for AnalysisResult model."""

    def test_for_file(self, sample_analysis_dict):
        """Test looking up a file classification."""
        result = validate_analysis_json(sample_analysis_dict, "claude")

        assert result.for_file("src/app.py").summary == "Adds helper"
        assert result.for_file("missing.py") is None

    def test_serializes_with_aliases(self, sample_analysis_dict):
        """Test cached JSON keeps lineStart/lineEnd names."""
        result = validate_analysis_json(sample_analysis_dict, "claude")

        dumped = json.loads(result.model_dump_json(by_alias=True))

        assert dumped["hunks"][0]["lineStart"] == 11
        assert AnalysisResult.model_validate(dumped) == result


class TestBuildAnalysisPrompt:
    """Tests for build_analysis_prompt function."""

    def test_with_path(self):
        """Test CLI agents are pointed at the diff file."""
        prompt = build_analysis_prompt(diff_path="/tmp/x.diff")
        assert "Read the diff from /tmp/x.diff." in prompt
        assert '"lineStart"' in prompt

    def test_with_text(self):
        """Test API backends get the diff inline."""
        prompt = build_analysis_prompt(diff_text="+hello")
        assert "[DIFF]\n+hello\n[/DIFF]" in prompt


class TestGetAnalyzer:
    """Tests for get_analyzer factory function."""

    def test_cli_backends(self):
        """Test claude and codex use the CLI analyzer."""
        from tracer.analysis.cli_backend import CLIAnalyzer

        claude = get_analyzer(AnalysisModel.CLAUDE)
        codex = get_analyzer(AnalysisModel.CODEX)

        assert isinstance(claude, CLIAnalyzer)
        assert claude.command == ["claude", "-p"]
        assert codex.command == ["codex", "exec"]

    def test_api_backends(self):
        """Test API models use their providers."""
        from tracer.analysis.anthropic_provider import AnthropicAnalyzer
        from tracer.analysis.openai_provider import OpenAIAnalyzer

        assert isinstance(get_analyzer(AnalysisModel.ANTHROPIC), AnthropicAnalyzer)
        assert isinstance(get_analyzer(AnalysisModel.OPENAI), OpenAIAnalyzer)

    def test_default(self):
        """Test the default backend is the claude CLI."""
        assert get_analyzer().model_id == "claude"

    def test_unsupported(self):
        """Test unsupported values raise ValueError."""
        with pytest.raises(ValueError) as exc_info:
            get_analyzer("invalid")
        assert "Unsupported model" in str(exc_info.value)


class TestCLIAnalyzer:
    """Tests for the agent CLI backend."""

    def test_runs_command_with_diff_file(self, mocker, sample_analysis_dict):
        """Test the prompt references a temp file holding the diff."""
        seen = {}

        def fake_run(command, input, **kwargs):
            path = input.split("Read the diff from ", 1)[1].split(".diff", 1)[0] + ".diff"
            with open(path) as f:
                seen["diff"] = f.read()
            seen["path"] = path
            seen["command"] = command
            return MagicMock(stdout=json.dumps(sample_analysis_dict))

        mocker.patch("tracer.analysis.cli_backend.subprocess.run", side_effect=fake_run)

        result = get_analyzer(AnalysisModel.CLAUDE).analyze("+hello\n")

        assert seen["command"] == ["claude", "-p"]
        assert seen["diff"] == "+hello\n"
        assert not os.path.exists(seen["path"])
        assert result.model == "claude"
        assert len(result.hunks) == 2

    def test_missing_binary(self, mocker):
        """Test a missing CLI raises AnalysisError."""
        mocker.patch("tracer.analysis.cli_backend.subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(AnalysisError) as exc_info:
            get_analyzer(AnalysisModel.CODEX).analyze("+x")
        assert "codex" in str(exc_info.value)

    def test_timeout(self, mocker):
        """Test timeouts raise AnalysisError."""
        mocker.patch(
            "tracer.analysis.cli_backend.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="claude", timeout=1),
        )

        with pytest.raises(AnalysisError) as exc_info:
            get_analyzer(AnalysisModel.CLAUDE).analyze("+x")
        assert "timed out" in str(exc_info.value)

    def test_non_zero_exit(self, mocker):
        """Test failing commands raise AnalysisError with stderr."""
        mocker.patch(
            "tracer.analysis.cli_backend.subprocess.run",
            side_effect=subprocess.CalledProcessError(2, ["claude", "-p"], stderr="boom"),
        )

        with pytest.raises(AnalysisError) as exc_info:
            get_analyzer(AnalysisModel.CLAUDE).analyze("+x")
        assert "boom" in str(exc_info.value)

    def test_bad_output(self, mocker):
        """Test unparseable output raises JSONParseError."""
        mocker.patch(
            "tracer.analysis.cli_backend.subprocess.run",
            return_value=MagicMock(stdout="I could not analyze this"),
        )

        with pytest.raises(JSONParseError):
            get_analyzer(AnalysisModel.CLAUDE).analyze("+x")


class TestAnthropicAnalyzer:
    """Tests for the Anthropic API backend."""

    def test_analyze(self, mocker, monkeypatch, sample_analysis_dict):
        """Test the response text is parsed into an analysis."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        mock_client = MagicMock()
        mock_client.messages.create.return_value.content = [MagicMock(text=json.dumps(sample_analysis_dict))]
        mock_cls = mocker.patch("tracer.analysis.anthropic_provider.Anthropic", return_value=mock_client)

        result = analyze_diff("+x", AnalysisModel.ANTHROPIC)

        mock_cls.assert_called_once_with(api_key="sk-ant-test")
        assert result.model == "anthropic"
        assert result.files[0].file == "src/app.py"

    def test_missing_key(self, mocker, monkeypatch):
        """Test a missing key raises MissingAPIKeyError."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        mocker.patch("tracer.global_config.get_credential", return_value=None)

        with pytest.raises(MissingAPIKeyError) as exc_info:
            analyze_diff("+x", AnalysisModel.ANTHROPIC)
        assert "tracer config set-key anthropic" in str(exc_info.value)

    def test_key_from_credentials(self, mocker, monkeypatch):
        """Test the credentials file is used when the env var is unset."""
        from tracer.analysis.anthropic_provider import AnthropicAnalyzer

        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        mocker.patch("tracer.global_config.get_credential", return_value="stored-key")

        assert AnthropicAnalyzer().get_api_key() == "stored-key"

    def test_api_failure(self, mocker, monkeypatch):
        """Test client errors are wrapped in AnalysisError."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        mock_client = MagicMock()
        mock_client.messages.create.side_effect = RuntimeError("overloaded")
        mocker.patch("tracer.analysis.anthropic_provider.Anthropic", return_value=mock_client)

        with pytest.raises(AnalysisError) as exc_info:
            analyze_diff("+x", AnalysisModel.ANTHROPIC)
        assert "overloaded" in str(exc_info.value)


class TestOpenAIAnalyzer:
    """Tests for the OpenAI API backend."""

    def test_analyze(self, mocker, monkeypatch, sample_analysis_dict):
        """Test the chat completion is parsed into an analysis."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        mock_client = MagicMock()
        choice = MagicMock()
        choice.message.content = json.dumps(sample_analysis_dict)
        mock_client.chat.completions.create.return_value.choices = [choice]
        mocker.patch("tracer.analysis.openai_provider.OpenAI", return_value=mock_client)

        result = analyze_diff("+x", AnalysisModel.OPENAI)

        assert result.model == "openai"
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4.1"
        assert "+x" in kwargs["messages"][0]["content"]

    def test_custom_model(self):
        """Test overriding the API model name."""
        from tracer.analysis.openai_provider import OpenAIAnalyzer

        assert OpenAIAnalyzer(model="gpt-4o").model == "gpt-4o"
