"""
Tests for the command-line interface.
"""
import json
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from design_auditor.cli import main
from design_auditor.config import API_KEY_VARIABLES


SUCCESS_RECORD = {
    "url": "https://example.com",
    "analysis_type": "seo",
    "viewport": "desktop",
    "ai_provider": "demo",
    "model": "demo",
    "score": 7.5,
    "summary": "Looks fine",
    "color_palette": [],
    "design_flaws": [],
    "positive_aspects": [],
    "recommendations": ["Add meta description"],
}


@pytest.fixture
def runner(monkeypatch, tmp_path):
    for name in API_KEY_VARIABLES:
        monkeypatch.setenv(name, "")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return CliRunner()


@pytest.mark.unit
class TestCli:

    @patch("design_auditor.cli.DesignAuditor")
    def test_json_output(self, mock_auditor, runner):
        mock_auditor.return_value.audit_urls = AsyncMock(return_value=[SUCCESS_RECORD])

        result = runner.invoke(main, ["https://example.com", "--category", "seo", "--output", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [SUCCESS_RECORD]
        provider, config = mock_auditor.call_args.args
        assert provider.name == "demo"
        assert config.category == "seo"
        mock_auditor.return_value.audit_urls.assert_awaited_once_with(["https://example.com"])

    @patch("design_auditor.cli.DesignAuditor")
    def test_urls_file(self, mock_auditor, runner, tmp_path):
        mock_auditor.return_value.audit_urls = AsyncMock(return_value=[SUCCESS_RECORD])
        urls_file = tmp_path / "urls.txt"
        urls_file.write_text("# sites\nhttps://a.com\n\nhttps://b.com\n", encoding="utf-8")

        result = runner.invoke(main, ["--urls-file", str(urls_file), "--output", "json"])

        assert result.exit_code == 0, result.output
        mock_auditor.return_value.audit_urls.assert_awaited_once_with(["https://a.com", "https://b.com"])

    @patch("design_auditor.cli.DesignAuditor")
    def test_rich_output(self, mock_auditor, runner):
        failed = {"url": "https://b.com", "status": "FAILED", "error": "boom", "analysis_type": "seo", "viewport": "desktop"}
        mock_auditor.return_value.audit_urls = AsyncMock(return_value=[SUCCESS_RECORD, failed])

        result = runner.invoke(main, ["https://example.com", "https://b.com"])

        assert result.exit_code == 0, result.output
        assert "FAILED" in result.stdout
        assert "Add meta description" in result.stdout

    @patch("design_auditor.cli.DesignAuditor")
    def test_rich_output_shows_bracketed_text_literally(self, mock_auditor, runner):
        succeeded = {**SUCCESS_RECORD, "summary": "Nice [/b] footer", "scores": {"seo": 8.0}}
        failed = {
            "url": "https://b.com",
            "status": "FAILED",
            "error": "score [type=less_than_equal]",
            "analysis_type": "seo",
            "viewport": "desktop",
        }
        mock_auditor.return_value.audit_urls = AsyncMock(return_value=[succeeded, failed])

        result = runner.invoke(main, ["https://example.com", "https://b.com"])

        assert result.exit_code == 0, result.output
        assert "Nice [/b] footer" in result.stdout
        assert "[type=less_than_equal]" in result.stdout
        assert "seo 8" in result.stdout
        assert "(0 records)" in result.stdout

    def test_invalid_api_key_exits_with_error(self, runner):
        result = runner.invoke(main, ["https://example.com", "--api-key", "bogus-key"])
        assert result.exit_code == 1

    def test_no_urls(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 1
