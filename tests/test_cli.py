"""Tests for the command-line interface."""

import json
import logging
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from repodiffmatch import __version__
from repodiffmatch.cli import cli
from repodiffmatch.core.errors import ListingError, ListingFailure
from repodiffmatch.core.results import ComparisonReport, ComparisonStats
from repodiffmatch.github.client import RepositoryInfo


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("repodiffmatch").handlers.clear()


def sample_report(truncated=False):
    report = ComparisonReport(
        repository_a="alice/app",
        repository_b="bob/app",
        stats=ComparisonStats(truncated_a=truncated)
    )
    report.add("src/a.py", "lib/a.py", 1.0)
    report.add("src/b.py", "lib/b.py", 0.85)
    report.finalize()
    return report


class TestCompareCommand:
    """Test the compare command."""

    def test_text_output(self, runner):
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.compare_repositories", return_value=sample_report()) as mock_compare:
            result = runner.invoke(cli, ["compare", "alice/app", "bob/app", "--no-progress"])

        assert result.exit_code == 0, result.output
        assert "Similarity Report" in result.output
        assert "85.0% similarity" in result.output
        assert "Identical files (skipped): 1" in result.output
        assert "Analysis complete" in result.output
        assert mock_compare.call_args[1]["show_progress"] is False

    def test_json_output(self, runner):
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.compare_repositories", return_value=sample_report()):
            result = runner.invoke(cli, ["compare", "alice/app", "bob/app", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["metadata"]["tool"] == "repodiffmatch"
        assert data["summary"]["similar_count"] == 1
        assert data["identical_pairs"] == [{"file_a": "src/a.py", "file_b": "lib/a.py"}]
        assert data["similar_pairs"][0]["percentage"] == 85.0

    def test_options_override_config(self, runner):
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.compare_repositories", return_value=sample_report()) as mock_compare:
            result = runner.invoke(cli, [
                "compare", "alice/app", "bob/app",
                "--branch", "develop", "--max-files", "7", "--batch-size", "3", "--no-progress",
            ])

        assert result.exit_code == 0, result.output
        config = mock_compare.call_args[1]["config"]
        assert config.get("github.branch") == "develop"
        assert config.get("comparison.max_files") == 7
        assert config.get("comparison.batch_size") == 3

    def test_config_file_option(self, runner):
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.compare_repositories", return_value=sample_report()) as mock_compare:
            with open("custom.yml", "w") as f:
                f.write("comparison:\n  max_file_chars: 1234\n")
            result = runner.invoke(cli, ["compare", "alice/app", "bob/app", "-c", "custom.yml", "--no-progress"])

        assert result.exit_code == 0, result.output
        assert mock_compare.call_args[1]["config"].get("comparison.max_file_chars") == 1234

    def test_truncation_warning(self, runner):
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.compare_repositories", return_value=sample_report(truncated=True)):
            result = runner.invoke(cli, ["compare", "alice/app", "bob/app", "--no-progress"])

        assert result.exit_code == 0, result.output
        assert "Large repositories detected" in result.output

    def test_listing_error_exits_nonzero(self, runner):
        error = ListingError("bob/app", ListingFailure.NOT_FOUND, status=404, cause="Not Found")
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.compare_repositories", side_effect=error):
            result = runner.invoke(cli, ["compare", "alice/app", "bob/app", "--no-progress"])

        assert result.exit_code == 1
        assert "Repository Not Found" in result.output

    def test_invalid_repository_exits_nonzero(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["compare", "alice", "bob/app", "--no-progress"])

        assert result.exit_code == 1
        assert "Invalid Repository Format" in result.output

    def test_invalid_max_files(self, runner):
        result = runner.invoke(cli, ["compare", "alice/app", "bob/app", "--max-files", "0"])
        assert result.exit_code == 2


class TestCheckCommand:
    """Test the check command."""

    def test_existing_repository(self, runner):
        client = Mock()
        client.validate_repository.return_value = RepositoryInfo(
            exists=True, full_name="alice/app", default_branch="main"
        )
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.GitHubClient") as mock_client_cls:
            mock_client_cls.from_config.return_value = client
            result = runner.invoke(cli, ["check", "alice/app"])

        assert result.exit_code == 0, result.output
        assert "exists (public)" in result.output
        assert client.validate_repository.call_args[0][0].full_name == "alice/app"

    def test_missing_repository(self, runner):
        client = Mock()
        client.validate_repository.return_value = RepositoryInfo(
            exists=False, full_name="alice/gone", error="not found"
        )
        with runner.isolated_filesystem(), \
                patch("repodiffmatch.cli.GitHubClient") as mock_client_cls:
            mock_client_cls.from_config.return_value = client
            result = runner.invoke(cli, ["check", "alice/gone"])

        assert result.exit_code == 1
        assert "not found" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
