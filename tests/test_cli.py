"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from s3_mcp import __version__
from s3_mcp.cli import cli
from s3_mcp.cli import main as cli_main
from s3_mcp.storage import LLMStorageTools, S3Resource


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_tools(monkeypatch, fake_client):
    """Route CLI tool calls to the fake client."""

    def build_tools(settings):
        return LLMStorageTools(S3Resource(fake_client, settings.to_access_config()))

    monkeypatch.setattr(cli_main, "build_tools", build_tools)
    monkeypatch.delenv("S3_BUCKETS", raising=False)
    monkeypatch.delenv("S3_MAX_BUCKETS", raising=False)
    return fake_client


class TestCLI:
    """Tests for the s3-mcp command."""

    def test_version(self, runner):
        """Test --version output."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_environment(self, runner):
        """Test that --help documents the environment variables."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "S3_BUCKETS" in result.output
        assert "AWS_SECRET_ACCESS_KEY" in result.output

    def test_tools_command(self, runner, fake_tools):
        """Test printing the tool schemas."""
        result = runner.invoke(cli, ["tools"])

        assert result.exit_code == 0
        names = [schema["name"] for schema in json.loads(result.stdout)]
        assert names == ["list-buckets", "list-objects", "get-object"]

    def test_get_command(self, runner, fake_tools):
        """Test a successful one-shot get-object call."""
        fake_tools.put_object("reports", "hello.txt", b"hello from storage", "text/plain")

        result = runner.invoke(cli, ["get", "reports", "hello.txt"])
        assert result.exit_code == 0
        assert "hello from storage" in result.output

    def test_get_command_prints_brackets_verbatim(self, runner, fake_tools):
        """Test that object text with markup-like brackets is printed as is."""
        fake_tools.put_object("reports", "notes.md", b"see list[/i] here", "text/markdown")

        result = runner.invoke(cli, ["get", "reports", "notes.md"])
        assert result.exit_code == 0
        assert "see list[/i] here" in result.output

    def test_get_command_error_with_brackets(self, runner, fake_tools):
        """Test that error messages containing brackets are printed as is."""
        result = runner.invoke(cli, ["get", "reports", "a[/x].txt"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "a[/x].txt" in result.output

    def test_get_command_error_exit_code(self, runner, fake_tools):
        """Test that failed calls exit with status 1."""
        result = runner.invoke(cli, ["get", "reports", "missing.txt"])
        assert result.exit_code == 1

    def test_objects_command_denied(self, runner, fake_tools, tmp_path):
        """Test that a config file allow-list is honoured."""
        config = tmp_path / "config.yaml"
        config.write_text("buckets: [reports]\n")

        result = runner.invoke(cli, ["--config", str(config), "objects", "private"])
        assert result.exit_code == 1
        assert fake_tools.calls == []

    def test_invalid_configuration(self, runner, monkeypatch):
        """Test that invalid settings exit with status 1."""
        monkeypatch.setenv("S3_MAX_BUCKETS", "many")

        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 1
