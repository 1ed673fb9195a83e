"""Tests for the compile command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from namectl.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestCompileCommand:
    def test_human_output(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["compile"])
        assert result.exit_code == 0, result.output
        assert "OK" in result.output
        assert "collision" in result.output
        assert (workspace_root / "build" / "names.db").is_file()

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "compile"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "compile"
        assert data["data"]["names"] == 22

    def test_dry_run(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["compile", "--dry-run"])
        assert result.exit_code == 0
        assert "dry run" in result.output
        assert not (workspace_root / "build").exists()

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "compile"])
        assert result.exit_code == 0
        assert result.output.strip() == "OK: compile"

    def test_verbose_shows_spans(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "compile", "--dry-run"])
        assert result.exit_code == 0
        assert "CompileService.compile" in result.output
        assert "resolve" in result.output

    def test_failure_exit_code(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        (workspace_root / "names" / "rtld.json").unlink()
        result = cli_runner.invoke(cli, ["compile"])
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "Missing corpus file" in result.output
