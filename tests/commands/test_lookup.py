"""Tests for the lookup command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from namectl.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestLookupCommand:
    def test_found(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["compile"]).exit_code == 0
        result = cli_runner.invoke(cli, ["lookup", "google"])
        assert result.exit_code == 0, result.output
        assert "google.com." in result.output

    def test_quiet_prints_target(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["compile"])
        result = cli_runner.invoke(cli, ["-q", "lookup", "bbc"])
        assert result.output.strip() == "bbc.co.uk."

    def test_json(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["compile"])
        result = cli_runner.invoke(cli, ["--json", "lookup", "ve"])
        data = json.loads(result.output)
        assert data["data"]["flags"] == ["root", "embargoed"]

    def test_not_found(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["compile"])
        result = cli_runner.invoke(cli, ["lookup", "nosuchname"])
        assert result.exit_code == 1
        assert "not reserved" in result.output

    def test_without_database(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["lookup", "google"])
        assert result.exit_code == 1
        assert "not found" in result.output
