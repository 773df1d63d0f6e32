"""Tests for discount CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from orderctl.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestQuoteCommand:
    def test_combined(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "discount", "quote", "--segment", "platinum", "--item", "11:1",
             "--total", "1000"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["discount_amount"] == "300.00"
        assert len(data["applied"]) == 3

    def test_remaining_base_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "orderctl.toml").write_text('[discount]\nbase = "remaining"\n')
        result = cli_runner.invoke(
            cli,
            ["-q", "discount", "quote", "--segment", "platinum", "--item", "11:1",
             "--total", "1000"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "285.00"

    def test_quote_rounds_to_configured_places(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "orderctl.toml").write_text("[orders]\ncurrency_places = 0\n")
        result = cli_runner.invoke(
            cli, ["--json", "discount", "quote", "--segment", "platinum", "--item", "1:333"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["discount_amount"] == "50"
        assert data["final_amount"] == "283"

    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["discount", "quote", "--segment", "gold", "--item", "1:200"])
        assert result.exit_code == 0
        assert "segment_tier" in result.output

    def test_bad_item(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["discount", "quote", "--item", "12"])
        assert result.exit_code == 2

    def test_bad_total(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["discount", "quote", "--item", "1:1", "--total", "x"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("_isolated_root")
class TestRulesCommand:
    def test_rules(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "discount", "rules"])
        assert result.exit_code == 0
        assert result.output.split() == ["segment_tier", "bulk_quantity", "high_value"]

    def test_rules_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["discount", "rules"])
        assert result.exit_code == 0
        assert "high_value" in result.output
