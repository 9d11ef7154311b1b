"""Tests for the version command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from archctl.cli import cli
from archctl.infrastructure.feeds import load_workspace


@pytest.mark.usefixtures("_isolated_workspace")
class TestVersionCommands:
    def test_fork_saves_workspace(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "version", "fork"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "arr-0001"
        doc = load_workspace(tmp_path / "arrangements.yaml")
        assert doc.active == "arr-0001"
        assert [a.id for a in doc.arrangements][-1] == "arr-0001"

    def test_fork_twice_across_invocations(self, cli_runner: CliRunner) -> None:
        first = cli_runner.invoke(cli, ["-q", "version", "fork"])
        second = cli_runner.invoke(cli, ["-q", "version", "fork", "arr-cloud"])
        assert first.output.strip() == "arr-0001"
        assert second.output.strip() == "arr-0002"

    def test_toggle(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "version", "toggle", "cloud_backup_DR", "-a", "arr-legacy"]
        )
        data = json.loads(result.output)
        assert data["data"]["action"] == "added"
        show = cli_runner.invoke(cli, ["--json", "query", "show", "arr-legacy"])
        services = [s["id"] for s in json.loads(show.output)["data"]["services"]]
        assert "cloud_backup_DR" in services

    def test_hypothesis(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["version", "hypothesis", "Hybrid keeps compliance local."])
        show = cli_runner.invoke(cli, ["--json", "query", "show"])
        hypothesis = json.loads(show.output)["data"]["container"]["hypothesis"]
        assert hypothesis == "Hybrid keeps compliance local."

    def test_cycle(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["version", "cycle", "human_consistency_review", "--arrangement", "arr-cloud"]
        )
        assert result.exit_code == 0, result.output
        assert "UNCERTAIN" in result.output

    def test_activate(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["version", "activate", "arr-cloud"])
        result = cli_runner.invoke(cli, ["--json", "query", "list"])
        assert json.loads(result.output)["data"]["active_id"] == "arr-cloud"

    def test_stale_id_warns_without_writing(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["version", "activate", "ghost"])
        assert result.exit_code == 0
        assert "WARNING" in result.output
        assert not (tmp_path / "arrangements.yaml").exists()

    def test_malformed_workspace(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "arrangements.yaml").write_text("arrangements: []\n")
        result = cli_runner.invoke(cli, ["version", "fork"])
        assert result.exit_code == 1
        assert "no arrangements" in result.output

    def test_same_hypothesis_does_not_rewrite(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["version", "hypothesis", "Hybrid keeps compliance local."])
        path = tmp_path / "arrangements.yaml"
        path.write_text(path.read_text() + "# hand edit\n")
        result = cli_runner.invoke(
            cli, ["--json", "version", "hypothesis", "Hybrid keeps compliance local."]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["changed"] is False
        assert path.read_text().endswith("# hand edit\n")

    def test_save_failure_exits_with_error(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail(src: object, dst: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("archctl.infrastructure.feeds.os.replace", _fail)
        result = cli_runner.invoke(cli, ["version", "fork"])
        assert result.exit_code == 1
        assert "cannot write workspace" in result.output
        assert not (tmp_path / "arrangements.yaml").exists()
        assert not (tmp_path / ".arrangements.yaml.tmp").exists()
