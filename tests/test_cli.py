"""Tests for CLI commands."""

from functools import partial
from pathlib import Path

import pytest
from typer.testing import CliRunner

from yadb.cli import app
from yadb.modules.buster import ScanEngine

runner = CliRunner()

TARGET = "http://target.test/"


@pytest.fixture
def patched_engine(monkeypatch: pytest.MonkeyPatch, scenario_site):
    """Route the CLI's engine to the in-process mock target."""
    engine = partial(ScanEngine, transport=scenario_site.transport)
    monkeypatch.setattr("yadb.cli.ScanEngine", engine)
    return scenario_site


class TestScanCommand:
    """Test the scan command."""

    def test_reports_findings(self, patched_engine, make_wordlist) -> None:
        wordlist = make_wordlist(["admin", "login", "images"])
        result = runner.invoke(
            app, ["scan", "-u", TARGET, "-w", str(wordlist), "-t", "2", "--no-progress"]
        )

        assert result.exit_code == 0, result.output
        assert "GET http://target.test/admin -> 301" in result.output
        assert "GET http://target.test/images -> 200" in result.output
        assert "http://target.test/login" not in result.output
        assert "Scan Summary" in result.output

    def test_recursion_and_output_file(
        self, patched_engine, make_wordlist, temp_dir: Path
    ) -> None:
        wordlist = make_wordlist(["admin", "login", "images"])
        output = temp_dir / "found.log"
        result = runner.invoke(
            app,
            [
                "scan",
                "-u",
                TARGET,
                "-w",
                str(wordlist),
                "-r",
                "1",
                "-o",
                str(output),
                "--no-progress",
            ],
        )

        assert result.exit_code == 0, result.output
        lines = output.read_text().splitlines()
        assert len(lines) == 2
        assert any(line.endswith("http://target.test/admin -> 301") for line in lines)
        assert sorted(patched_engine.requested())[:3] == [
            "/admin",
            "/admin/admin",
            "/admin/images",
        ]

    def test_missing_wordlist(self, temp_dir: Path) -> None:
        result = runner.invoke(app, ["scan", "-u", TARGET, "-w", str(temp_dir / "nope.txt")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    @pytest.mark.parametrize(
        "extra",
        [
            ["-u", "ftp://target.test/"],
            ["-u", TARGET, "-t", "0"],
            ["-u", TARGET, "-m", "DELETE"],
            ["-u", TARGET, "-s", "abc"],
            ["-u", TARGET, "--heuristic", "guess"],
        ],
    )
    def test_invalid_options_exit_with_config_error(self, extra, make_wordlist) -> None:
        wordlist = make_wordlist(["admin"])
        result = runner.invoke(app, ["scan", "-w", str(wordlist), *extra])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_malformed_env_default(
        self, monkeypatch: pytest.MonkeyPatch, make_wordlist
    ) -> None:
        monkeypatch.setenv("YADB_TIMEOUT", "soon")
        result = runner.invoke(app, ["scan", "-u", TARGET, "-w", str(make_wordlist(["a"]))])
        assert result.exit_code == 1
        assert "YADB_TIMEOUT" in result.output

    def test_unwritable_output(self, patched_engine, make_wordlist, temp_dir: Path) -> None:
        output = temp_dir / "missing" / "out.log"
        result = runner.invoke(
            app,
            ["scan", "-u", TARGET, "-w", str(make_wordlist(["a"])), "-o", str(output)],
        )
        assert result.exit_code == 1
        assert "Can't open output file" in result.output


class TestOtherCommands:
    """Test the config and version commands."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.output.startswith("yadb ")

    def test_config_show(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("YADB_THREADS", "8")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "threads=8" in result.output
        assert "method=GET" in result.output

    def test_config_show_global_missing(self) -> None:
        result = runner.invoke(app, ["config", "show", "--global"])
        assert result.exit_code == 0
        assert "No global config found" in result.output

    def test_config_unknown_action(self) -> None:
        result = runner.invoke(app, ["config", "edit"])
        assert result.exit_code == 1
