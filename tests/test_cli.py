"""Tests for the bulkctl command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from bulkctl import __version__
from bulkctl.cli import cli

SESSION = "\n".join(
    [
        "cmd1", "cmd2", "cmd3", "cmd4", "cmd5",
        "{", "cmd1", "{", "cmd2", "{", "cmd3", "cmd4", "}", "cmd5", "}", "cmd6", "}",
        "cmd1", "cmd2",
    ]
) + "\n"  # fmt: skip


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "SIZE" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# --- Threshold validation ---


@pytest.mark.usefixtures("isolated_cwd")
class TestThresholdArgument:
    def test_missing_size_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [], input="a\n")
        assert result.exit_code != 0
        assert "Missing argument" in result.output

    @pytest.mark.parametrize("value", ["0", "-3", "three", "1.5"])
    def test_invalid_size_fails(self, cli_runner: CliRunner, value: str) -> None:
        result = cli_runner.invoke(cli, ["--", value], input="a\n")
        assert result.exit_code != 0
        assert "Invalid value" in result.output

    def test_invalid_size_writes_nothing(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        cli_runner.invoke(cli, ["0"], input="a\n")
        assert list(isolated_cwd.glob("bulk*.log")) == []


# --- Processing ---


@pytest.mark.usefixtures("isolated_cwd")
class TestProcessing:
    def test_reference_session_stdout(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["3", "--no-file"], input=SESSION)
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == [
            "bulk: cmd1, cmd2, cmd3",
            "bulk: cmd4, cmd5",
            "bulk: cmd1, cmd2, cmd3, cmd4, cmd5, cmd6",
            "bulk: cmd1, cmd2",
        ]

    def test_writes_log_files(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        result = cli_runner.invoke(cli, ["2", "--no-console"], input="a\nb\nc\n")
        assert result.exit_code == 0
        assert result.stdout == ""
        contents = sorted(p.read_text() for p in isolated_cwd.glob("bulk*.log"))
        lines = sorted(line for text in contents for line in text.splitlines())
        assert lines == ["a, b", "c"]

    def test_log_dir_option(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        result = cli_runner.invoke(
            cli, ["5", "--no-console", "--log-dir", "out"], input="x\ny\n"
        )
        assert result.exit_code == 0
        files = list((isolated_cwd / "out").glob("bulk*.log"))
        assert len(files) == 1
        assert files[0].read_text() == "x, y\n"

    def test_input_file_option(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        (isolated_cwd / "cmds.txt").write_text("p\nq\n")
        result = cli_runner.invoke(cli, ["1", "--no-file", "-i", "cmds.txt"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["bulk: p", "bulk: q"]

    def test_missing_input_file_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["1", "--no-file", "-i", "missing.txt"])
        assert result.exit_code == 1
        assert "INPUT_ERROR" not in result.stdout
        assert "Cannot read input" in result.stderr

    def test_undecodable_stdin_passes_through(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        result = cli_runner.invoke(cli, ["2"], input=b"a\nb\n\xff\xfe\n")
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"bulk: a, b\nbulk: \xff\xfe\n"
        lines = sorted(
            line for p in isolated_cwd.glob("bulk*.log") for line in p.read_bytes().splitlines()
        )
        assert lines == [b"a, b", b"\xff\xfe"]

    def test_undecodable_input_file_passes_through(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        (isolated_cwd / "in.txt").write_bytes(b"a\nb\n\xff\xfe\n")
        result = cli_runner.invoke(cli, ["2", "--no-file", "-i", "in.txt"])
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"bulk: a, b\nbulk: \xff\xfe\n"
        assert result.stderr == ""

    def test_empty_input_succeeds(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        result = cli_runner.invoke(cli, ["3"], input="")
        assert result.exit_code == 0
        assert result.stdout == ""
        assert list(isolated_cwd.glob("bulk*.log")) == []

    def test_config_markers(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        (isolated_cwd / "bulkctl.toml").write_text(
            '[markers]\nopen = "BEGIN"\nclose = "END"\n[file]\nenabled = false\n'
        )
        result = cli_runner.invoke(cli, ["10"], input="a\nBEGIN\nb\nc\nEND\n")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["bulk: a", "bulk: b, c"]

    def test_bad_config_fails(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        (isolated_cwd / "bulkctl.toml").write_text('[markers]\nopen = "x"\nclose = "x"\n')
        result = cli_runner.invoke(cli, ["3"], input="a\n")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stderr


# --- Reporting ---


@pytest.mark.usefixtures("isolated_cwd")
class TestReporting:
    def test_unterminated_block_warns_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["3", "--no-file"], input="a\n{\nb\n")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["bulk: a"]
        assert "WARNING: Input ended inside an open block" in result.stderr

    def test_stats_summary_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["2", "--no-file", "--stats"], input="a\nb\nc\n")
        assert result.exit_code == 0
        assert "OK: run" in result.stderr
        assert "bulks: 2" in result.stderr
        assert "OK: run" not in result.stdout

    def test_stats_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["2", "--no-file", "--stats", "--json"], input="a\nb\n"
        )
        assert result.exit_code == 0
        assert result.stdout == "bulk: a, b\n"
        payload = json.loads(result.stderr)
        assert payload["data"]["bulks"] == 1
        assert payload["data"]["threshold"] == 2
