"""Shared pytest fixtures and fake collaborators for bulkctl tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner


class RecordingSink:
    """Sink that remembers every bulk it receives."""

    def __init__(self) -> None:
        self.bulks: list[tuple[int, list[str]]] = []

    def write(self, started_at: int, commands: Sequence[str]) -> None:
        self.bulks.append((started_at, list(commands)))

    @property
    def commands(self) -> list[list[str]]:
        return [cmds for _, cmds in self.bulks]


class FailingSink:
    """Sink that raises on every write."""

    def __init__(self) -> None:
        self.calls = 0

    def write(self, started_at: int, commands: Sequence[str]) -> None:
        self.calls += 1
        msg = "sink exploded"
        raise RuntimeError(msg)


class FakeClock:
    """Deterministic clock: returns the current value, then advances by *step*."""

    def __init__(self, start: int = 1000, step: int = 1) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def recorder() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty temp directory with no config discovery leaking in."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "BULKCTL_CONFIG",
        "BULKCTL_VERBOSE",
        "BULKCTL_LOG_JSON",
        "BULKCTL_STATS",
        "BULKCTL_CONSOLE",
        "BULKCTL_FILE",
        "BULKCTL_MARKERS",
        "BULKCTL_PLUGINS",
    ):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def make_recorder() -> type[RecordingSink]:
    """Factory for extra recording sinks within one test."""
    return RecordingSink


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()
