# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for rustgrade tests.

The fake toolchain and the recording reporter stand in for rustc, cargo
and the terminal, so the grading pipeline can be exercised end to end
without a Rust installation.
"""

import textwrap
from collections.abc import Sequence
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

import pytest

from rustgrade.config.schema import GraderConfig
from rustgrade.grading import runner as runner_module
from rustgrade.grading.exceptions import ToolchainLaunchError
from rustgrade.grading.models import CommandResult, Statistics


class FakeClock:
    """A monotonic clock that only moves when the fake toolchain runs."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class FakeToolchain:
    """
    Stands in for run_command.

    Each call is classified as a (phase, key) pair:
      - rustc <file> ...           -> ("compile", file stem)
      - <artifact>                 -> ("run", artifact name)
      - cargo test --no-run ...    -> ("compile", project dir name)
      - cargo test ...             -> ("run", project dir name)

    Exit codes default to 0; `exit_codes` overrides them per pair,
    `durations` advances the clock per pair, and `launch_failures` makes a
    pair raise ToolchainLaunchError the way a missing executable would.
    """

    def __init__(
        self,
        clock: FakeClock,
        exit_codes: Optional[dict[tuple[str, str], int]] = None,
        durations: Optional[dict[tuple[str, str], float]] = None,
        launch_failures: Optional[set[tuple[str, str]]] = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.clock = clock
        self.exit_codes = exit_codes or {}
        self.durations = durations or {}
        self.launch_failures = launch_failures or set()
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[tuple[tuple[str, ...], Optional[Path], Optional[int]]] = []

    @staticmethod
    def classify(args: Sequence[str], cwd: Optional[Path]) -> tuple[str, str]:
        tool = args[0]
        if tool == "rustc":
            return "compile", Path(args[1]).stem
        if tool == "cargo":
            key = Path(cwd).name if cwd is not None else ""
            return ("compile" if "--no-run" in args else "run"), key
        return "run", Path(tool).name

    def phases(self) -> list[tuple[str, str]]:
        return [self.classify(args, cwd) for args, cwd, _ in self.calls]

    def __call__(
        self,
        args: Sequence[str],
        cwd: Optional[Path] = None,
        timeout_seconds: Optional[int] = None,
    ) -> CommandResult:
        args = tuple(str(a) for a in args)
        self.calls.append((args, cwd, timeout_seconds))
        pair = self.classify(args, cwd)

        if pair in self.launch_failures:
            raise ToolchainLaunchError(f"Failed to launch {args[0]}: not found")

        duration = self.durations.get(pair, 0.0)
        self.clock.now += duration
        return CommandResult(
            exit_code=self.exit_codes.get(pair, 0),
            stdout=self.stdout,
            stderr=self.stderr,
            elapsed_seconds=duration,
        )


class RecordingReporter:
    """Reporter that keeps every event as a tuple for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def names(self) -> list[str]:
        return [event[0] for event in self.events]

    def run_started(self, description: str) -> None:
        self.events.append(("run_started", description))

    def discovered(self, count: int) -> None:
        self.events.append(("discovered", count))

    def progress_started(self, total: int) -> None:
        self.events.append(("progress_started", total))

    def progress_advanced(self) -> None:
        self.events.append(("progress_advanced",))

    def progress_finished(self) -> None:
        self.events.append(("progress_finished",))

    def exercise_started(self, name: str) -> None:
        self.events.append(("exercise_started", name))

    def captured_output(self, stdout: str, stderr: str) -> None:
        self.events.append(("captured_output", stdout, stderr))

    def compile_failed(self, name: str) -> None:
        self.events.append(("compile_failed", name))

    def exercise_finished(self, name: str, success: bool) -> None:
        self.events.append(("exercise_finished", name, success))

    def summary(self, statistics: Statistics) -> None:
        self.events.append(("summary", statistics))

    def report_saved(self, path: Path) -> None:
        self.events.append(("report_saved", path))


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside tmp_path so target/debug lands there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Replace the runner's clock with one the fake toolchain controls."""
    fake = FakeClock()
    monkeypatch.setattr(runner_module, "time", SimpleNamespace(monotonic=fake))
    return fake


@pytest.fixture()
def settings() -> GraderConfig:
    return GraderConfig()


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


def write_files(root: Path, *relative_paths: str) -> list[Path]:
    """Create empty files under root, making parent directories as needed."""
    created = []
    for rel in relative_paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("// exercise\n", encoding="utf-8")
        created.append(path)
    return created


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config file that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (missing required field)."""
    config_content = textwrap.dedent("""\
        global:
          log_level: "INFO"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def make_files():
    return write_files


@pytest.fixture()
def make_toolchain(clock: FakeClock):
    """Factory for a FakeToolchain wired to the patched clock."""

    def _make(**kwargs) -> FakeToolchain:
        return FakeToolchain(clock, **kwargs)

    return _make
