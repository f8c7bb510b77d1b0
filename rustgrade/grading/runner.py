# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Grade a single exercise.

For each exercise the runner:
  1. Works out its name (the file name) and announces it
  2. Makes sure the build output directory exists
  3. Compiles it, using the protocol for the run's project shape
  4. Stops right there if compilation failed
  5. Runs the tests and records the binary pass/fail verdict

Standalone protocol:
    rustc <file> --test -o target/debug/<stem>   then   target/debug/<stem>

Managed protocol (the cargo project two levels above the file):
    cargo test --no-run --manifest-path <root>/Cargo.toml   then
    cargo test --manifest-path <root>/Cargo.toml

Elapsed time always counts from step 1, so a compile failure still
reports how long the compiler took.

A failed compile or a failing test is an ordinary result. Only the
conditions in rustgrade.grading.exceptions are raised.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rustgrade.config.schema import GraderConfig
from rustgrade.grading.exceptions import BuildDirectoryError, ExerciseNameError
from rustgrade.grading.models import CommandResult, ExerciseOutcome, ProjectShape
from rustgrade.grading.toolchain import CommandRunner, run_command
from rustgrade.logging.logger import get_logger
from rustgrade.reporting.console import Reporter
from rustgrade.utils.filesystem import ensure_directory

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Invocation:
    """One toolchain step: what to run and where to run it."""

    args: tuple[str, ...]
    cwd: Optional[Path] = None


@dataclass(frozen=True)
class BuildPlan:
    """The compile step and the run step for one exercise."""

    compile: _Invocation
    run: _Invocation


def exercise_name(exercise_path: Path) -> str:
    """The identifier an exercise is reported under: its file name."""
    name = exercise_path.name
    if not name or name in (".", ".."):
        raise ExerciseNameError(f"Cannot determine exercise name from path: {exercise_path}")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ExerciseNameError(f"Exercise file name is not valid UTF-8: {exercise_path!r}") from exc
    return name


def plan_standalone(exercise_path: Path, settings: GraderConfig) -> BuildPlan:
    """rustc builds a test binary named after the exercise, then we run it."""
    artifact = (Path(settings.build_directory) / exercise_path.stem).absolute()
    return BuildPlan(
        compile=_Invocation(
            args=(settings.compiler, str(exercise_path), "--test", "-o", str(artifact)),
        ),
        run=_Invocation(args=(str(artifact),)),
    )


def plan_managed(exercise_path: Path, settings: GraderConfig) -> BuildPlan:
    """cargo compiles the project's tests without running them, then runs them."""
    project_root = exercise_path.absolute().parent.parent
    manifest = str(project_root / settings.manifest_name)
    return BuildPlan(
        compile=_Invocation(
            args=(settings.build_tool, "test", "--no-run", "--manifest-path", manifest),
            cwd=project_root,
        ),
        run=_Invocation(
            args=(settings.build_tool, "test", "--manifest-path", manifest),
            cwd=project_root,
        ),
    )


def build_plan(exercise_path: Path, shape: ProjectShape, settings: GraderConfig) -> BuildPlan:
    if shape is ProjectShape.MANAGED:
        return plan_managed(exercise_path, settings)
    return plan_standalone(exercise_path, settings)


def _ensure_build_directory(settings: GraderConfig) -> None:
    build_dir = Path(settings.build_directory)
    try:
        ensure_directory(build_dir)
    except OSError as exc:
        raise BuildDirectoryError(
            f"Failed to create build directory {build_dir}: {exc}"
        ) from exc


def _invoke(
    command_runner: CommandRunner,
    step: _Invocation,
    timeout_seconds: Optional[int],
) -> CommandResult:
    return command_runner(step.args, cwd=step.cwd, timeout_seconds=timeout_seconds)


def grade_exercise(
    exercise_path: Path,
    shape: ProjectShape,
    settings: GraderConfig,
    reporter: Reporter,
    verbose: bool = False,
    command_runner: CommandRunner = run_command,
) -> ExerciseOutcome:
    """
    Compile and test one exercise under the given project shape.

    Captured toolchain output is shown when verbose is on or when the
    exercise failed. A compile failure shows the compiler's output and
    skips the run step entirely.

    Raises:
        ExerciseNameError: The path has no usable file name.
        BuildDirectoryError: The build output directory can't be created.
        ToolchainLaunchError: rustc, cargo or the test binary couldn't be started.
    """
    start = time.monotonic()

    name = exercise_name(exercise_path)
    reporter.exercise_started(name)

    _ensure_build_directory(settings)
    plan = build_plan(exercise_path, shape, settings)

    compile_result = _invoke(command_runner, plan.compile, settings.compile_timeout_seconds)
    if not compile_result.success:
        reporter.captured_output(compile_result.stdout, compile_result.stderr)
        reporter.compile_failed(name)
        elapsed = int(time.monotonic() - start)
        logger.debug(
            "Exercise failed to compile",
            extra={
                "exercise": name,
                "shape": shape.value,
                "exit_code": compile_result.exit_code,
                "timed_out": compile_result.timed_out,
                "elapsed_seconds": elapsed,
            },
        )
        return ExerciseOutcome(name=name, success=False, elapsed_seconds=elapsed)

    run_result = _invoke(command_runner, plan.run, settings.run_timeout_seconds)
    success = run_result.success

    if verbose or not success:
        reporter.captured_output(run_result.stdout, run_result.stderr)
    reporter.exercise_finished(name, success)

    elapsed = int(time.monotonic() - start)
    logger.debug(
        "Exercise graded",
        extra={
            "exercise": name,
            "shape": shape.value,
            "success": success,
            "exit_code": run_result.exit_code,
            "timed_out": run_result.timed_out,
            "elapsed_seconds": elapsed,
        },
    )

    return ExerciseOutcome(name=name, success=success, elapsed_seconds=elapsed)
