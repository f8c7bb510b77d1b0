# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Grading orchestrator.

Runs the locator, then the runner once per exercise, strictly one at a
time in discovery order, folding each outcome into the GradeResult as it
arrives. The fold has two exits:

  - an exercise failed to compile or its tests failed: record it and
    keep going
  - a GradingError was raised: stop immediately and let it propagate;
    no partial report is produced

The project shape is resolved once per call and handed to both the
locator and the runner.
"""

from pathlib import Path

from rustgrade.config.schema import GraderConfig
from rustgrade.grading.locator import find_exercise_files
from rustgrade.grading.models import GradeResult
from rustgrade.grading.runner import grade_exercise
from rustgrade.grading.shape import resolve_project_shape
from rustgrade.grading.toolchain import CommandRunner, run_command
from rustgrade.logging.logger import get_logger
from rustgrade.reporting.console import Reporter

logger = get_logger(__name__)


def grade_all(
    exercises_root: Path,
    settings: GraderConfig,
    reporter: Reporter,
    verbose: bool = False,
    command_runner: CommandRunner = run_command,
) -> GradeResult:
    """
    Grade every exercise discovered under exercises_root.

    Raises:
        GradingError: The first hard error hit; grading stops there.
    """
    shape = resolve_project_shape(exercises_root, settings.managed_marker)
    exercise_files = find_exercise_files(exercises_root, shape, settings)

    reporter.discovered(len(exercise_files))
    logger.info(
        "Grading exercises",
        extra={
            "root": str(exercises_root),
            "shape": shape.value,
            "total": len(exercise_files),
        },
    )

    result = GradeResult()
    reporter.progress_started(len(exercise_files))
    try:
        for exercise_path in exercise_files:
            reporter.progress_advanced()
            outcome = grade_exercise(
                exercise_path,
                shape,
                settings,
                reporter,
                verbose=verbose,
                command_runner=command_runner,
            )
            result = result.with_outcome(outcome)
    finally:
        reporter.progress_finished()

    return result


def grade_single(
    exercise_path: Path,
    settings: GraderConfig,
    reporter: Reporter,
    verbose: bool = False,
    command_runner: CommandRunner = run_command,
) -> GradeResult:
    """
    Grade exactly one exercise file.

    The shape comes from the file's own path, so a file inside a managed
    project is built with cargo just as it would be by grade_all.

    Raises:
        GradingError: If the exercise couldn't be graded at all.
    """
    shape = resolve_project_shape(exercise_path, settings.managed_marker)
    logger.info(
        "Grading single exercise",
        extra={"path": str(exercise_path), "shape": shape.value},
    )

    outcome = grade_exercise(
        exercise_path,
        shape,
        settings,
        reporter,
        verbose=verbose,
        command_runner=command_runner,
    )
    return GradeResult().with_outcome(outcome)
