# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data models for the grading pipeline.

These are the types that flow between the locator, the runner, the
orchestrator and the report writer. They're frozen dataclasses because a
grade should never be edited after it's recorded. Statistics are rebuilt
from the previous value plus one outcome, never patched field by field.
"""

from dataclasses import dataclass, field
from enum import Enum


class ProjectShape(str, Enum):
    """
    How the exercises under a root are built.

    STANDALONE: every `.rs` file is its own crate, compiled with rustc.
    MANAGED: exercises are test targets inside one cargo project.
    """

    STANDALONE = "standalone-file"
    MANAGED = "managed-project"


@dataclass(frozen=True)
class CommandResult:
    """What came back from one toolchain invocation."""

    exit_code: int
    stdout: str
    stderr: str
    elapsed_seconds: float
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


@dataclass(frozen=True)
class ExerciseOutcome:
    """
    The runner's verdict for one exercise.

    elapsed_seconds is whole seconds measured from the start of the
    invocation, compile time included.
    """

    name: str
    success: bool
    elapsed_seconds: int


@dataclass(frozen=True)
class ExerciseResult:
    """One row of the persisted report."""

    name: str
    result: bool


@dataclass(frozen=True)
class Statistics:
    """
    Aggregate numbers for a grading run.

    Always derived from the exercise results it summarizes:
    total == succeeds + failures == number of results.
    """

    total_exercises: int = 0
    total_succeeds: int = 0
    total_failures: int = 0
    total_time: int = 0

    def record(self, outcome: ExerciseOutcome) -> "Statistics":
        """Return new statistics with one more outcome folded in."""
        return Statistics(
            total_exercises=self.total_exercises + 1,
            total_succeeds=self.total_succeeds + (1 if outcome.success else 0),
            total_failures=self.total_failures + (0 if outcome.success else 1),
            total_time=self.total_time + outcome.elapsed_seconds,
        )

    @property
    def pass_rate(self) -> float:
        """Percentage of exercises that passed, 0.0 when nothing was graded."""
        if self.total_exercises == 0:
            return 0.0
        return 100.0 * self.total_succeeds / self.total_exercises


@dataclass(frozen=True)
class GradeResult:
    """The root artifact of a grading run: every result plus the totals."""

    exercises: tuple[ExerciseResult, ...] = field(default_factory=tuple)
    statistics: Statistics = field(default_factory=Statistics)

    def with_outcome(self, outcome: ExerciseOutcome) -> "GradeResult":
        """Append one outcome, keeping results and statistics in step."""
        return GradeResult(
            exercises=self.exercises + (ExerciseResult(outcome.name, outcome.success),),
            statistics=self.statistics.record(outcome),
        )
