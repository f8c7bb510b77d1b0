# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Grade report writer.

The report is a single JSON document at a well-known path, overwritten on
every successful run:

    {
      "exercises": [{"name": "variables1.rs", "result": true}, ...],
      "statistics": {
        "total_exercations": 2,
        "total_succeeds": 1,
        "total_failures": 1,
        "total_time": 3
      }
    }

The key names, including the misspelled "total_exercations", are what
existing rustlings tooling reads, so they're kept exactly as they are.
"""

import json
from pathlib import Path
from typing import Any

from rustgrade.grading.models import ExerciseResult, GradeResult, Statistics
from rustgrade.logging.logger import get_logger
from rustgrade.utils.filesystem import atomic_write

logger = get_logger(__name__)


def report_to_dict(result: GradeResult) -> dict[str, Any]:
    """Turn a GradeResult into the report's JSON shape."""
    stats = result.statistics
    return {
        "exercises": [
            {"name": exercise.name, "result": exercise.result}
            for exercise in result.exercises
        ],
        "statistics": {
            "total_exercations": stats.total_exercises,
            "total_succeeds": stats.total_succeeds,
            "total_failures": stats.total_failures,
            "total_time": stats.total_time,
        },
    }


def report_from_dict(data: dict[str, Any]) -> GradeResult:
    """
    Rebuild a GradeResult from the report's JSON shape.

    Raises:
        ValueError: If the document doesn't have the expected keys.
    """
    try:
        exercises = tuple(
            ExerciseResult(name=str(entry["name"]), result=bool(entry["result"]))
            for entry in data["exercises"]
        )
        stats = data["statistics"]
        statistics = Statistics(
            total_exercises=int(stats["total_exercations"]),
            total_succeeds=int(stats["total_succeeds"]),
            total_failures=int(stats["total_failures"]),
            total_time=int(stats["total_time"]),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed grade report: {exc}") from exc

    return GradeResult(exercises=exercises, statistics=statistics)


def write_report(result: GradeResult, report_path: Path) -> Path:
    """
    Write the grade report to disk, replacing any previous run's report.

    The write is atomic, so an interrupted run leaves the old report
    intact rather than a truncated one.
    """
    atomic_write(
        report_path,
        json.dumps(report_to_dict(result), indent=2, ensure_ascii=False) + "\n",
    )

    logger.info(
        "Grade report written",
        extra={
            "path": str(report_path),
            "total": result.statistics.total_exercises,
        },
    )

    return report_path


def load_report(report_path: Path) -> GradeResult:
    """Read a previously written grade report back in."""
    data = json.loads(report_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Grade report must be a JSON object: {report_path}")
    return report_from_dict(data)


def format_pass_rate(statistics: Statistics) -> str:
    """Pass rate as a percentage with two decimals; 0.00% when nothing was graded."""
    return f"{statistics.pass_rate:.2f}%"

