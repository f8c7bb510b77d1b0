# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the rustgrade CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. The grading pipeline does the work; these handlers load config,
wire up the console reporter, persist the report on success and map
failures onto exit codes.

The report is written only after grading finished without a hard error.
An aborted run leaves the previous report untouched.
"""

import argparse
import logging
from pathlib import Path

from rustgrade.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, VALIDATION_ERROR
from rustgrade.config.exceptions import ConfigError
from rustgrade.config.loader import load_config
from rustgrade.config.schema import RustGradeConfig
from rustgrade.grading.exceptions import GradingError
from rustgrade.grading.models import GradeResult
from rustgrade.grading.orchestrator import grade_all, grade_single
from rustgrade.logging.logger import get_logger
from rustgrade.reporting.console import ConsoleReporter
from rustgrade.reporting.writer import format_pass_rate, write_report
from rustgrade.runtime.bootstrap import bootstrap


def _make_reporter() -> ConsoleReporter:
    return ConsoleReporter()


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, RustGradeConfig | None, logging.Logger]:
    """
    The shared setup that every command needs: load config, run bootstrap.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    logger = get_logger(f"rustgrade.cli.{command_name}", log_level=args.log_level or "WARNING")

    try:
        config = load_config(Path(args.config) if args.config is not None else None)
    except ConfigError as err:
        logger.error(
            "Configuration error",
            extra={"command": command_name, "error": str(err)},
        )
        return CONFIG_ERROR, None, logger

    bootstrap(config.global_config, log_level_override=args.log_level)
    return SUCCESS, config, logger


def _resolve_report_path(args: argparse.Namespace, config: RustGradeConfig) -> Path:
    return Path(args.report if args.report is not None else config.grader.report_path)


def _finish_run(
    result: GradeResult,
    report_path: Path,
    reporter: ConsoleReporter,
    logger: logging.Logger,
) -> int:
    """Print the summary and persist the report. The last step of every successful run."""
    reporter.summary(result.statistics)

    try:
        write_report(result, report_path)
    except OSError as err:
        logger.error(
            "Could not write grade report",
            extra={"path": str(report_path), "error": str(err)},
        )
        reporter.error(f"could not write grade report to {report_path}: {err}")
        return RUNTIME_ERROR

    reporter.report_saved(report_path)
    logger.info(
        "Grading complete",
        extra={
            "total": result.statistics.total_exercises,
            "succeeds": result.statistics.total_succeeds,
            "failures": result.statistics.total_failures,
            "total_time": result.statistics.total_time,
            "pass_rate": format_pass_rate(result.statistics),
            "report": str(report_path),
        },
    )
    return SUCCESS


def handle_grade(args: argparse.Namespace) -> int:
    """Grade every exercise discovered under --path."""
    exit_code, config, logger = _load_and_bootstrap(args, "grade")
    if exit_code != SUCCESS:
        return exit_code

    reporter = _make_reporter()
    exercises_root = Path(args.path)
    reporter.run_started("Grading all rustlings exercises...")

    try:
        result = grade_all(
            exercises_root,
            config.grader,
            reporter,
            verbose=args.verbose,
        )
    except GradingError as err:
        logger.error("Grading aborted", extra={"root": str(exercises_root), "error": str(err)})
        reporter.error(str(err))
        return RUNTIME_ERROR

    return _finish_run(result, _resolve_report_path(args, config), reporter, logger)


def handle_grade_single(args: argparse.Namespace) -> int:
    """Grade the one exercise given by --file."""
    exit_code, config, logger = _load_and_bootstrap(args, "grade-single")
    if exit_code != SUCCESS:
        return exit_code

    reporter = _make_reporter()
    exercise_path = Path(args.file)
    if not exercise_path.is_file():
        logger.error("Exercise file not found", extra={"path": str(exercise_path)})
        reporter.error(f"exercise file not found: {exercise_path}")
        return VALIDATION_ERROR

    reporter.run_started("Grading a single rustlings exercise...")

    try:
        result = grade_single(
            exercise_path,
            config.grader,
            reporter,
            verbose=args.verbose,
        )
    except GradingError as err:
        logger.error("Grading aborted", extra={"path": str(exercise_path), "error": str(err)})
        reporter.error(str(err))
        return RUNTIME_ERROR

    return _finish_run(result, _resolve_report_path(args, config), reporter, logger)


def handle_info(args: argparse.Namespace) -> int:
    """Show which toolchain executables are available and the effective settings."""
    exit_code, config, logger = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    from rustgrade.runtime.environment import get_system_info, probe_tool

    reporter = _make_reporter()
    system_info = get_system_info()
    reporter.run_started(
        f"rustgrade on Python {system_info.python_version} "
        f"({system_info.platform}/{system_info.architecture})"
    )

    grader = config.grader
    for tool_name in (grader.compiler, grader.build_tool):
        tool = probe_tool(tool_name)
        reporter.toolchain(tool.name, tool.path, tool.version)
        logger.info(
            "Toolchain probe",
            extra={"tool": tool.name, "available": tool.available, "version": tool.version},
        )

    reporter.settings(grader)
    return SUCCESS
