# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for rustgrade.

Every operation is a subcommand of `rustgrade`. The global options
(--config, --log-level) are inherited by every subcommand through
argparse's parent parser mechanism.

Usage:
    rustgrade grade --path exercises/ --verbose
    rustgrade grade-single --file exercises/variables/variables1.rs
    rustgrade info
"""

import argparse
import sys
from typing import Optional

from rustgrade.cli.commands import handle_grade, handle_grade_single, handle_info
from rustgrade.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    We use a separate parent parser (with add_help=False) so that help text
    doesn't collide between the parent and the subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config file).",
    )
    return parent


def _add_grading_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show toolchain output for every exercise, not just failing ones.",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Where to write the JSON grade report (defaults to the configured report_path).",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """
    Register all subcommands with their handler functions.

    Each subcommand sets its handler via set_defaults(func=...), so
    `rustgrade grade` populates args.func with handle_grade.
    """
    grade_parser = subparsers.add_parser(
        "grade", parents=[parent], help="Grade every exercise under a directory.",
    )
    grade_parser.add_argument(
        "-p",
        "--path",
        type=str,
        default=".",
        help="Exercises directory to grade.",
    )
    _add_grading_options(grade_parser)
    grade_parser.set_defaults(func=handle_grade)

    single_parser = subparsers.add_parser(
        "grade-single", parents=[parent], help="Grade a single exercise file.",
    )
    single_parser.add_argument(
        "-f",
        "--file",
        type=str,
        required=True,
        help="Exercise file to grade.",
    )
    _add_grading_options(single_parser)
    single_parser.set_defaults(func=handle_grade_single)

    info_parser = subparsers.add_parser(
        "info", parents=[parent], help="Show toolchain availability and settings.",
    )
    info_parser.set_defaults(func=handle_info)


def build_parser() -> argparse.ArgumentParser:
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="rustgrade",
        description="rustgrade: local grading tool for rustlings exercises.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)
    return root_parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    root_parser = build_parser()
    args = root_parser.parse_args(argv)

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
