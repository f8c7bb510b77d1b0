# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Toolchain process interface.

Everything the grader knows about rustc and cargo comes through
run_command: start the process, capture stdout and stderr, optionally
enforce a timeout, return the exit code. Nothing here parses compiler
output. The exit code is the whole verdict.

Two things can go wrong and they are kept apart on purpose:
  - the process starts and exits non-zero (or times out): that's a
    normal CommandResult with success == False
  - the process can't be started at all (missing executable, permission
    denied): that's a ToolchainLaunchError, and grading stops
"""

import subprocess
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Protocol

from rustgrade.grading.exceptions import ToolchainLaunchError
from rustgrade.grading.models import CommandResult
from rustgrade.logging.logger import get_logger

logger = get_logger(__name__)


class CommandRunner(Protocol):
    """Anything that can run a toolchain command the way run_command does."""

    def __call__(
        self,
        args: Sequence[str],
        cwd: Optional[Path] = None,
        timeout_seconds: Optional[int] = None,
    ) -> CommandResult: ...


def run_command(
    args: Sequence[str],
    cwd: Optional[Path] = None,
    timeout_seconds: Optional[int] = None,
) -> CommandResult:
    """
    Run one toolchain command and capture everything it prints.

    Output is decoded as UTF-8 with replacement characters for anything
    that isn't, since compiler diagnostics are only ever shown to a human.

    Raises:
        ToolchainLaunchError: If the OS couldn't start the process.
    """
    argv = [str(arg) for arg in args]
    start = time.monotonic()

    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_seconds,
            cwd=str(cwd) if cwd is not None else None,
        )

    except subprocess.TimeoutExpired as exc:
        elapsed = time.monotonic() - start
        logger.warning(
            "Toolchain command timed out",
            extra={"argv": argv, "timeout_seconds": timeout_seconds},
        )
        return CommandResult(
            exit_code=-1,
            stdout=_decode_partial(exc.stdout),
            stderr=_decode_partial(exc.stderr) + f"\nTimed out after {timeout_seconds}s",
            elapsed_seconds=elapsed,
            timed_out=True,
        )

    except OSError as exc:
        logger.error(
            "Toolchain command could not be launched",
            extra={"argv": argv, "cwd": str(cwd) if cwd else None, "error": str(exc)},
        )
        raise ToolchainLaunchError(f"Failed to launch {argv[0]}: {exc}") from exc

    elapsed = time.monotonic() - start
    logger.debug(
        "Toolchain command finished",
        extra={
            "argv": argv,
            "exit_code": result.returncode,
            "elapsed_seconds": round(elapsed, 3),
        },
    )

    return CommandResult(
        exit_code=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        elapsed_seconds=elapsed,
    )


def _decode_partial(output: object) -> str:
    """TimeoutExpired hands back whatever was captured, as bytes or str or None."""
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return str(output)
