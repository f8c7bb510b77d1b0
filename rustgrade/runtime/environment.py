# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment validation for rustgrade.

Checks the interpreter version and reports which Rust tools are on PATH.
The grader doesn't refuse to start without rustc or cargo (a run with no
exercises needs neither), but `rustgrade info` shows what's missing
before a long grading run hits it.
"""

import platform
import shutil
import subprocess
import sys
from typing import NamedTuple, Optional

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str


class ToolInfo(NamedTuple):
    """Where a toolchain executable lives and what version it reports."""

    name: str
    path: Optional[str]
    version: Optional[str]

    @property
    def available(self) -> bool:
        return self.path is not None


def get_python_version() -> tuple[int, int, int]:
    """Return the current Python version as a (major, minor, micro) tuple."""
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Verify we're running Python 3.11+.

    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor, _ = get_python_version()
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"rustgrade requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
    )


def probe_tool(name: str, timeout_seconds: int = 10) -> ToolInfo:
    """
    Look up a toolchain executable and ask it for its version.

    A tool that's missing, can't be started, or hangs on --version is
    reported with the fields it could fill in; probing never raises.
    """
    path = shutil.which(name)
    if path is None:
        return ToolInfo(name=name, path=None, version=None)

    try:
        result = subprocess.run(
            [path, "--version"],
            capture_output=True,
            text=True,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.TimeoutExpired):
        return ToolInfo(name=name, path=path, version=None)

    version = result.stdout.strip() if result.returncode == 0 else None
    return ToolInfo(name=name, path=path, version=version or None)
