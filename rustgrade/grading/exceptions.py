# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hard errors for the grading pipeline.

A hard error means grading itself couldn't happen: the exercise has no
usable name, the build directory can't be created, or the OS refused to
launch the toolchain. These abort the run. A toolchain that starts and
exits non-zero is a graded failure and never shows up here.
"""


class GradingError(Exception):
    """Base for every condition that aborts grading."""


class ExerciseNameError(GradingError):
    """Raised when an exercise path has no file name to grade it under."""


class BuildDirectoryError(GradingError):
    """Raised when the build output directory can't be created."""


class ToolchainLaunchError(GradingError):
    """Raised when rustc or cargo can't be started at all."""
