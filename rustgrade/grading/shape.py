# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Project shape resolution.

A grading run works on exactly one shape. It's resolved once, from the
root the user pointed us at (or the single file for grade-single), and
then passed to both the locator and the runner so they can't disagree
about how a file should be treated.
"""

from pathlib import Path

from rustgrade.grading.models import ProjectShape


def resolve_project_shape(path: Path, marker: str) -> ProjectShape:
    """
    Classify a path as a cargo-managed project or standalone files.

    The marker is matched as a plain substring anywhere in the path as
    given, so `exercises/ml_project/src` and `ml_project_v2/` both count.
    """
    if marker and marker in str(path):
        return ProjectShape.MANAGED
    return ProjectShape.STANDALONE
