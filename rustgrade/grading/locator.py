# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exercise discovery.

Walks an exercises tree and decides which files get graded. Two policies,
picked by the project shape of the whole run:

  - standalone: every `.rs` file is an exercise unless its name starts
    with one of the reserved support prefixes (test_, helper_).
  - managed: only the files on the allow-list carry tests; everything
    else in the cargo project is library code.

Discovery is best effort. A directory we can't list or an entry we can't
stat is skipped, never fatal. Files come back in the order the walk meets
them, which depends on the filesystem, so callers must not rely on any
particular ordering.
"""

from collections.abc import Iterator
from pathlib import Path

from rustgrade.config.schema import GraderConfig
from rustgrade.grading.models import ProjectShape
from rustgrade.logging.logger import get_logger

logger = get_logger(__name__)


def _walk_files(directory: Path, skip_dirname: str) -> Iterator[Path]:
    """Yield regular files under directory, pruning every `skip_dirname` subtree."""
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.debug(
            "Skipping unreadable directory",
            extra={"path": str(directory), "error": str(exc)},
        )
        return

    for entry in entries:
        try:
            if entry.is_symlink() and entry.is_dir():
                continue
            if entry.is_dir():
                if entry.name == skip_dirname:
                    continue
                yield from _walk_files(entry, skip_dirname)
            elif entry.is_file():
                yield entry
        except OSError as exc:
            logger.debug(
                "Skipping unreadable entry",
                extra={"path": str(entry), "error": str(exc)},
            )


def is_exercise_file(path: Path, shape: ProjectShape, settings: GraderConfig) -> bool:
    """Apply the shape's inclusion policy to a single file name."""
    if path.suffix != settings.exercise_extension:
        return False

    name = path.name
    if shape is ProjectShape.MANAGED:
        return name in settings.managed_allowlist
    return not name.startswith(tuple(settings.excluded_prefixes))


def find_exercise_files(
    exercises_root: Path,
    shape: ProjectShape,
    settings: GraderConfig,
) -> list[Path]:
    """
    Find every gradable exercise under exercises_root.

    The build output directory is matched by exact segment name below the
    root, so a `target/` anywhere in the tree is skipped along with
    everything in it, while a directory like `targets/` is walked normally.
    The root itself is walked even when one of its own segments matches.
    """
    if not exercises_root.is_dir():
        logger.warning(
            "Exercises root is not a directory, nothing to discover",
            extra={"path": str(exercises_root)},
        )
        return []

    exercise_files = [
        path
        for path in _walk_files(exercises_root, settings.build_output_dirname)
        if is_exercise_file(path, shape, settings)
    ]

    logger.debug(
        "Exercise discovery finished",
        extra={
            "root": str(exercises_root),
            "shape": shape.value,
            "found": len(exercise_files),
        },
    )

    return exercise_files
