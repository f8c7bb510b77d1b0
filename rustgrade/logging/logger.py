# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for rustgrade.

Every log entry is a single JSON line, timestamped, leveled, and tagged
with the source module. Logs are diagnostics for whoever runs the grader
in CI, so they go to stderr. Stdout belongs to the human-facing grading
output and the two never mix.

The JSON structure looks like:
  {"ts": "2026-...", "level": "DEBUG", "module": "rustgrade.grading.runner", "msg": "compile finished", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Attributes every LogRecord carries; anything else came in through `extra`.
_STANDARD_ATTRS = frozenset({
    "name",
    "msg",
    "args",
    "created",
    "relativeCreated",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "pathname",
    "filename",
    "module",
    "levelno",
    "levelname",
    "processName",
    "process",
    "threadName",
    "thread",
    "message",
    "msecs",
    "taskName",
})


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Each entry contains:
      ts    : ISO 8601 UTC timestamp
      level : log level name
      module: the logger name (usually the Python module path)
      msg   : the formatted message string

    Fields passed through `extra=` are merged in as additional keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Every module calls this once at import time. Calling it again for the
    same name only updates the level, so the CLI can raise or lower
    verbosity after the modules have already grabbed their loggers.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stderr and the file.

    Returns:
        A configured logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream=sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def configure_package_logging(log_level: str, log_file: Optional[Path] = None) -> None:
    """
    Apply one level to every rustgrade logger created so far.

    Module loggers are created at import time with the default level; the
    CLI calls this once the config and --log-level are known.
    """
    level = _resolve_log_level(log_level)
    target = str(log_file.resolve()) if log_file is not None else None

    for name in list(logging.Logger.manager.loggerDict):
        if not (name == "rustgrade" or name.startswith("rustgrade.")):
            continue
        logger = get_logger(name, log_level=log_level)

        if target is None:
            continue
        if any(getattr(h, "baseFilename", None) == target for h in logger.handlers):
            continue
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)
