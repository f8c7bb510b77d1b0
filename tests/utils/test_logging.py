# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON on stderr, stdout stays clean
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly and can be changed after creation
  - extra context fields get merged into the JSON
"""

import json
import logging
from pathlib import Path

import pytest

from rustgrade.logging.logger import configure_package_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_loggers() -> None:
    """Drop handlers from test loggers so each test starts clean."""
    yield  # type: ignore[misc]
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("rustgrade.test"):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                handler.close()
            logger.handlers.clear()


class TestJsonOutput:
    def test_output_is_json_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("rustgrade.test.json", log_level="INFO")
        logger.info("hello")
        captured = capsys.readouterr()

        assert captured.out == ""
        parsed = json.loads(captured.err.strip())
        assert isinstance(parsed, dict)

    def test_mandatory_fields_are_present(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("rustgrade.test.fields", log_level="INFO")
        logger.info("test message")
        parsed = json.loads(capsys.readouterr().err.strip())

        assert parsed["level"] == "INFO"
        assert parsed["module"] == "rustgrade.test.fields"
        assert parsed["msg"] == "test message"
        assert "ts" in parsed

    def test_extra_fields_are_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("rustgrade.test.extra", log_level="DEBUG")
        logger.info("graded", extra={"exercise": "a.rs", "elapsed_seconds": 2})
        parsed = json.loads(capsys.readouterr().err.strip())

        assert parsed["exercise"] == "a.rs"
        assert parsed["elapsed_seconds"] == 2


class TestLogLevelFiltering:
    def test_debug_hidden_at_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("rustgrade.test.level_filter", log_level="INFO")
        logger.debug("this should not appear")
        assert capsys.readouterr().err.strip() == ""

    def test_level_can_be_raised_later(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("rustgrade.test.relevel", log_level="WARNING")
        logger.info("hidden")
        get_logger("rustgrade.test.relevel", log_level="DEBUG")
        logger.info("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err
        assert len(logger.handlers) == 1

    def test_configure_package_logging_reaches_existing_loggers(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("rustgrade.test.package")
        configure_package_logging("DEBUG")
        logger.debug("now visible")
        configure_package_logging("WARNING")

        assert "now visible" in capsys.readouterr().err


class TestFileOutput:
    def test_logs_are_written_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "grade.log"
        logger = get_logger("rustgrade.test.file_output", log_level="INFO", log_file=log_file)
        logger.info("file log test")

        parsed = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert parsed["msg"] == "file log test"


class TestInvalidLogLevel:
    def test_invalid_level_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("rustgrade.test.invalid", log_level="LOUD")
