# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for rustgrade.

The one-time setup every command goes through before grading anything:
  1. Validate the environment (Python version)
  2. Apply the configured log level and log file to every module logger
  3. Log what we're running on
"""

from pathlib import Path
from typing import Optional

from rustgrade.config.schema import GlobalConfig
from rustgrade.logging.logger import configure_package_logging, get_logger
from rustgrade.runtime.environment import check_minimum_python, get_system_info

logger = get_logger(__name__)


def bootstrap(config: GlobalConfig, log_level_override: Optional[str] = None) -> None:
    """
    Put the process into a known state before grading.

    The --log-level flag, when given, wins over the config file.
    """
    check_minimum_python()

    log_level = log_level_override or config.log_level
    log_file = Path(config.log_file) if config.log_file is not None else None
    configure_package_logging(log_level, log_file=log_file)

    system_info = get_system_info()
    logger.debug(
        "rustgrade bootstrap complete",
        extra={
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
