# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for rustgrade.

Each config section gets its own frozen pydantic model. Frozen means once
you create it, you cannot mutate it, so the locator and the runner are
guaranteed to see the same settings for the whole run.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Every field has a default, so running without a config file is just
RustGradeConfig.default().
"""

from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GlobalConfig(BaseModel):
    """Cross-cutting settings: observability and config identity."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default="WARNING",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got '{value}'")
        return upper


class GraderConfig(BaseModel):
    """
    Everything the grading pipeline needs to find and build exercises.

    The defaults reproduce the classic rustlings layout: standalone `.rs`
    files compiled with `rustc --test` into target/debug, with a cargo
    project variant recognized by a marker in the root path.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(default="1.0.0", description="Schema version")
    exercise_extension: str = Field(
        default=".rs",
        description="Only files with this suffix are considered exercises",
    )
    excluded_prefixes: tuple[str, ...] = Field(
        default=("test_", "helper_"),
        description="Standalone files starting with these are support code, not exercises",
    )
    build_output_dirname: str = Field(
        default="target",
        description="Directory segment skipped during discovery",
    )
    build_directory: str = Field(
        default="target/debug",
        description="Where standalone test binaries are written, relative to the working directory",
    )
    report_path: str = Field(
        default="rustlings_result.json",
        description="Where the JSON grade report is written",
    )
    managed_marker: str = Field(
        default="ml_project",
        min_length=1,
        description="Substring of the root path that marks a cargo-managed project",
    )
    managed_allowlist: tuple[str, ...] = Field(
        default=("model.rs", "ops.rs"),
        min_length=1,
        description="File names that carry tests in a cargo-managed project",
    )
    manifest_name: str = Field(default="Cargo.toml", description="Cargo manifest file name")
    compiler: str = Field(default="rustc", description="Single-file compiler executable")
    build_tool: str = Field(default="cargo", description="Project build tool executable")
    compile_timeout_seconds: Optional[int] = Field(
        default=None,
        ge=1,
        le=3600,
        description="Max seconds for the compile step; None waits indefinitely",
    )
    run_timeout_seconds: Optional[int] = Field(
        default=None,
        ge=1,
        le=3600,
        description="Max seconds for the test run step; None waits indefinitely",
    )

    @field_validator("exercise_extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"exercise_extension must look like '.rs', got '{value}'")
        return value

    @model_validator(mode="after")
    def _build_directory_is_skipped(self) -> "GraderConfig":
        # The locator must never rediscover binaries the runner writes.
        parts = PurePosixPath(self.build_directory).parts
        if not parts or parts[0] != self.build_output_dirname:
            raise ValueError(
                f"build_directory '{self.build_directory}' must live under "
                f"'{self.build_output_dirname}/'"
            )
        return self


class RustGradeConfig(BaseModel):
    """
    Top-level config container.

    A YAML file needs at least a `global:` section. The `grader:` section
    is optional; when it's missing every grader default applies.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    grader: GraderConfig = Field(default_factory=GraderConfig)

    @classmethod
    def default(cls) -> "RustGradeConfig":
        """The config used when no file is given on the command line."""
        return cls.model_validate({"global": {"config_version": "1.0.0"}})
