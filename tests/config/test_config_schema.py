# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

import pytest
from pydantic import ValidationError

from rustgrade.config.schema import GlobalConfig, GraderConfig, RustGradeConfig


class TestGlobalConfig:
    def test_log_level_is_normalized(self) -> None:
        assert GlobalConfig(config_version="1.0.0", log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("level", ["verbose", "", "TRACE"])
    def test_unknown_log_level_rejected(self, level: str) -> None:
        with pytest.raises(ValidationError, match="log_level"):
            GlobalConfig(config_version="1.0.0", log_level=level)


class TestGraderConfig:
    def test_defaults(self) -> None:
        grader = GraderConfig()
        assert grader.compiler == "rustc"
        assert grader.build_tool == "cargo"
        assert grader.manifest_name == "Cargo.toml"
        assert grader.build_output_dirname == "target"

    def test_extension_needs_leading_dot(self) -> None:
        with pytest.raises(ValidationError):
            GraderConfig(exercise_extension="rs")

    def test_empty_allowlist_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GraderConfig(managed_allowlist=())

    def test_empty_marker_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GraderConfig(managed_marker="")

    def test_build_directory_must_be_under_skipped_dir(self) -> None:
        with pytest.raises(ValidationError, match="must live under"):
            GraderConfig(build_directory="bin/debug")

    def test_build_directory_under_custom_dirname(self) -> None:
        grader = GraderConfig(build_output_dirname="_build", build_directory="_build/tests")
        assert grader.build_directory == "_build/tests"

    @pytest.mark.parametrize("timeout", [0, -1, 3601])
    def test_timeout_bounds(self, timeout: int) -> None:
        with pytest.raises(ValidationError):
            GraderConfig(compile_timeout_seconds=timeout)


class TestRustGradeConfig:
    def test_default(self) -> None:
        config = RustGradeConfig.default()
        assert config.global_config.config_version == "1.0.0"
        assert config.grader == GraderConfig()

    def test_global_section_required(self) -> None:
        with pytest.raises(ValidationError):
            RustGradeConfig.model_validate({"grader": {}})
