"""Tests for the rulematch error hierarchy."""

from __future__ import annotations

import pytest

from rulematch.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    FileOperationError,
    PatternCompileError,
    RuleMatchError,
    RuleSetError,
    SerializationError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ConfigNotFoundError(config_path="/x.yaml"), ErrorCodes.CONFIG_NOT_FOUND),
            (ConfigError("bad"), ErrorCodes.CONFIG_INVALID),
            (RuleSetError("bad"), ErrorCodes.RULE_SET_ERROR),
            (PatternCompileError(pattern="a*", reason="boom"), ErrorCodes.PATTERN_COMPILE_ERROR),
            (SerializationError(type_name="object"), ErrorCodes.SERIALIZATION_ERROR),
            (FileOperationError("/f", "failed to write file"), ErrorCodes.FILE_OPERATION_ERROR),
        ],
    )
    def test_codes(self, error: RuleMatchError, code: str) -> None:
        assert isinstance(error, RuleMatchError)
        assert error.code == code
        assert str(error).startswith(f"[{code}] ")

    def test_details_and_cause(self) -> None:
        cause = ValueError("inner")
        error = FileOperationError("/f", "failed to write file", cause=cause)
        assert error.path == "/f"
        assert error.details == {"path": "/f", "reason": "failed to write file"}
        assert error.cause is cause
        assert error.timestamp

    def test_config_not_found_message(self) -> None:
        assert str(ConfigNotFoundError(config_path="/x.yaml")) == "[CONFIG_NOT_FOUND] Configuration file not found: /x.yaml"

    def test_error_codes_immutable(self) -> None:
        with pytest.raises(AttributeError):
            ErrorCodes().CONFIG_INVALID = "changed"
