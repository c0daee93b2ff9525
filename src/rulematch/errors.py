"""Error hierarchy for the rulematch package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "RuleMatchError",
    "ConfigNotFoundError",
    "ConfigError",
    "RuleSetError",
    "PatternCompileError",
    "SerializationError",
    "FileOperationError",
    "ErrorCodes",
]


class RuleMatchError(Exception):
    """Base error for all rulematch errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(RuleMatchError):
    """Raised when a configuration file or scan root cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(RuleMatchError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class RuleSetError(RuleMatchError):
    """Raised when a precedence rule set is malformed."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="RULE_SET_ERROR", message=message, **kwargs)


class PatternCompileError(RuleMatchError):
    """Raised when the regex engine cannot build a matcher for an escaped pattern.

    Every pattern is valid input, so this signals an engine limitation
    rather than a caller mistake.
    """

    def __init__(self, pattern: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="PATTERN_COMPILE_ERROR",
            message=f"Internal error compiling pattern {pattern!r}: {reason}",
            details={"pattern": pattern, "reason": reason},
            **kwargs,
        )

    @property
    def pattern(self) -> str:
        """The normalized pattern that failed to compile."""
        return self.details["pattern"]


class SerializationError(RuleMatchError):
    """Raised when an object cannot be canonically stringified."""

    def __init__(self, type_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="SERIALIZATION_ERROR",
            message=f"Cannot canonicalize value of type '{type_name}'",
            details={"type_name": type_name},
            **kwargs,
        )


class FileOperationError(RuleMatchError):
    """Raised when a file helper cannot complete its operation."""

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="FILE_OPERATION_ERROR",
            message=f"{reason}: {path}",
            details={"path": path, "reason": reason},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The path the operation failed on."""
        return self.details["path"]


class ErrorCodes:
    """All rulematch error codes as constants.

    Example:
        if error.code == ErrorCodes.PATTERN_COMPILE_ERROR:
            report_engine_bug()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    RULE_SET_ERROR = "RULE_SET_ERROR"
    PATTERN_COMPILE_ERROR = "PATTERN_COMPILE_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    FILE_OPERATION_ERROR = "FILE_OPERATION_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
