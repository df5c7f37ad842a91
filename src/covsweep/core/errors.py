"""covsweep error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Walk
- 7xxx: Test run
- 8xxx: Report
- 9xxx: Internal
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Walk (3xxx)
    WALK_UNREADABLE = 3001

    # Test run (7xxx)
    RUN_SPAWN_FAILED = 7001
    RUN_COMMAND_FAILED = 7002
    RUN_ARTIFACT_UNREADABLE = 7003
    RUN_TIMEOUT = 7004
    RUN_SWEEP_FAILED = 7005

    # Report (8xxx)
    REPORT_WRITE_FAILED = 8001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CovsweepError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'RUN_COMMAND_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovsweepError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class WalkError(CovsweepError):
    """Project tree traversal errors. Always fatal."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "WalkError":
        return cls(
            code=ErrorCode.WALK_UNREADABLE,
            message=f"Could not walk project path '{path}': {reason}",
            details={"path": path, "reason": reason},
        )


class RunError(CovsweepError):
    """Errors from running the test command in a directory."""

    @classmethod
    def spawn_failed(cls, directory: str, command: Sequence[str], reason: str) -> "RunError":
        return cls(
            code=ErrorCode.RUN_SPAWN_FAILED,
            message=f"Unable to start test command in '{directory}': {reason}",
            details={"directory": directory, "command": list(command), "reason": reason},
        )

    @classmethod
    def command_failed(
        cls, directory: str, command: Sequence[str], exit_code: int
    ) -> "RunError":
        return cls(
            code=ErrorCode.RUN_COMMAND_FAILED,
            message=f"Test command in '{directory}' exited with code {exit_code}",
            details={"directory": directory, "command": list(command), "exit_code": exit_code},
        )

    @classmethod
    def artifact_unreadable(cls, directory: str, path: str, reason: str) -> "RunError":
        return cls(
            code=ErrorCode.RUN_ARTIFACT_UNREADABLE,
            message=f"Could not read coverage profile for '{directory}' at {path}: {reason}",
            details={"directory": directory, "path": path, "reason": reason},
        )

    @classmethod
    def timeout(cls, directory: str, command: Sequence[str], timeout_sec: float) -> "RunError":
        return cls(
            code=ErrorCode.RUN_TIMEOUT,
            message=f"Test command in '{directory}' timed out after {timeout_sec} seconds",
            details={"directory": directory, "command": list(command), "timeout_sec": timeout_sec},
        )

    @classmethod
    def sweep_failed(cls, errors: Sequence[CovsweepError]) -> "RunError":
        directories = [e.details.get("directory", "?") for e in errors]
        return cls(
            code=ErrorCode.RUN_SWEEP_FAILED,
            message=f"{len(errors)} test directories failed: {', '.join(directories)}",
            details={"failures": [e.to_dict() for e in errors]},
        )


class ReportError(CovsweepError):
    """Merged report errors."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_WRITE_FAILED,
            message=f'Error writing "{path}": {reason}',
            details={"path": path, "reason": reason},
        )


class InternalError(CovsweepError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
