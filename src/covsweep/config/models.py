"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI flags)
2. Environment variables (COVSWEEP__KEY, COVSWEEP__SECTION__KEY)
3. Repo YAML (<project>/.covsweep.yaml)
4. Global YAML (~/.config/covsweep/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVSWEEP__<KEY>=<VALUE>

Examples:
    COVSWEEP__COVERMODE=atomic
    COVSWEEP__IGNORES=.git,vendor,testdata
    COVSWEEP__TEST_ARGS="-race -count=1"
    COVSWEEP__MAX_PARALLEL=4
    COVSWEEP__LOGGING__LEVEL=DEBUG
"""

import shlex
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from covsweep.config.constants import (
    DEFAULT_COVER_MODE,
    DEFAULT_GO_BINARY,
    DEFAULT_OUTPUT_FILENAME,
    DEFAULT_PROFILE_FILENAME,
    DEFAULT_TEST_FILE_PATTERN,
)
from covsweep.core.excludes import DEFAULT_IGNORES, parse_ignores

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CoverMode = Literal["set", "count", "atomic"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVSWEEP__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also reports pruned and skipped directories.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


def _plain_filename(field: str, v: str) -> str:
    if not v or v in (".", "..") or "/" in v or "\\" in v:
        raise ValueError(f"{field} must be a plain file name, got {v!r}")
    return v


class SweepConfig(BaseModel):
    """Immutable settings for one coverage sweep.

    Built once (see loader.load_config) and passed explicitly to the walker,
    the dispatcher and the aggregator.
    """

    model_config = ConfigDict(frozen=True)

    project_root: Path = Field(
        description="Directory tree to sweep. Must exist; stored resolved and absolute.",
    )
    covermode: CoverMode = Field(
        default=DEFAULT_COVER_MODE,
        description="Value passed to -covermode and written in the merged mode line.",
    )
    ignores: frozenset[str] = Field(
        default=DEFAULT_IGNORES,
        description="Directory paths, relative to project_root, pruned from the walk.",
    )
    test_args: tuple[str, ...] = Field(
        default=(),
        description="Extra arguments passed verbatim to `go test`, before the coverage flags.",
    )
    go_binary: str = Field(
        default=DEFAULT_GO_BINARY,
        description="Executable used to run the tests.",
    )
    test_file_pattern: str = Field(
        default=DEFAULT_TEST_FILE_PATTERN,
        description="fnmatch pattern selecting test sources.",
    )
    profile_filename: str = Field(
        default=DEFAULT_PROFILE_FILENAME,
        description="Per-directory profile name. Left on disk after the sweep.",
    )
    output_filename: str = Field(
        default=DEFAULT_OUTPUT_FILENAME,
        description="Merged profile name, written at project_root.",
    )
    import_path: str | None = Field(
        default=None,
        description="Package import path of project_root (GOPATH layouts). "
        "When unset, packages are addressed as ./<dir>.",
    )
    max_parallel: int | None = Field(
        default=None,
        ge=1,
        description="Cap on concurrently running test processes. None means one per "
        "directory, all at once.",
    )
    timeout_sec: float | None = Field(
        default=None,
        gt=0,
        description="Per-directory test timeout. None waits indefinitely.",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("project_root")
    @classmethod
    def validate_project_root(cls, v: Path) -> Path:
        path = v.expanduser()
        if not path.exists():
            raise ValueError(f"Project path does not exist: {v}")
        if not path.is_dir():
            raise ValueError(f"Project path is not a directory: {v}")
        return path.resolve()

    @field_validator("ignores", mode="before")
    @classmethod
    def validate_ignores(cls, v: Any) -> Any:
        if isinstance(v, str | Iterable):
            return parse_ignores(v)
        return v

    @field_validator("test_args", mode="before")
    @classmethod
    def validate_test_args(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(shlex.split(v))
        return v

    @field_validator("profile_filename")
    @classmethod
    def validate_profile_filename(cls, v: str) -> str:
        return _plain_filename("profile_filename", v)

    @field_validator("output_filename")
    @classmethod
    def validate_output_filename(cls, v: str) -> str:
        return _plain_filename("output_filename", v)

    @field_validator("import_path")
    @classmethod
    def validate_import_path(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip("/") or None

    @property
    def output_path(self) -> Path:
        return self.project_root / self.output_filename
