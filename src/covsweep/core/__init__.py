"""Core module exports."""

from covsweep.core.errors import (
    ConfigError,
    CovsweepError,
    ErrorCode,
    InternalError,
    ReportError,
    RunError,
    WalkError,
)
from covsweep.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from covsweep.core.progress import pluralize, status

__all__ = [
    # Errors
    "CovsweepError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ReportError",
    "RunError",
    "WalkError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "status",
]
