"""Config module exports."""

from covsweep.config.loader import load_config, resolve_project
from covsweep.config.models import (
    CoverMode,
    LoggingConfig,
    LogOutputConfig,
    SweepConfig,
)

__all__ = [
    "load_config",
    "resolve_project",
    "CoverMode",
    "LoggingConfig",
    "LogOutputConfig",
    "SweepConfig",
]
