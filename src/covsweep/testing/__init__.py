"""Coverage sweep module - walk, dispatch, merge."""

from covsweep.testing.models import SweepProgress, SweepResult, TestDirectory
from covsweep.testing.ops import run_sweep, sweep

__all__ = [
    "run_sweep",
    "sweep",
    "SweepProgress",
    "SweepResult",
    "TestDirectory",
]
