"""Coverage profile aggregation."""

from covsweep.testing.coverage.merge import (
    count_data_lines,
    drain_profiles,
    merge_profiles,
    mode_line,
    strip_mode_lines,
    write_report,
)

__all__ = [
    "count_data_lines",
    "drain_profiles",
    "merge_profiles",
    "mode_line",
    "strip_mode_lines",
    "write_report",
]
