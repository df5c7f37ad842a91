"""Configuration constants.

Values here are part of the coverage profile contract or the go toolchain's
command line and are not user-configurable. For configurable values see
models.py (SweepConfig).
"""

# =============================================================================
# Coverage Profile Format
# =============================================================================

COVER_MODES: tuple[str, ...] = ("set", "count", "atomic")
"""Statement counting strategies accepted by `go test -covermode`."""

MODE_LINE_PREFIX = "mode: "
"""Prefix of the mode-declaration line heading every coverage profile."""

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_COVER_MODE = "count"

DEFAULT_GO_BINARY = "go"

DEFAULT_TEST_FILE_PATTERN = "*_test.go"
"""fnmatch pattern identifying test sources in a directory."""

DEFAULT_PROFILE_FILENAME = "profile.coverprofile"
"""Per-directory profile written by each test run, left on disk afterwards."""

DEFAULT_OUTPUT_FILENAME = "covsweep.coverprofile"
"""Merged profile written at the project root."""

REPO_CONFIG_FILENAME = ".covsweep.yaml"
"""Per-project YAML config, read from the project root."""

ENV_PREFIX = "COVSWEEP__"
