"""Directory ignore set for the project walk.

Ignore entries are tokens compared against a directory's path relative to
the project root, in POSIX form ("vendor", "internal/testdata"). Matching is
exact string equality, not glob: "vendor" prunes the top-level vendor
directory but not "pkg/vendor".
"""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_IGNORES: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        # Vendored third-party code
        "vendor",
    )
)


def parse_ignores(value: str | Iterable[str]) -> frozenset[str]:
    """Build an ignore set from a comma separated string or an iterable.

    Surrounding whitespace and trailing slashes are dropped and empty tokens
    are discarded, so ``".git, vendor/,"`` yields ``{".git", "vendor"}``.
    """
    tokens = value.split(",") if isinstance(value, str) else value
    cleaned = (token.strip().rstrip("/") for token in tokens)
    return frozenset(token for token in cleaned if token)


def is_ignored(rel_path: str, ignores: frozenset[str]) -> bool:
    """Check whether a relative directory path is a member of the ignore set."""
    return rel_path in ignores
