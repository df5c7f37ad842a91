"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides a stand-in `go` executable so sweeps run without a Go toolchain.
"""

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local covsweep package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of covsweep modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("covsweep"):
        del sys.modules[module_name]


# Behaves like `go test -coverprofile=... -outputdir=DIR PKG`. Marker files in
# DIR change the outcome: FAIL exits 2, NOPROFILE writes nothing, SLEEP hangs,
# MODE overrides the mode line written to the profile.
FAKE_GO_SOURCE = '''
import sys
import time
from pathlib import Path

args = sys.argv[1:]
opts = {}
for arg in args:
    if arg.startswith("-") and "=" in arg:
        key, _, value = arg.partition("=")
        opts[key] = value

package = args[-1]
outdir = Path(opts["-outputdir"])
(outdir / "ARGS").write_text("\\n".join(args))

if (outdir / "SLEEP").exists():
    time.sleep(60)

print(f"=== RUN   Test{package}")
print(f"ok  \\t{package}\\t0.001s")

if (outdir / "FAIL").exists():
    print(f"FAIL\\t{package}", file=sys.stderr)
    sys.exit(2)

if not (outdir / "NOPROFILE").exists():
    mode_file = outdir / "MODE"
    mode = mode_file.read_text().strip() if mode_file.exists() else opts["-covermode"]
    (outdir / opts["-coverprofile"]).write_text(
        f"mode: {mode}\\n"
        f"{package}/cover.go:1.1,2.2 1 1\\n"
        f"{package}/cover.go:3.1,4.2 2 0\\n"
    )
'''


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to a test's captured streams once it finishes."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()


@pytest.fixture
def fake_go(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Executable standing in for the go binary."""
    script = tmp_path_factory.mktemp("bin") / "go"
    script.write_text(f"#!{sys.executable}\n{FAKE_GO_SOURCE}")
    script.chmod(0o755)
    return script


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Build a project tree under tmp_path/project from relative file paths.

    Paths ending in "/" create empty directories.
    """

    def _make(paths: list[str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel in paths:
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("package x\n")
        return root

    return _make
