"""covsweep CLI - covsweep command."""

from __future__ import annotations

from pathlib import Path

import click

from covsweep.config.constants import COVER_MODES
from covsweep.config.loader import load_config, resolve_project
from covsweep.config.models import LoggingConfig, LogOutputConfig, SweepConfig
from covsweep.core.errors import CovsweepError
from covsweep.core.logging import configure_logging, get_log_file_path
from covsweep.core.progress import pluralize, status
from covsweep.testing.ops import sweep


def _logging_override(config: SweepConfig, debug: bool, log_file: Path | None) -> SweepConfig:
    if not debug and log_file is None:
        return config
    outputs = list(config.logging.outputs)
    if log_file is not None:
        outputs.append(LogOutputConfig(format="json", destination=str(log_file.resolve())))
    logging_config = LoggingConfig(
        level="DEBUG" if debug else config.logging.level,
        outputs=outputs,
    )
    return config.model_copy(update={"logging": logging_config})


@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(version="0.1.0", prog_name="covsweep")
@click.option(
    "--project",
    "-p",
    default=".",
    show_default=True,
    help="Project directory, or a package path under $GOPATH/src.",
)
@click.option(
    "--covermode",
    type=click.Choice(COVER_MODES),
    default=None,
    help="Mode to run when testing files. [default: count]",
)
@click.option(
    "--ignore",
    default=None,
    help="Comma separated directories to ignore, relative to the project. "
    "[default: .git,vendor]",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum test processes running at once. [default: one per directory]",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-directory test timeout in seconds. [default: none]",
)
@click.option("--go", "go_binary", default=None, help="Go executable. [default: go]")
@click.option(
    "--output",
    default=None,
    help="Merged profile file name, written in the project root. "
    "[default: covsweep.coverprofile]",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write JSON logs to this file.",
)
@click.option("-v", "--debug", is_flag=True, help="Enable debug logging")
@click.argument("test_args", nargs=-1, type=click.UNPROCESSED)
def cli(
    project: str,
    covermode: str | None,
    ignore: str | None,
    concurrency: int | None,
    timeout: float | None,
    go_binary: str | None,
    output: str | None,
    log_file: Path | None,
    debug: bool,
    test_args: tuple[str, ...],
) -> None:
    """Run `go test` with coverage in every package directory and merge the profiles.

    Recursively walks the project, runs `go test -covermode=MODE
    -coverprofile=profile.coverprofile` in each directory holding *_test.go
    files, and concatenates the results into one profile in the project root.

    TEST_ARGS after `--` are passed to `go test` unchanged, for example:

        covsweep -p . -- -race -count=1
    """
    configure_logging(level="DEBUG" if debug else "INFO")

    try:
        project_root, import_path = resolve_project(project)
        config = load_config(
            project_root,
            covermode=covermode,
            ignores=ignore,
            test_args=test_args or None,
            max_parallel=concurrency,
            timeout_sec=timeout,
            go_binary=go_binary,
            output_filename=output,
            import_path=import_path,
        )
    except CovsweepError as e:
        status(e.message, style="error")
        raise SystemExit(1) from e

    config = _logging_override(config, debug, log_file)
    configure_logging(config=config.logging)

    status(f"Sweeping {config.project_root} (mode: {config.covermode})")
    try:
        result = sweep(config)
    except CovsweepError as e:
        status(e.message, style="error")
        if log_path := get_log_file_path():
            status(f"Details in {log_path}", indent=2)
        raise SystemExit(1) from e

    status(
        f"Merged {pluralize(result.profiles, 'profile')} "
        f"({pluralize(result.data_lines, 'data line')}) into {result.output_path}",
        style="success",
    )


if __name__ == "__main__":
    cli()
