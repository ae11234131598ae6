"""Command-line entry point for verifying generated files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .constants import ERROR, INFO
from .errors import DiffVerifyError, Err, MissingCommandError
from .files import expand_patterns
from .log_sink import ConsoleSink, LogSink
from .models import RunRequest, RunState, build_file_set
from .runner import StagingRunner

HELP = """Verify that a command generates files which match existing files on disk.

Files matching the path/glob given by '-p' are renamed with a '.tmp' suffix,
then COMMAND is executed, and the newly generated files are compared with the
'.tmp' files. If a file is not generated again or differs, diff-verify exits
with status 1 and leaves the '.tmp' files in place for inspection.

\b
Examples:
  diff-verify -p src/app/schema_types.py -- python scripts/gen_types.py
  diff-verify -p 'locales/**/*.po' -- make extract-messages
  diff-verify -p generated --dry-run -- ./codegen.sh --config codegen.yml
"""

# Runs that stopped at or after staging may leave renamed files behind.
_BACKUPS_LEFT = {
    RunState.ABORTED_STAGING,
    RunState.ABORTED_EXECUTION,
    RunState.ABORTED_VERIFICATION,
    RunState.ABORTED_CLEANUP,
}


def describe_error(err: DiffVerifyError) -> str:
    ctx = err.ctx or {}
    path = ctx.get("path")
    if err.reason == "path_is_cwd":
        return f'"{path}": Cannot rename the current working directory.'
    if err.reason == "path_outside_cwd":
        return f'"{path}": Cannot rename files/directories outside the current working directory.'
    if err.code is Err.BACKUP_CONFLICT:
        return f'"{path}" already exists. It must be deleted to proceed.'
    if err.code is Err.MISSING_COMMAND:
        return "Missing command"
    if err.code is Err.COMMAND_FAILED:
        command = " ".join(ctx.get("command", []))
        if err.reason == "non_zero_exit":
            return f'Command "{command}" exited with status {ctx.get("returncode")}.'
        return f'Command "{command}" could not be started: {ctx.get("error")}'
    if err.code is Err.IO_ERROR:
        return f'Failed to {ctx.get("op")} "{path}": {err.cause}'
    return str(err)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_cli(
    paths: tuple[str, ...],
    command: tuple[str, ...],
    *,
    dry_run: bool = False,
    sink: LogSink | None = None,
    cwd: Path | None = None,
    **runner_kwargs,
) -> int:
    """Resolve the file set, run the staging protocol and report. Returns the exit status."""
    sink = sink or ConsoleSink()
    root = Path(cwd) if cwd is not None else Path.cwd()

    files = build_file_set(expand_patterns(paths, cwd=root))
    if not files:
        sink.emit(INFO, f"No files matched {', '.join(paths)}")
    try:
        request = RunRequest(files=files, command=command, dry_run=dry_run)
    except MissingCommandError as err:
        sink.emit(ERROR, describe_error(err))
        return 1

    runner = StagingRunner(request, sink=sink, cwd=root, **runner_kwargs)
    try:
        outcome = runner.run()
    except DiffVerifyError as err:
        sink.emit(ERROR, describe_error(err))
        if runner.state in _BACKUPS_LEFT and runner.staged:
            sink.emit(ERROR, "Run aborted; rename the .tmp files back to restore the originals.")
        return 2

    if outcome.state is RunState.FAILED_EMISSION:
        sink.emit(ERROR, f"{len(outcome.missing)} file(s) were not emitted; backups kept as .tmp files.")
    elif outcome.state is RunState.FAILED_DIFF:
        sink.emit(ERROR, f"{len(outcome.changed)} file(s) differ; backups kept as .tmp files.")
    return outcome.exit_code


@click.command(
    help=HELP,
    context_settings={"allow_interspersed_args": False},
)
@click.option(
    "-p",
    "--path",
    "paths",
    multiple=True,
    required=True,
    metavar="PATH|GLOB",
    help="File, directory or glob of generated files to verify (may be repeated)",
)
@click.option("--dry-run", is_flag=True, help="Log every action without renaming, running or deleting anything")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging, including unified diffs of mismatches")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, paths: tuple[str, ...], dry_run: bool, verbose: bool, command: tuple[str, ...]):
    _configure_logging(verbose)
    sink = ConsoleSink()
    if not command:
        sink.emit(ERROR, "Missing command")
        click.echo(ctx.get_help())
        ctx.exit(1)

    ctx.exit(run_cli(paths, command, dry_run=dry_run, sink=sink))


def entrypoint() -> None:  # pragma: no cover - console entry
    main(prog_name="diff-verify")
