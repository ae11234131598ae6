from __future__ import annotations

"""Stage generated files aside, re-run the generator and compare.

Phases run strictly in order over a file set fixed at construction:

1. validate  - every target is inside cwd and has no stale backup
2. stage     - rename ``<path>`` to ``<path>.tmp``
3. execute   - run the generator with inherited stdio
4. verify    - every target was re-emitted, then diff against the backup
5. cleanup   - delete the backups (only when nothing was missing or changed)

Nothing is rolled back. Whenever a run stops early the ``.tmp`` files stay
on disk and are the way to recover: rename them back by hand.
"""

import logging
import shlex
from pathlib import Path
from typing import Callable, Optional, Sequence

from .command import CommandRunnerProto, SubprocessCommandRunner
from .constants import DELETE, DIFF, EMIT, ERROR, RENAME
from .differ import DiffRegion, diff_lines, has_changes, unified_diff
from .errors import ConflictError, UnsafePathError
from .files import is_path_cwd, is_path_inside, path_exists, read_text, remove, rename
from .log_sink import ConsoleSink, LogSink
from .models import ABORT_STATES, PhaseResult, RunOutcome, RunRequest, RunState

logger = logging.getLogger(__name__)

Differ = Callable[[str, str], Sequence[DiffRegion]]


class StagingRunner:
    def __init__(
        self,
        request: RunRequest,
        *,
        sink: Optional[LogSink] = None,
        command_runner: Optional[CommandRunnerProto] = None,
        differ: Optional[Differ] = None,
        cwd: Optional[Path] = None,
    ):
        self.request = request
        self.sink = sink or ConsoleSink()
        self.command_runner = command_runner or SubprocessCommandRunner()
        self.differ = differ or diff_lines
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.state = RunState.VALIDATING
        # Number of targets actually renamed aside so far.
        self.staged = 0

    @property
    def files(self):
        return self.request.files

    @property
    def dry_run(self) -> bool:
        return self.request.dry_run

    def _enter(self, state: RunState) -> None:
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    # --- phase 1 ---
    def validate(self) -> None:
        for target in self.files:
            path = target.original_path
            if is_path_cwd(path, self.cwd):
                raise UnsafePathError(
                    ctx={"reason": "path_is_cwd", "path": path},
                )
            if not is_path_inside(path, self.cwd):
                raise UnsafePathError(
                    ctx={"reason": "path_outside_cwd", "path": path},
                )
            if path_exists(target.backup(self.cwd)):
                raise ConflictError(
                    ctx={"reason": "backup_exists", "path": target.backup_path},
                )

    # --- phase 2 ---
    def stage(self) -> None:
        for target in self.files:
            self.sink.emit(RENAME, f'"{target.original_path}" -> "{target.backup_path}"')
            if self.dry_run:
                continue
            rename(target.original(self.cwd), target.backup(self.cwd))
            self.staged += 1

    # --- phase 3 ---
    def execute(self) -> None:
        self.sink.emit(EMIT, shlex.join(self.request.command))
        if self.dry_run:
            return
        self.command_runner.run(self.request.program, self.request.args, cwd=self.cwd)

    # --- phase 4 ---
    def verify_emission(self) -> PhaseResult:
        result = PhaseResult()
        for target in self.files:
            if not path_exists(target.original(self.cwd)):
                self.sink.emit(ERROR, f'Command failed to emit "{target.original_path}".')
                result.add("missing", target)
        return result

    def verify_diff(self) -> PhaseResult:
        result = PhaseResult()
        for target in self.files:
            self.sink.emit(DIFF, f'"{target.original_path}" <> "{target.backup_path}"')
            if self.dry_run:
                continue
            emitted = read_text(target.original(self.cwd))
            previous = read_text(target.backup(self.cwd))
            if has_changes(self.differ(previous, emitted)):
                self.sink.emit(ERROR, f'Found diff in "{target.original_path}".')
                result.add("diff", target)
                for line in unified_diff(
                    previous, emitted, fromfile=target.backup_path, tofile=target.original_path
                ):
                    logger.debug(line)
        return result

    # --- phase 5 ---
    def cleanup(self) -> None:
        for target in self.files:
            self.sink.emit(DELETE, f'"{target.backup_path}"')
            if self.dry_run:
                continue
            remove(target.backup(self.cwd))

    def run(self) -> RunOutcome:
        """Run every phase; returns the outcome or raises on an aborting error.

        On raise, ``self.state`` holds the matching ``ABORTED_*`` state.
        """
        try:
            return self._run()
        except Exception:
            self.state = ABORT_STATES.get(self.state, self.state)
            raise

    def _run(self) -> RunOutcome:
        self._enter(RunState.VALIDATING)
        self.validate()

        self._enter(RunState.STAGING)
        self.stage()

        self._enter(RunState.EXECUTING)
        self.execute()

        self._enter(RunState.VERIFYING_EMISSION)
        emission = self.verify_emission()
        if not emission.ok:
            self._enter(RunState.FAILED_EMISSION)
            return RunOutcome(self.state, emission=emission)

        self._enter(RunState.VERIFYING_DIFF)
        diff = self.verify_diff()
        if not diff.ok:
            self._enter(RunState.FAILED_DIFF)
            return RunOutcome(self.state, emission=emission, diff=diff)

        self._enter(RunState.CLEANING_UP)
        self.cleanup()

        self._enter(RunState.DONE)
        return RunOutcome(self.state, emission=emission, diff=diff)


def verify(request: RunRequest, **kwargs) -> RunOutcome:
    """Convenience wrapper: build a StagingRunner and run it."""
    return StagingRunner(request, **kwargs).run()


__all__ = ["StagingRunner", "verify"]
