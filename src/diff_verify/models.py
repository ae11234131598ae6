from __future__ import annotations

"""Value types shared by the runner, the CLI and tests."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Literal, Tuple

from .constants import BACKUP_SUFFIX
from .errors import MissingCommandError


@dataclass(frozen=True)
class TargetFile:
    """A concrete file matched by the user's patterns."""

    original_path: str

    @property
    def backup_path(self) -> str:
        return f"{self.original_path}{BACKUP_SUFFIX}"

    def original(self, cwd: Path) -> Path:
        return cwd / self.original_path

    def backup(self, cwd: Path) -> Path:
        return cwd / self.backup_path


FileSet = Tuple[TargetFile, ...]


def build_file_set(paths: Iterable[str]) -> FileSet:
    """Wrap expanded paths as TargetFiles, dropping repeats but keeping first-seen order."""
    seen: set[str] = set()
    out: list[TargetFile] = []
    for p in paths:
        key = str(p)
        if key in seen:
            continue
        seen.add(key)
        out.append(TargetFile(key))
    return tuple(out)


@dataclass(frozen=True)
class RunRequest:
    files: FileSet
    command: Tuple[str, ...]
    dry_run: bool = False

    def __post_init__(self):
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "command", tuple(str(c) for c in self.command))
        if not self.command:
            raise MissingCommandError(ctx={"reason": "empty_command"})

    @property
    def program(self) -> str:
        return self.command[0]

    @property
    def args(self) -> Tuple[str, ...]:
        return self.command[1:]


ProblemKind = Literal["missing", "diff"]


@dataclass(frozen=True)
class FileProblem:
    kind: ProblemKind
    target: TargetFile


@dataclass
class PhaseResult:
    problems: list[FileProblem] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems

    def add(self, kind: ProblemKind, target: TargetFile) -> None:
        self.problems.append(FileProblem(kind, target))

    def paths(self) -> list[str]:
        return [p.target.original_path for p in self.problems]


class RunState(Enum):
    VALIDATING = "validating"
    STAGING = "staging"
    EXECUTING = "executing"
    VERIFYING_EMISSION = "verifying_emission"
    VERIFYING_DIFF = "verifying_diff"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    ABORTED_VALIDATION = "aborted_validation"
    ABORTED_STAGING = "aborted_staging"
    ABORTED_EXECUTION = "aborted_execution"
    ABORTED_VERIFICATION = "aborted_verification"
    ABORTED_CLEANUP = "aborted_cleanup"
    FAILED_EMISSION = "failed_emission"
    FAILED_DIFF = "failed_diff"

    @property
    def exit_code(self) -> int:
        return 0 if self is RunState.DONE else 1


# In-flight state -> terminal state recorded when that phase raises.
ABORT_STATES = {
    RunState.VALIDATING: RunState.ABORTED_VALIDATION,
    RunState.STAGING: RunState.ABORTED_STAGING,
    RunState.EXECUTING: RunState.ABORTED_EXECUTION,
    RunState.VERIFYING_EMISSION: RunState.ABORTED_VERIFICATION,
    RunState.VERIFYING_DIFF: RunState.ABORTED_VERIFICATION,
    RunState.CLEANING_UP: RunState.ABORTED_CLEANUP,
}


@dataclass(frozen=True)
class RunOutcome:
    state: RunState
    emission: PhaseResult | None = None
    diff: PhaseResult | None = None

    @property
    def exit_code(self) -> int:
        return self.state.exit_code

    @property
    def missing(self) -> list[str]:
        return self.emission.paths() if self.emission else []

    @property
    def changed(self) -> list[str]:
        return self.diff.paths() if self.diff else []


__all__ = [
    "TargetFile",
    "FileSet",
    "build_file_set",
    "RunRequest",
    "FileProblem",
    "PhaseResult",
    "RunState",
    "ABORT_STATES",
    "RunOutcome",
]
