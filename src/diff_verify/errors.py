from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Err(Enum):
    UNSAFE_PATH = auto()
    BACKUP_CONFLICT = auto()
    MISSING_COMMAND = auto()
    COMMAND_FAILED = auto()
    IO_ERROR = auto()


@dataclass(eq=False)
class DiffVerifyError(Exception):
    """Structured error raised when a run cannot continue.

    `ctx` carries the offending path(s) or command so the CLI can render a
    useful message without parsing strings.
    """

    code: Err
    ctx: dict[str, Any] | None = None
    cause: Exception | None = None

    def __post_init__(self) -> None:
        if self.ctx is None:
            self.ctx = {}
        if self.cause is not None:
            self.__cause__ = self.cause
        super().__init__(self.code.name)

    @property
    def reason(self) -> str | None:
        return self.ctx.get("reason") if self.ctx else None

    def __str__(self) -> str:
        text = self.code.name
        if self.reason:
            text = f"{text} ({self.reason})"
        extra = {k: v for k, v in (self.ctx or {}).items() if k not in ("reason", "path")}
        if self.ctx and "path" in self.ctx:
            text = f'{text} "{self.ctx["path"]}"'
        if extra:
            text += " " + ", ".join(f"{k}={v!r}" for k, v in extra.items())
        if self.cause is not None:
            text += f": {self.cause}"
        return text


@dataclass(eq=False)
class UnsafePathError(DiffVerifyError):
    """Target is the working directory itself or lies outside it."""

    code: Err = Err.UNSAFE_PATH


@dataclass(eq=False)
class ConflictError(DiffVerifyError):
    """A `<path>.tmp` backup already exists."""

    code: Err = Err.BACKUP_CONFLICT


@dataclass(eq=False)
class MissingCommandError(DiffVerifyError):
    code: Err = Err.MISSING_COMMAND


@dataclass(eq=False)
class CommandError(DiffVerifyError):
    """The generator exited non-zero or could not be launched."""

    code: Err = Err.COMMAND_FAILED


@dataclass(eq=False)
class EnvironmentFault(DiffVerifyError):
    """Unexpected filesystem failure during rename, read or delete."""

    code: Err = Err.IO_ERROR


__all__ = [
    "Err",
    "DiffVerifyError",
    "UnsafePathError",
    "ConflictError",
    "MissingCommandError",
    "CommandError",
    "EnvironmentFault",
]
