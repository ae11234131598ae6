"""Verify that a generator reproduces the generated files already on disk."""

from .errors import (
    CommandError,
    ConflictError,
    DiffVerifyError,
    EnvironmentFault,
    Err,
    MissingCommandError,
    UnsafePathError,
)
from .log_sink import ConsoleSink, LogSink, MemorySink
from .models import RunOutcome, RunRequest, RunState, TargetFile, build_file_set
from .runner import StagingRunner, verify

__all__ = [
    "CommandError",
    "ConflictError",
    "DiffVerifyError",
    "EnvironmentFault",
    "Err",
    "MissingCommandError",
    "UnsafePathError",
    "ConsoleSink",
    "LogSink",
    "MemorySink",
    "RunOutcome",
    "RunRequest",
    "RunState",
    "TargetFile",
    "build_file_set",
    "StagingRunner",
    "verify",
]
