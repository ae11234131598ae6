from __future__ import annotations

"""User-facing status lines.

Every action the runner takes (or would take, in dry-run) is reported here
as a ``(prefix, message)`` pair. Diagnostics for developers go through the
``logging`` module instead.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

import click

from .constants import ERROR, PREFIX_COLORS, PREFIX_WIDTH


class LogEntry(NamedTuple):
    prefix: str
    message: str


class LogSink:
    def emit(self, prefix: str, message: str) -> None:  # pragma: no cover - protocol only
        raise NotImplementedError


def format_line(prefix: str, message: str, *, color: bool = True) -> str:
    label = f"[{prefix}]"
    pad = " " * max(PREFIX_WIDTH - len(label), 1)
    if color and prefix in PREFIX_COLORS:
        label = "[" + click.style(prefix, fg=PREFIX_COLORS[prefix]) + "]"
    return f"{label}{pad}{message}"


class ConsoleSink(LogSink):
    """Write status lines with coloured labels; errors go to stderr."""

    def emit(self, prefix: str, message: str) -> None:
        click.echo(format_line(prefix, message), err=(prefix == ERROR))


@dataclass
class MemorySink(LogSink):
    entries: list[LogEntry] = field(default_factory=list)

    def emit(self, prefix: str, message: str) -> None:
        self.entries.append(LogEntry(prefix, message))

    def with_prefix(self, prefix: str) -> list[str]:
        return [e.message for e in self.entries if e.prefix == prefix]

    @property
    def prefixes(self) -> list[str]:
        return [e.prefix for e in self.entries]


__all__ = ["LogEntry", "LogSink", "ConsoleSink", "MemorySink", "format_line"]
