from __future__ import annotations

"""Line-level text diff.

Regions follow ``difflib.SequenceMatcher`` opcodes. Two empty texts produce
no regions at all, so callers must use :func:`has_changes` rather than
counting regions.
"""

import difflib
from dataclasses import dataclass
from typing import Literal, Sequence

Tag = Literal["equal", "insert", "delete", "replace"]


@dataclass(frozen=True)
class DiffRegion:
    tag: Tag
    old_lines: tuple[str, ...]
    new_lines: tuple[str, ...]

    @property
    def changed(self) -> bool:
        return self.tag != "equal"


def diff_lines(old: str, new: str) -> list[DiffRegion]:
    a = old.splitlines(keepends=True)
    b = new.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
    return [
        DiffRegion(tag, tuple(a[i1:i2]), tuple(b[j1:j2]))
        for tag, i1, i2, j1, j2 in matcher.get_opcodes()
    ]


def has_changes(regions: Sequence[DiffRegion]) -> bool:
    return any(r.changed for r in regions)


def unified_diff(old: str, new: str, *, fromfile: str, tofile: str) -> list[str]:
    return list(
        difflib.unified_diff(
            old.splitlines(),
            new.splitlines(),
            fromfile=fromfile,
            tofile=tofile,
            lineterm="",
        )
    )


__all__ = ["DiffRegion", "diff_lines", "has_changes", "unified_diff"]
