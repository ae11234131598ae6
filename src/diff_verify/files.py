from __future__ import annotations

"""Filesystem helpers: pattern expansion, containment checks and the
mutating primitives the runner calls (each wraps OSError as EnvironmentFault)."""

import glob
import os
import shutil
from pathlib import Path
from typing import Iterable, Optional

from .errors import EnvironmentFault


def _is_literal(pattern: str) -> bool:
    return not glob.has_magic(pattern)


def _normalize(match: str, root: Path) -> str:
    """Spell a match relative to `root` so one file has one spelling.

    Paths outside `root` keep their given form for validation to reject.
    """
    if not is_path_inside(match, root):
        return Path(match).as_posix()
    base = os.path.abspath(root)
    target = os.path.normpath(os.path.join(base, match))
    return Path(os.path.relpath(target, base)).as_posix()


def _match(pattern: str, root: Path) -> list[str]:
    """Files under `root` matching one pattern, as sorted cwd-relative POSIX strings."""
    candidate = root / pattern
    if candidate.is_dir() and not is_path_inside(pattern, root):
        # Left for the runner's safety checks to reject.
        return [pattern]
    if candidate.is_dir():
        pattern = f"{pattern.rstrip('/')}/**/*"
    elif candidate.is_file():
        return [_normalize(pattern, root)]
    elif _is_literal(pattern):
        return []

    matches = glob.glob(pattern, root_dir=str(root), recursive=True)
    return sorted({_normalize(m, root) for m in matches if (root / m).is_file()})


def expand_patterns(patterns: Iterable[str], cwd: Optional[Path] = None) -> list[str]:
    """Expand path/glob patterns into an ordered, deduplicated list of files.

    Directories expand to every file beneath them. Patterns prefixed with
    ``!`` remove their matches from the result wherever they appear in the
    list. Missing literal paths are silently skipped.
    """
    root = Path(cwd) if cwd is not None else Path.cwd()
    included: list[str] = []
    excluded: set[str] = set()
    for raw in patterns:
        pattern = str(raw).strip()
        if not pattern:
            continue
        if pattern.startswith("!"):
            excluded.update(_match(pattern[1:], root))
            continue
        for m in _match(pattern, root):
            if m not in included:
                included.append(m)
    return [p for p in included if p not in excluded]


def _absolute(path: str | os.PathLike, cwd: Path) -> Path:
    return Path(os.path.normpath(os.path.join(cwd, path)))


def is_path_cwd(path: str | os.PathLike, cwd: Optional[Path] = None) -> bool:
    root = Path(os.path.abspath(cwd if cwd is not None else Path.cwd()))
    return _absolute(path, root) == root


def is_path_inside(path: str | os.PathLike, cwd: Optional[Path] = None) -> bool:
    """True when `path` lies strictly below `cwd`; the directory itself is not inside."""
    root = Path(os.path.abspath(cwd if cwd is not None else Path.cwd()))
    target = _absolute(path, root)
    return target != root and root in target.parents


def path_exists(path: Path) -> bool:
    return os.path.lexists(path)


def rename(src: Path, dst: Path) -> None:
    try:
        os.replace(src, dst)
    except OSError as exc:
        raise EnvironmentFault(ctx={"op": "rename", "path": str(src), "to": str(dst)}, cause=exc)


def read_text(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as exc:
        raise EnvironmentFault(ctx={"op": "read", "path": str(path)}, cause=exc)


def remove(path: Path) -> None:
    """Delete a file or directory tree; a path that is already gone is fine."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path_exists(path):
            path.unlink()
    except OSError as exc:
        raise EnvironmentFault(ctx={"op": "delete", "path": str(path)}, cause=exc)


__all__ = [
    "expand_patterns",
    "is_path_cwd",
    "is_path_inside",
    "path_exists",
    "rename",
    "read_text",
    "remove",
]
