from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Sequence

from diff_verify.command import CommandRunnerProto
from diff_verify.errors import CommandError


class FakeGenerator(CommandRunnerProto):
    """Stand-in for the generator process.

    `outputs` maps a cwd-relative path to the text to write, or None to leave
    the file un-emitted. Paths not listed are left alone.
    """

    def __init__(self, outputs: Mapping[str, Optional[str]] | None = None, *, fail_with: int | None = None):
        self.outputs = dict(outputs or {})
        self.fail_with = fail_with
        self.calls: list[dict] = []

    def run(self, program: str, args: Sequence[str], *, cwd: Optional[Path] = None) -> int:
        self.calls.append({"program": program, "args": list(args), "cwd": cwd})
        if self.fail_with is not None:
            raise CommandError(
                ctx={"reason": "non_zero_exit", "command": [program, *args], "returncode": self.fail_with}
            )
        root = Path(cwd) if cwd is not None else Path.cwd()
        for rel, text in self.outputs.items():
            if text is None:
                continue
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return 0


def write_files(root: Path, files: Mapping[str, str]) -> None:
    for rel, text in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")


def tmp_files(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*.tmp"))
