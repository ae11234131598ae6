from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from .errors import CommandError

logger = logging.getLogger(__name__)


class CommandRunnerProto:
    def run(
        self, program: str, args: Sequence[str], *, cwd: Optional[Path] = None
    ) -> int:  # pragma: no cover - protocol only
        raise NotImplementedError


class SubprocessCommandRunner(CommandRunnerProto):
    """Run the generator with the console handed over to it.

    stdin/stdout/stderr are inherited so the generator's own output reaches
    the user directly. Returns 0 or raises CommandError.
    """

    def run(self, program: str, args: Sequence[str], *, cwd: Optional[Path] = None) -> int:
        argv = [program, *args]
        logger.debug("spawning %s (cwd=%s)", argv, cwd)
        try:
            subprocess.run(argv, cwd=str(cwd) if cwd is not None else None, check=True)
        except subprocess.CalledProcessError as exc:
            raise CommandError(
                ctx={"reason": "non_zero_exit", "command": argv, "returncode": exc.returncode},
                cause=exc,
            )
        except OSError as exc:
            raise CommandError(
                ctx={"reason": "launch_failed", "command": argv, "error": str(exc)},
                cause=exc,
            )
        return 0


__all__ = ["CommandRunnerProto", "SubprocessCommandRunner"]
