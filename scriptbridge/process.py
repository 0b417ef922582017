"""Direct subprocess execution with captured output.

Programs run with a literal argument vector; no shell is ever involved, so
arguments are never split, globbed, or expanded.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a finished child process.

    ``returncode`` is ``None`` when the child was terminated by a signal.
    """

    stdout: str
    stderr: str
    returncode: int | None


def shell_execute(program: str, args: Sequence[str] | None = None) -> ProcessResult:
    """Run ``program`` with ``args`` and wait for it to exit.

    stdin is ``/dev/null``; stdout/stderr are decoded as UTF-8 with invalid
    bytes replaced. Raises ``OSError`` when the program cannot be started.
    """
    argv = [program, *(args or ())]
    LOGGER.debug("spawning %r", argv)
    proc = subprocess.run(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    returncode = proc.returncode if proc.returncode >= 0 else None
    LOGGER.debug("%s exited with %s", program, proc.returncode)
    return ProcessResult(stdout=proc.stdout, stderr=proc.stderr, returncode=returncode)


__all__ = ["ProcessResult", "shell_execute"]
