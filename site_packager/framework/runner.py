"""Child-process execution for the project's build command.

The packaging workflow depends only on the `CommandRunner` protocol, so tests
can substitute a fake that records calls instead of spawning processes.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        """Run `command` in `cwd` to completion. May raise OSError if it cannot start."""


def _resolve_executable(command: Sequence[str]) -> list[str]:
    cmd = list(command)
    # npm is a .cmd shim on Windows; CreateProcess does not search PATHEXT.
    if os.name == "nt" and cmd:
        found = shutil.which(cmd[0])
        if found:
            cmd[0] = found
    return cmd


class SubprocessRunner:
    """Runs commands with stdout and stderr merged into one captured stream."""

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        proc = subprocess.run(
            _resolve_executable(command),
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return CommandResult(returncode=proc.returncode, output=proc.stdout or "")
