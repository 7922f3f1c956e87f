"""Process execution for task actions."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def error(self) -> str | None:
        if self.returncode == 0:
            return None
        return (self.stderr or self.stdout).strip() or f"exit status {self.returncode}"

    @property
    def data(self) -> str:
        return self.stdout


class ExecError(RuntimeError):
    """Raised when a command returns non-zero in check mode."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        detail = (result.stderr or result.stdout).strip()
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{detail}")
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path | None = None,
    check: bool = False,
) -> ExecResult:
    """Run command and return structured result."""
    workdir = cwd or Path.cwd()
    completed = subprocess.run(argv, cwd=workdir, capture_output=True, text=True, check=False)
    result = ExecResult(
        argv=tuple(argv),
        cwd=workdir.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if check and result.returncode != 0:
        raise ExecError(result)
    return result


def run(command: str, *, cwd: Path | None = None, check: bool = False) -> ExecResult:
    """Run a command string (split with shell rules, no shell)."""
    return run_command(shlex.split(command), cwd=cwd, check=check)
