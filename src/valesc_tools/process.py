"""External command execution.

Every external tool (ripgrep, addlicense) goes through a `CommandRunner`, so the
callers can be tested with a mocked runner instead of real processes.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

TOOL_NOT_FOUND_EXIT_CODE = 127


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ExternalCommandError(RuntimeError):
    """Raised when an external tool exits with a failure status."""

    def __init__(self, result: CommandResult) -> None:
        self.result = result
        tool = result.args[0] if result.args else "<unknown>"
        super().__init__(f"{tool} exited with status {result.returncode}")

    @property
    def returncode(self) -> int:
        return self.result.returncode


class ToolNotFoundError(RuntimeError):
    """Raised when an external tool is not installed or not on PATH."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(
            f"{executable!r} was not found on PATH (enter the dev shell with `nix develop`)"
        )


class CommandRunner(Protocol):
    def run(self, args: Sequence[str], *, cwd: Path) -> CommandResult: ...


class SubprocessRunner:
    """Run commands with `subprocess.run`, capturing text output."""

    def run(self, args: Sequence[str], *, cwd: Path) -> CommandResult:
        argv = tuple(str(a) for a in args)
        logger.debug("Running external command", extra={"argv": list(argv), "cwd": str(cwd)})
        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(argv[0]) from e

        return CommandResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
