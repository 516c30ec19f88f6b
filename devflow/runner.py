"""
runner.py

Responsibility: Launch external tools as shell commands.

The child process inherits stdin/stdout/stderr so interactive or streaming tool
output stays visible. Nothing is captured or parsed; the only outcome callers see
is "it worked" or an `ExecutionError`.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

LOG = logging.getLogger(__name__)


class ExecutionError(RuntimeError):
    def __init__(self, message: str, *, command: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode


def execute(command: str, *, cwd: str | Path | None = None) -> None:
    """
    Run a shell command line, raising ExecutionError on spawn failure or non-zero exit.
    """
    LOG.info("Executing: %s", command)
    try:
        completed = subprocess.run(command, shell=True, cwd=str(cwd) if cwd is not None else None, check=False)
    except OSError as e:
        raise ExecutionError(f"Failed to start command: {command}: {e}", command=command) from e

    if completed.returncode != 0:
        raise ExecutionError(
            f"Command failed: {command} (exit status {completed.returncode})",
            command=command,
            returncode=completed.returncode,
        )
