"""
Process execution for toolchain commands.

Commands run through the shell with the current process environment, so PATH
entries added earlier in the run are visible to them.
"""

import logging
import os
import subprocess
from dataclasses import dataclass

from setupgo.core.exceptions import CommandExecutionError

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Captured output of a finished command."""

    stdout: str
    stderr: str
    returncode: int


class ProcessExecutor:
    """Runs shell commands and captures their output."""

    def execute(self, command: str) -> ExecutionResult:
        """
        Run a command and capture stdout/stderr.

        Args:
            command: Shell command line

        Returns:
            ExecutionResult with stdout stripped of trailing whitespace

        Raises:
            CommandExecutionError: If the command exits non-zero
        """
        logger.debug(f"Executing: {command}")
        result = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            text=True,
            env=os.environ.copy(),
        )

        if result.returncode != 0:
            raise CommandExecutionError(command, result.returncode, result.stderr)

        return ExecutionResult(
            stdout=result.stdout.rstrip(),
            stderr=result.stderr,
            returncode=result.returncode,
        )
