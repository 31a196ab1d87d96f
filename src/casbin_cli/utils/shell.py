"""Shell command utilities."""

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from casbin_cli.config import get_logger
from casbin_cli.exceptions import ExecutionError

logger = get_logger("shell")


@dataclass(frozen=True)
class CommandResult:
    """First line of a command's standard output and its exit status.

    ``first_line`` is None whenever the command exited unsuccessfully.
    """

    first_line: str | None
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Run external commands and keep only the first line of their output."""

    def __init__(self, cwd: Path | str | None = None, timeout: float | None = None):
        """
        Args:
            cwd: Working directory for the commands
            timeout: Command timeout in seconds (None waits indefinitely)
        """
        self.cwd = cwd
        self.timeout = timeout

    def run(self, command: list[str] | str) -> CommandResult:
        """Run a command and capture the first line of its standard output.

        Args:
            command: Command to run (list or command-line string)

        Returns:
            CommandResult with the first output line, or None on non-zero exit

        Raises:
            ExecutionError: If the program cannot be started or times out
        """
        if isinstance(command, str):
            command = shlex.split(command)

        # Both pipes are drained while waiting, so a chatty child cannot block
        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("Command timed out", command=command, timeout=self.timeout)
            raise ExecutionError(command, f"timed out after {e.timeout}s") from e
        except OSError as e:
            logger.error("Command could not be started", command=command, error=str(e))
            raise ExecutionError(command, e.strerror or str(e)) from e

        if result.returncode != 0:
            logger.debug(
                "Command exited unsuccessfully", command=command, exit_code=result.returncode
            )
            return CommandResult(first_line=None, exit_code=result.returncode)

        lines = result.stdout.splitlines()
        first_line = lines[0] if lines else ""
        logger.debug("Command succeeded", command=command, first_line=first_line)
        return CommandResult(first_line=first_line, exit_code=result.returncode)
