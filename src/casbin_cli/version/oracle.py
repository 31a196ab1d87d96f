"""Resolve the CLI's own version from version control."""

from casbin_cli.config import get_logger
from casbin_cli.exceptions import VersionUnavailableError
from casbin_cli.utils.shell import CommandResult, ProcessRunner

logger = get_logger("version")

LATEST_TAG_ARGS = ["describe", "--tags", "--abbrev=0"]
SHORT_HASH_ARGS = ["rev-parse", "--short", "HEAD"]


def _accepted(result: CommandResult) -> str | None:
    """Return the trimmed output if the command succeeded with something to show."""
    if not result.ok or result.first_line is None:
        return None
    return result.first_line.strip() or None


class VersionOracle:
    """
    Version lookup with a fallback chain.

    The most recent tag is preferred; untagged checkouts fall back to the
    short hash of HEAD. Each stage runs at most once.
    """

    def __init__(self, runner: ProcessRunner | None = None, executable: str = "git"):
        self.runner = runner or ProcessRunner()
        self.executable = executable

    def resolve_tool_version(self) -> str:
        """Get the latest tag, else the short commit hash.

        Raises:
            ExecutionError: If the version-control tool cannot be started
            VersionUnavailableError: If neither a tag nor a hash is available
        """
        tag = _accepted(self.runner.run([self.executable, *LATEST_TAG_ARGS]))
        if tag:
            return tag

        logger.debug("No tag found, falling back to commit hash")
        commit_hash = _accepted(self.runner.run([self.executable, *SHORT_HASH_ARGS]))
        if commit_hash:
            return commit_hash

        logger.warning("No tag or commit hash available", executable=self.executable)
        raise VersionUnavailableError()
