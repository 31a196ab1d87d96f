"""
Custom exceptions for the casbin-cli package.
"""

from pathlib import Path


class CasbinCliError(Exception):
    """Base exception for all casbin-cli errors."""

    pass


class ExecutionError(CasbinCliError):
    """Raised when an external command cannot be launched."""

    def __init__(self, command: list[str], reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not run '{' '.join(command)}': {reason}")


class VersionUnavailableError(CasbinCliError):
    """Raised when neither a tag nor a commit hash can be resolved."""

    def __init__(self, message: str = "Failed to get Git version (tag or commit hash)"):
        super().__init__(message)


class ManifestReadError(CasbinCliError):
    """Raised when the build manifest is missing, unreadable or malformed."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read manifest {self.path}: {reason}")


class EnforcementError(CasbinCliError):
    """Raised when the enforcer cannot be built or a policy call fails."""

    pass


class ConfigurationError(CasbinCliError):
    """Raised when the environment or .env file holds invalid settings."""

    pass
