"""
Configuration management for the CLI.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from casbin_cli.exceptions import ConfigurationError
from casbin_cli.log import ScopedLogger

_ENV_PREFIX = "CASBIN_CLI_"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CLISettings(BaseSettings):
    """Main CLI configuration using Pydantic Settings."""

    model_config = SettingsConfigDict(
        env_prefix=_ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_colors: bool = True

    # Version control
    vcs_executable: str = "git"
    command_timeout: float | None = Field(default=None, gt=0)

    # Build manifest
    manifest_file: str = "pom.xml"
    library_group_id: str = "org.casbin"
    library_artifact_id: str = "jcasbin"

    # Banner
    tool_name: str = "casbin-cli"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def manifest_path(self) -> Path:
        """Get the manifest path, relative to the current working directory."""
        return Path.cwd() / self.manifest_file


@lru_cache
def get_settings() -> CLISettings:
    """Get cached settings instance.

    Raises:
        ConfigurationError: If a CASBIN_CLI_* variable holds an invalid value
    """
    try:
        return CLISettings()
    except ValidationError as e:
        fields = ", ".join(
            f"{_ENV_PREFIX}{'.'.join(str(loc) for loc in err['loc']).upper()}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {fields}") from e


@lru_cache(maxsize=128)
def get_logger(scope: str) -> ScopedLogger:
    """Get a scoped logger for a specific module or component.

    Invalid settings fall back to the defaults here, so that modules can still
    be imported and the CLI can report the configuration error itself.

    Args:
        scope: The name/scope for the logger (e.g., "shell", "manifest")

    Returns:
        Scoped logger instance
    """
    try:
        settings = get_settings()
    except ConfigurationError:
        settings = CLISettings.model_construct()
    return ScopedLogger(
        name=scope,
        level=settings.log_level,
        colors=settings.log_colors,
        context={"app_name": settings.tool_name, "component": scope},
    )
