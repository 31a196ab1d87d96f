"""
Scoped structlog loggers for the CLI.

Log records go to stderr so that stdout carries only command output
(version banner, enforcement results).
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


class ScopedLogger:
    """
    A named logger with its own context and processor chain.

    Records below ``level`` are dropped before any processor runs.
    """

    def __init__(
        self,
        name: str,
        level: str = "WARNING",
        context: dict[str, Any] | None = None,
        colors: bool = True,
        stream=None,
    ):
        """
        Initialize a scoped logger.

        Args:
            name: Logger name/scope identifier
            level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            context: Initial context dictionary
            colors: Whether to use colored output
            stream: Output stream (default: sys.stderr)
        """
        self.name = name
        self.level = level.upper()
        self.colors = colors
        self.stream = stream or sys.stderr
        self._context = dict(context or {})
        self._context["logger"] = name

        self._logger = structlog.wrap_logger(
            structlog.PrintLogger(file=self.stream),
            processors=self._get_default_processors(),
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(self.level)
            ),
            cache_logger_on_first_use=True,
        ).bind(**self._context)

    def _get_default_processors(self) -> list[Processor]:
        """Get the console processor chain."""
        processors: list[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

        if self.colors:
            processors.append(
                structlog.dev.ConsoleRenderer(
                    colors=True,
                    exception_formatter=structlog.dev.rich_traceback,
                )
            )
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        return processors

    def bind(self, **kwargs: Any) -> "ScopedLogger":
        """
        Bind additional context to the logger.

        Returns:
            New ScopedLogger instance with bound context
        """
        return self.__class__(
            name=self.name,
            level=self.level,
            context={**self._context, **kwargs},
            colors=self.colors,
            stream=self.stream,
        )

    def debug(self, event: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._logger.debug(event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._logger.warning(event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        """Log an error message."""
        self._logger.error(event, **kwargs)

    def exception(self, event: str, **kwargs: Any) -> None:
        """Log an exception with traceback."""
        self._logger.exception(event, **kwargs)

    @property
    def context(self) -> dict[str, Any]:
        """Get the current logger context."""
        return self._context.copy()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, level={self.level!r})"
