"""Common utilities shared across the CLI."""

from rich.console import Console

# Single shared console instance for the entire CLI
console = Console(soft_wrap=True)

USAGE_HINT = "Run 'casbin --help' or 'casbin -h' for usage."


def handle_error(exc: Exception, message: str | None = None) -> None:
    """Consistent error handling and display.

    Args:
        exc: Exception to handle
        message: Optional custom message
    """
    if message:
        console.print(message, style="red", markup=False, highlight=False)
    console.print(f"Error: {exc}", style="red", markup=False, highlight=False)
    console.print(USAGE_HINT, markup=False, highlight=False)


__all__ = [
    "console",
    "handle_error",
    "USAGE_HINT",
]
