"""Shared utilities for CLI commands."""

import functools
import io
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from bibfetchers.exceptions import BibfetchersError

# Type variable for decorators
F = TypeVar("F", bound=Callable[..., Any])

# Context storage for flags
_context: dict[str, Any] = {"verbose": False, "quiet": False}


def set_context(verbose: bool = False, quiet: bool = False) -> None:
    """Set global context values."""
    _context["verbose"] = verbose
    _context["quiet"] = quiet


def is_quiet() -> bool:
    return bool(_context.get("quiet", False))


def is_verbose() -> bool:
    return bool(_context.get("verbose", False))


def get_console() -> Console:
    """Get a Console instance respecting quiet mode.

    Returns a null console when quiet mode is enabled.
    """
    if is_quiet():
        return Console(file=io.StringIO(), stderr=True)
    return Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def handle_errors(func: F) -> F:
    """Decorator for consistent CLI error handling.

    Catches library exceptions and displays user-friendly error messages
    instead of raw Python tracebacks. Respects --verbose.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        err_console = Console(stderr=True)
        verbose = is_verbose()

        try:
            return func(*args, **kwargs)
        except BibfetchersError as e:
            if verbose:
                err_console.print_exception()
            else:
                err_console.print(f"[red]Error:[/red] {e.message}")
                if e.details:
                    err_console.print(f"[dim]{e.details}[/dim]")
                if e.hint:
                    err_console.print(f"[dim]Hint: {e.hint}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            err_console.print("\n[yellow]Interrupted[/yellow]")
            raise typer.Exit(130)

    return wrapper  # type: ignore[return-value]
