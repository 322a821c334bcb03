"""Decorators for bookproject CLI commands."""

import functools
import logging
from typing import Callable, Any
import typer
from rich.console import Console

from .exceptions import BookNotFoundError, ShelfNotFoundError

logger = logging.getLogger(__name__)
console = Console()


def handle_library_errors(func: Callable) -> Callable:
    """
    Decorator to handle common library operation errors.

    Turns lookup failures, invalid input and unexpected errors into a
    readable message and a non-zero exit code.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except ShelfNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            console.print("[yellow]Tip: Run 'bookproject shelves' to see the available shelves[/yellow]")
            raise typer.Exit(code=1)
        except BookNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except FileNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] Library or file not found: {e}")
            raise typer.Exit(code=1)
        except PermissionError as e:
            console.print(f"[bold red]Error:[/bold red] Permission denied: {e}")
            raise typer.Exit(code=1)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] Invalid input: {e}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper
