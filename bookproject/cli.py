import logging
import os
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from . import decorators
from .decorators import handle_library_errors
from .shelf_utils import ALL_BOOKS_SHELF

# Initialize Rich Traceback for better error messages
install(show_locals=False)

console = Console()

logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("bookproject")

# Main app
app = typer.Typer()

custom_app = typer.Typer(help="Manage custom shelves")
app.add_typer(custom_app, name="custom")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    bookproject - keep track of the books you want to read, are reading,
    have read or did not finish.
    """
    from .config import load_config

    settings = load_config()
    no_color = not settings.cli.color or bool(os.environ.get("NO_COLOR"))
    console.no_color = no_color
    decorators.console.no_color = no_color

    if verbose or settings.cli.verbose:
        logger.setLevel(logging.DEBUG)
        console.print("[bold green]Verbose mode enabled.[/bold green]")


def _open_library(library_path: Path):
    from .library_db import Library

    if not library_path.exists():
        console.print(f"[red]Error: Library not found: {library_path}[/red]")
        raise typer.Exit(code=1)
    return Library.open(library_path)


def _print_books(books, title: str):
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("Shelf", style="magenta")
    table.add_column("Custom shelf", style="yellow")

    for book in sorted(books, key=lambda b: (b.title.lower(), b.id)):
        table.add_row(
            str(book.id),
            book.title[:50],
            book.author.name if book.author else "",
            book.predefined_shelf.name,
            book.custom_shelf.name if book.custom_shelf else "",
        )

    console.print(table)


@app.command()
@handle_library_errors
def init(
    library_path: Path = typer.Argument(..., help="Path to create the library"),
    echo_sql: bool = typer.Option(False, "--echo-sql", help="Echo SQL statements for debugging")
):
    """
    Initialize a new library with the four predefined shelves.

    Example:
        bookproject init ~/my-books
    """
    from .library_db import Library

    lib = Library.open(library_path, echo=echo_sql)
    names = lib.shelf_names()
    lib.close()

    console.print(f"[green]✓ Library initialized at {library_path}[/green]")
    console.print(f"  Database: {library_path / 'library.db'}")
    console.print(f"  Shelves: {', '.join(names)}")


@app.command()
@handle_library_errors
def add(
    title: str = typer.Argument(..., help="Book title"),
    library_path: Path = typer.Argument(..., help="Path to library"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Author name"),
    shelf: str = typer.Option("To read", "--shelf", "-s", help="Predefined shelf (case-insensitive)"),
):
    """
    Add a book to a shelf.

    Examples:
        bookproject add "Dune" ~/my-books --author "Frank Herbert"
        bookproject add "Emma" ~/my-books --shelf "did not finish"
    """
    lib = _open_library(library_path)
    try:
        book = lib.add_book(title, shelf=shelf, author=author)
        console.print(f"[green]✓ Added '{book.title}' (ID {book.id}) to {book.predefined_shelf.name}[/green]")
    finally:
        lib.close()


@app.command(name="list")
@handle_library_errors
def list_books(
    library_path: Path = typer.Argument(..., help="Path to library"),
    shelf: str = typer.Option(ALL_BOOKS_SHELF, "--shelf", "-s", help="Shelf name or 'All books'"),
):
    """
    List books on a shelf.

    Examples:
        bookproject list ~/my-books
        bookproject list ~/my-books --shelf reading
    """
    lib = _open_library(library_path)
    try:
        books = lib.books_in_shelf(shelf)
        if not books:
            console.print("[yellow]No books found[/yellow]")
        else:
            _print_books(books, title=shelf)
            console.print(f"\n[dim]{len(books)} books[/dim]")
    finally:
        lib.close()


@app.command()
@handle_library_errors
def move(
    book_id: int = typer.Argument(..., help="Book ID"),
    library_path: Path = typer.Argument(..., help="Path to library"),
    shelf: str = typer.Option(..., "--shelf", "-s", help="Destination shelf"),
):
    """
    Move a book to another predefined shelf.

    Example:
        bookproject move 3 ~/my-books --shelf read
    """
    lib = _open_library(library_path)
    try:
        book = lib.move_book(book_id, shelf)
        console.print(f"[green]✓ Moved '{book.title}' to {book.predefined_shelf.name}[/green]")
    finally:
        lib.close()


@app.command()
@handle_library_errors
def rename(
    book_id: int = typer.Argument(..., help="Book ID"),
    library_path: Path = typer.Argument(..., help="Path to library"),
    title: str = typer.Option(..., "--title", "-t", help="New title"),
):
    """Change a book's title."""
    lib = _open_library(library_path)
    try:
        book = lib.rename_book(book_id, title)
        console.print(f"[green]✓ Renamed book {book.id} to '{book.title}'[/green]")
    finally:
        lib.close()


@app.command()
@handle_library_errors
def remove(
    book_id: int = typer.Argument(..., help="Book ID"),
    library_path: Path = typer.Argument(..., help="Path to library"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Remove a book from the library."""
    lib = _open_library(library_path)
    try:
        book = lib.get_book(book_id)
        if not yes and not typer.confirm(f"Remove '{book.title}'?"):
            console.print("[red]Operation cancelled[/red]")
            return
        title = book.title
        lib.delete_book(book_id)
        console.print(f"[green]✓ Removed '{title}'[/green]")
    finally:
        lib.close()


@app.command()
@handle_library_errors
def shelves(
    library_path: Path = typer.Argument(..., help="Path to library"),
):
    """Show predefined and custom shelves with their book counts."""
    lib = _open_library(library_path)
    try:
        table = Table(title="Shelves")
        table.add_column("Shelf", style="green")
        table.add_column("Type", style="magenta")
        table.add_column("Books", style="cyan", justify="right")

        for shelf in lib.predefined_shelves():
            table.add_row(shelf.name, "predefined", str(len(shelf.books)))
        for shelf in lib.custom_shelves():
            table.add_row(shelf.name, "custom", str(len(shelf.books)))

        console.print(table)
    finally:
        lib.close()


@app.command()
@handle_library_errors
def stats(
    library_path: Path = typer.Argument(..., help="Path to library"),
):
    """Show library statistics."""
    lib = _open_library(library_path)
    try:
        library_stats = lib.stats()
        console.print(f"[bold]Total books:[/bold] {library_stats['total_books']}")
        for name, count in library_stats['shelves'].items():
            console.print(f"  {name}: {count}")
        console.print(f"[bold]Custom shelves:[/bold] {library_stats['custom_shelves']}")
    finally:
        lib.close()


@custom_app.command(name="create")
@handle_library_errors
def custom_create(
    name: str = typer.Argument(..., help="Shelf name"),
    library_path: Path = typer.Argument(..., help="Path to library"),
):
    """Create a custom shelf."""
    lib = _open_library(library_path)
    try:
        shelf = lib.create_custom_shelf(name)
        console.print(f"[green]✓ Created shelf '{shelf.name}'[/green]")
    finally:
        lib.close()


@custom_app.command(name="list")
@handle_library_errors
def custom_list(
    library_path: Path = typer.Argument(..., help="Path to library"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Show the books on one shelf"),
):
    """List custom shelves, or the books on one of them."""
    lib = _open_library(library_path)
    try:
        if name:
            books = lib.books_in_custom_shelf(name)
            if not books:
                console.print(f"[yellow]No books on '{name}'[/yellow]")
            else:
                _print_books(books, title=name)
            return

        custom_shelves = lib.custom_shelves()
        if not custom_shelves:
            console.print("[yellow]No custom shelves[/yellow]")
        for shelf in custom_shelves:
            console.print(f"  {shelf.name} ({len(shelf.books)} books)")
    finally:
        lib.close()


@custom_app.command(name="add")
@handle_library_errors
def custom_add(
    book_id: int = typer.Argument(..., help="Book ID"),
    name: str = typer.Argument(..., help="Custom shelf name"),
    library_path: Path = typer.Argument(..., help="Path to library"),
):
    """Put a book on a custom shelf."""
    lib = _open_library(library_path)
    try:
        lib.add_to_custom_shelf(book_id, name)
        console.print(f"[green]✓ Added book {book_id} to '{name}'[/green]")
    finally:
        lib.close()


@custom_app.command(name="delete")
@handle_library_errors
def custom_delete(
    name: str = typer.Argument(..., help="Custom shelf name"),
    library_path: Path = typer.Argument(..., help="Path to library"),
):
    """Delete a custom shelf. Its books stay in the library."""
    lib = _open_library(library_path)
    try:
        lib.delete_custom_shelf(name)
        console.print(f"[green]✓ Deleted shelf '{name}'[/green]")
    finally:
        lib.close()


@app.command()
def serve(
    library_path: Optional[Path] = typer.Argument(None, help="Path to library (defaults from config)"),
    host: Optional[str] = typer.Option(None, "--host", help="Host to bind to (defaults from config)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to bind to (defaults from config)"),
    no_open: bool = typer.Option(False, "--no-open", help="Don't auto-open browser"),
):
    """
    Start the REST API server.

    Examples:
        bookproject serve ~/my-books
        bookproject serve --port 8080
    """
    from .config import load_config
    import webbrowser

    config = load_config()

    if library_path is None:
        if config.library.default_path:
            library_path = Path(config.library.default_path)
        else:
            console.print("[red]Error: No library path specified[/red]")
            console.print("[yellow]Either provide a path or set default with:[/yellow]")
            console.print("[yellow]  bookproject config --library-path ~/my-books[/yellow]")
            raise typer.Exit(code=1)

    if not library_path.exists():
        console.print(f"[red]Error: Library not found: {library_path}[/red]")
        raise typer.Exit(code=1)

    server_host = host if host is not None else config.server.host
    server_port = port if port is not None else config.server.port

    import uvicorn
    from .server import create_app

    console.print(f"[blue]Library: {library_path}[/blue]")
    console.print(f"[green]Server running at http://{server_host}:{server_port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    if config.server.auto_open_browser and not no_open:
        browser_host = "localhost" if server_host == "0.0.0.0" else server_host
        webbrowser.open(f"http://{browser_host}:{server_port}/docs")

    try:
        uvicorn.run(create_app(library_path), host=server_host, port=server_port, log_level="info")
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/yellow]")


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    set_server_host: Optional[str] = typer.Option(None, "--server-host", help="Set web server host"),
    set_server_port: Optional[int] = typer.Option(None, "--server-port", help="Set web server port"),
    set_auto_open: Optional[bool] = typer.Option(None, "--server-auto-open/--no-server-auto-open", help="Auto-open browser on server start"),
    set_library_path: Optional[str] = typer.Option(None, "--library-path", help="Set default library path"),
    set_verbose: Optional[bool] = typer.Option(None, "--cli-verbose/--no-cli-verbose", help="Enable verbose output by default"),
    set_color: Optional[bool] = typer.Option(None, "--cli-color/--no-cli-color", help="Enable colored output by default"),
):
    """
    View or edit configuration.

    Examples:
        bookproject config --show
        bookproject config --library-path ~/my-books --server-port 9000
    """
    from .config import load_config, update_config, get_config_path

    has_settings = any([
        set_server_host, set_server_port, set_auto_open is not None,
        set_library_path, set_verbose is not None, set_color is not None
    ])

    if has_settings:
        update_config(
            server_host=set_server_host,
            server_port=set_server_port,
            server_auto_open=set_auto_open,
            cli_verbose=set_verbose,
            cli_color=set_color,
            library_default_path=set_library_path,
        )
        console.print(f"[green]✓ Configuration saved to {get_config_path()}[/green]")
        if not show:
            return

    current = load_config()
    console.print("\n[bold]bookproject configuration[/bold]")
    console.print(f"[dim]Location: {get_config_path()}[/dim]\n")

    console.print("[bold cyan]Library Settings:[/bold cyan]")
    console.print(f"  Default Path: {current.library.default_path or '[dim]not set[/dim]'}")

    console.print("\n[bold cyan]Server Settings:[/bold cyan]")
    console.print(f"  Host:        {current.server.host}")
    console.print(f"  Port:        {current.server.port}")
    console.print(f"  Auto-open:   {current.server.auto_open_browser}")

    console.print("\n[bold cyan]CLI Settings:[/bold cyan]")
    console.print(f"  Verbose:     {current.cli.verbose}")
    console.print(f"  Color:       {current.cli.color}")


if __name__ == "__main__":
    app()
