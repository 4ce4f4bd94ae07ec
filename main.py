import logging
import subprocess
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.markup import escape
from rich import box
import typer

from book import Book, OperationResult
from library import Library
from config import settings
from ui_helpers import set_output_mode, print_list_result

APP_NAME = settings.app_name

console = Console()
logger = logging.getLogger(__name__)

# --- Typer CLI Application ---
app = typer.Typer(help="Library CLI", invoke_without_command=True)

@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Listing format: plain | json | rich (default: plain)",
    ),
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level (e.g. INFO, DEBUG)"),
):
    """Global options for the CLI (output mode, logging)."""
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if output and not set_output_mode(output):
        raise typer.BadParameter(f"Unsupported output mode: {output}", param_hint="--output")
    if ctx.invoked_subcommand is None:
        run_menu()

@app.command("menu")
def cli_menu():
    """Start the interactive library menu."""
    run_menu()

@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port (default from API_PORT)"),
):
    """Start the HTTP API with uvicorn."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    print(f"Starting API on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    try:
        subprocess.run(args)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] `uvicorn` could not be started. Make sure it is installed.")

# --- Menu actions ---
def _report(result: OperationResult) -> None:
    style = "green" if result.ok else "yellow"
    console.print(escape(result.message), style=style)

def add_book(lib: Library) -> None:
    """Prompt for a book and register it."""
    title = Prompt.ask("Enter book title")
    author = Prompt.ask("Enter book author", default=settings.default_author)
    book_id = IntPrompt.ask("Enter book ID")
    _report(lib.add_item(Book(book_id, title, author)))

def list_books(lib: Library) -> None:
    print_list_result(lib.list_items(), console=console)

def borrow_book(lib: Library) -> None:
    book_id = IntPrompt.ask("Enter book ID to borrow")
    _report(lib.borrow_book(book_id))

def return_book(lib: Library) -> None:
    book_id = IntPrompt.ask("Enter book ID to return")
    _report(lib.return_book(book_id))

def render_menu() -> None:
    menu_items = [
        ("1", "Add Book", "➕"),
        ("2", "List Books", "📚"),
        ("3", "Borrow Book", "📤"),
        ("4", "Return Book", "📥"),
        ("5", "Exit", "🚪"),
    ]

    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, label, icon in menu_items:
        table.add_row(f"{key}.", f"{icon} {label}")

    console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(0, 2)))

def run_menu(lib: Optional[Library] = None) -> Library:
    """Simple interactive menu over an in-memory Library. Returns the library when the user exits."""
    lib = lib if lib is not None else Library()
    actions = {
        1: add_book,
        2: list_books,
        3: borrow_book,
        4: return_book,
    }

    while True:
        render_menu()
        try:
            choice = IntPrompt.ask("Enter your choice")
            if choice == 5:
                console.print("Exiting Library Management System. Goodbye!")
                break
            action = actions.get(choice)
            if action is None:
                console.print("[yellow]Invalid choice. Please try again.[/]")
            else:
                action(lib)
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, leaving menu")
            console.print("\nGoodbye!")
            break
        print()  # blank line between operations
    return lib

if __name__ == "__main__":
    app()
