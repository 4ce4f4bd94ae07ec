import os
import json
from typing import List, Any
from rich.console import Console
from rich.table import Table
from rich.markup import escape

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

OUTPUT_MODES = {"plain", "json", "rich"}

def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    return False

def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"

def print_list_result(books: List[Any], console: Console | None = None) -> None:
    """Print the book list according to the current output mode.
    - plain: one '<id> - <title> by <author> [Status]' line per book, or 'No books in library.'
    - json: JSON array of book payloads
    - rich: Rich table
    """
    console = console or Console()
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status")
        for b in books:
            status = "[green]Available[/]" if b.is_available() else "[yellow]Borrowed[/]"
            table.add_row(str(b.id), escape(b.title), escape(b.author), status)
        console.print(table)
    else:
        for b in books:
            print(b)
