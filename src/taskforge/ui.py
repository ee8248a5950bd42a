# src/taskforge/ui.py

from typing import Dict

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from sqlalchemy import Table as SQLTable

# --- Global Console ---
# All modules will import this single console instance.
console = Console()


def display_table_structure(table: SQLTable) -> None:
    """Prints table columns and indexes using a rich Table."""

    structure_table = Table(
        title=f"[bold]{table.name}[/bold]",
        box=None,
        padding=(0, 1),
        show_header=False,
        show_edge=False,
    )
    structure_table.add_column("Name", style="cyan", no_wrap=True, width=24)
    structure_table.add_column("Type", style="green", width=32)
    structure_table.add_column("Details", style="white")

    for column in table.columns:
        col_name = f"{column.name}{'*' if not column.nullable else ''}"
        details = []
        if column.primary_key:
            details.append("[yellow]PK[/yellow]")
        if column.index:
            details.append("[blue]indexed[/blue]")
        structure_table.add_row(col_name, str(column.type), " ".join(details))

    for index in sorted(table.indexes, key=lambda i: i.name or ""):
        columns = ", ".join(c.name for c in index.columns)
        structure_table.add_row(f"[dim]{index.name}[/dim]", f"[dim]({columns})[/dim]", "[magenta]INDEX[/magenta]")

    console.print(structure_table)
    console.print()


def display_distribution(title: str, counts: Dict[str, int]) -> None:
    """Prints a value -> count breakdown."""
    table = Table(title=title, show_edge=False)
    table.add_column("Value", style="cyan")
    table.add_column("Count", justify="right", style="bold yellow")
    for value, count in counts.items():
        table.add_row(value, str(count))
    console.print(table)


def print_welcome(project_name: str, version: str, host: str, port: int, docs_path: str = "/api-docs") -> None:
    """Prints a welcome message using a rich Panel."""
    docs_url = f"http://{host}:{port}{docs_path}"
    message = Text.from_markup(
        f"API Documentation available at [link={docs_url}]{docs_url}[/link]"
    )
    panel = Panel(
        Align.center(message, vertical="middle"),
        title=f"[bold green]{project_name} v{version}[/bold green]",
        border_style="blue",
        padding=(1, 2),
    )
    console.print(panel)
