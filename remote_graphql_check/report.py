"""Output formatting and reporting."""

from dataclasses import asdict, dataclass
from typing import Optional

from rich.console import Console
from rich.table import Table

from . import utils

console = Console()


@dataclass
class CheckSummary:
    """Outcome of one compatibility check."""

    url: str
    parent: str
    operation: str
    compatible: bool
    error_type: Optional[str] = None
    message: Optional[str] = None


def emit(summary: CheckSummary, fmt: str) -> None:
    """
    Output a check summary.

    Args:
        summary: Check result
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(utils.to_json(asdict(summary)))
        return

    console.print("\n[bold cyan]Remote GraphQL Check[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Endpoint", summary.url)
    table.add_row("Field", summary.parent)
    table.add_row("Operation", summary.operation)
    console.print(table)

    if summary.compatible:
        console.print("\n[green]✓ Compatible with remote schema[/green]\n")
    else:
        console.print(f"\n[red]✖[/red] [dim]{summary.error_type}[/dim]: {summary.message}\n")


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, config init).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
