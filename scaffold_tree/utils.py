"""Shared console helpers for scaffold_tree.

Rich-based reporting used by the CLI and by the renderer's verbose trace.
The engine itself stays silent unless verbose output is requested.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def build_path_tree(paths: Iterable[PurePosixPath], label: str = ".") -> Tree:
    """Arrange relative paths into a ``rich.tree.Tree`` for display."""
    root = Tree(f"[bold]{label}[/bold]")
    nodes: dict[tuple[str, ...], Tree] = {(): root}
    for path in sorted(paths, key=lambda p: p.parts):
        for depth in range(1, len(path.parts) + 1):
            key = path.parts[:depth]
            if key not in nodes:
                is_leaf = depth == len(path.parts)
                name = escape(key[-1]) if is_leaf else f"[blue]{escape(key[-1])}/[/blue]"
                nodes[key] = nodes[key[:-1]].add(name)
    return root


def print_file_tree(paths: Iterable[PurePosixPath], label: str = ".") -> None:
    """Print the given paths as a tree."""
    console.print(build_path_tree(paths, label))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
