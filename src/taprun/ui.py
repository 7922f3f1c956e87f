"""Operator-facing console output and prompts."""

from __future__ import annotations

from collections.abc import Iterable

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()


def success(message: str) -> None:
    console.print(Text(message, style="bold green"))


def info(message: str) -> None:
    console.print(message, markup=False)


def warn(message: str) -> None:
    console.print(Text(message, style="bold yellow"))


def error(message: str) -> None:
    console.print(Text(message, style="bold red"))


def empty() -> None:
    console.print()


def spaced(label: str, value: str) -> None:
    t = Text()
    t.append(f"  {label} ", style="cyan")
    t.append(value, style="bold white")
    console.print(t)


def confirm(message: str) -> bool:
    """Ask the operator a yes/no question. Blocks until answered."""
    return typer.confirm(message, default=False)


def render_table(title: str, columns: Iterable[str], rows: Iterable[Iterable[str]]) -> None:
    table = Table(title=title, title_justify="left", show_edge=False)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)
