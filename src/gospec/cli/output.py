"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
import re
from typing import Any, List, Optional, Sequence

import typer
from rich.console import Console as RichConsole
from rich.table import Table

from gospec.cli.config import CLIConfig

MARKUP = re.compile(r"\[/?[a-z ]*\]")


class MachineAwareConsole:
    """
    A Console wrapper that automatically adapts output based on machine mode.
    Acts as a drop-in replacement for rich.console.Console.
    """

    def __init__(self):
        self._rich_console = RichConsole()

    def print(self, *args, **kwargs):
        """Print that respects machine mode."""
        if not CLIConfig.is_machine_mode():
            self._rich_console.print(*args, **kwargs)
            return

        for arg in args:
            if isinstance(arg, str):
                plain = MARKUP.sub("", arg).strip()
                if plain:
                    typer.echo(plain)
            elif hasattr(arg, "__rich__") or isinstance(arg, Table):
                # Renderables have no plain form; callers use print_table/print_json
                pass
            elif arg:
                typer.echo(str(arg))

    def __getattr__(self, name):
        """Delegate all other attributes to the rich console."""
        return getattr(self._rich_console, name)


_console = MachineAwareConsole()


def get_console() -> MachineAwareConsole:
    return _console


def echo(message: str = "", **kwargs) -> None:
    typer.echo(message, **kwargs)


def print_table(title: str, headers: Sequence[str], rows: List[Sequence[Any]]) -> None:
    """
    Print tabular data. Human mode renders a rich table; machine mode prints
    one tab-separated line per row, headers first.
    """
    if CLIConfig.is_machine_mode():
        echo("\t".join(headers))
        for row in rows:
            echo("\t".join(str(cell) for cell in row))
        return

    table = Table(title=title)
    styles = ["cyan", "magenta", "green", "yellow"]
    for position, header in enumerate(headers):
        table.add_column(header, style=styles[position % len(styles)])
    for row in rows:
        table.add_row(*(str(cell) for cell in row))
    _console.print(table)


def print_json(data: Any, indent: Optional[Any] = None) -> None:
    """
    Print JSON data. Minified in machine mode unless an indent is given,
    pretty printed in human mode.
    """
    if indent is None and not CLIConfig.is_machine_mode():
        indent = 2
    if indent is None:
        echo(json.dumps(data, separators=(",", ":")))
    else:
        echo(json.dumps(data, indent=indent))


def print_error(message: str) -> None:
    """Print an error message on stderr."""
    if CLIConfig.is_machine_mode():
        typer.echo(f"Error: {message}", err=True)
    else:
        typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
