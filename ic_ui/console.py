"""Rich console output for the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]


def build_rich_table(model: TableModel, *, show_lines: bool = False) -> Table:
    """Build a Rich Table from a TableModel."""
    table = Table(
        title=model.title,
        show_lines=show_lines,
        box=box.ROUNDED,
        border_style="blue",
        header_style="bold blue",
        title_style="bold blue",
    )
    for column in model.columns:
        table.add_column(column, overflow="fold")
    for row in model.rows:
        table.add_row(*row)
    return table


class Presenter:
    """Messages, tables and markup printed to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def info(self, message: str) -> None:
        self._console.print(Text(message), soft_wrap=True)

    def success(self, message: str) -> None:
        self._console.print(Text(message, style="green"), soft_wrap=True)

    def warning(self, message: str) -> None:
        self._console.print(Text(message, style="yellow"), soft_wrap=True)

    def error(self, message: str) -> None:
        self._console.print(Text(message, style="bold red"), soft_wrap=True)

    def table(self, model: TableModel) -> None:
        self._console.print(build_rich_table(model))

    def markup(self, text: str) -> None:
        # Printed verbatim; rich markup parsing would eat tag-like text.
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)
