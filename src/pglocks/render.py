"""
Console rendering with rich.
"""

from typing import Iterable

from rich.table import Table
from rich.text import Text

from pglocks.models.description import Description
from pglocks.models.export import ConflictMatrix
from pglocks.models.reference import ReferenceItem

CONFLICT_MARK = "✗"
COMPATIBLE_MARK = "·"


def description_text(description: Description) -> Text:
    """Emphasized spans in bold cyan."""
    text = Text()
    for span in description.spans:
        text.append(span.text, style="bold cyan" if span.emphasized else None)
    return text


def _cell(conflict: bool) -> Text:
    if conflict:
        return Text(CONFLICT_MARK, style="bold red")
    return Text(COMPATIBLE_MARK, style="green")


def matrix_table(matrix: ConflictMatrix) -> Table:
    """
    Lock conflict grid.

    Red marks conflicts, green dots compatibility.
    """
    table = Table(title="Lock Conflict Matrix", show_lines=True)
    table.add_column("Lock Type", style="bold", no_wrap=True)
    for lock in matrix.locks:
        table.add_column(lock, justify="center")

    for lock, row in zip(matrix.locks, matrix.cells):
        table.add_row(lock, *(_cell(conflict) for conflict in row))
    return table


def items_table(items: Iterable[ReferenceItem], title: str = "Results") -> Table:
    """Search results: kind, name, locks or lock type, description."""
    table = Table(title=title)
    table.add_column("Kind", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Locks / Type")
    table.add_column("Description")

    for item in items:
        if item.kind == "command":
            detail = ", ".join(item.locks) or "-"
        else:
            detail = f"{item.type} lock"
        table.add_row(item.kind, item.name, detail, item.description)
    return table
