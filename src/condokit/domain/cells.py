"""Tagged spreadsheet cell values.

Sheets arrive as ordered rows of heterogeneous cells. Each cell is exactly one
of Empty, Number or Text, and extractors test for the variant they need
instead of coercing values implicitly.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence, Union

from condokit.utils.serial_dates import date_to_serial


@dataclass(frozen=True)
class Empty:
    """A blank or absent cell."""


@dataclass(frozen=True)
class Number:
    """A numeric cell. Date-formatted cells are stored as date serials."""

    value: float


@dataclass(frozen=True)
class Text:
    """A text cell."""

    value: str


Cell = Union[Empty, Number, Text]
Row = tuple[Cell, ...]

EMPTY = Empty()


def to_cell(value: Any) -> Cell:
    """Wrap a raw Python value as a tagged cell."""
    if value is None:
        return EMPTY
    if isinstance(value, (Empty, Number, Text)):
        return value
    if isinstance(value, bool):
        return Text(str(value))
    if isinstance(value, (int, float)):
        return Number(float(value))
    if isinstance(value, (datetime, date)):
        return Number(date_to_serial(value))
    if isinstance(value, str):
        return Text(value) if value else EMPTY
    return Text(str(value))


def to_row(values: Optional[Iterable[Any]]) -> Row:
    """Wrap a sequence of raw values as a row of tagged cells."""
    if values is None:
        return ()
    return tuple(to_cell(value) for value in values)


def cell_at(row: Sequence[Cell], index: int) -> Cell:
    """Return the cell at index, or Empty when the row is shorter."""
    if 0 <= index < len(row):
        return row[index]
    return EMPTY


def text_of(cell: Cell) -> str:
    """Return the stripped text of a Text cell, or "" for other variants."""
    if isinstance(cell, Text):
        return cell.value.strip()
    return ""


def number_of(cell: Cell) -> Optional[float]:
    """Return the value of a Number cell, or None for other variants."""
    if isinstance(cell, Number):
        return cell.value
    return None


def is_blank(cell: Cell) -> bool:
    """Return True for Empty cells and whitespace-only Text cells."""
    if isinstance(cell, Empty):
        return True
    if isinstance(cell, Text):
        return not cell.value.strip()
    return False


def display(cell: Cell) -> str:
    """Render a cell as text, printing integral numbers without a decimal part."""
    if isinstance(cell, Text):
        return cell.value.strip()
    if isinstance(cell, Number):
        if cell.value.is_integer():
            return str(int(cell.value))
        return str(cell.value)
    return ""


def row_contains(row: Sequence[Cell], needle: str) -> bool:
    """Return True if any cell's lower-cased text contains needle."""
    return any(needle in display(cell).lower() for cell in row)
