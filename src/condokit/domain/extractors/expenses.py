"""Expense sheet extractor.

Expense sheets group lines under section headers ("LUZ", "Honorarios
administrador", ...). A line inherits its category from the header above it,
not from its own description.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from condokit.domain.cells import Row, cell_at, number_of, text_of
from condokit.domain.classifiers import classify_expense_category
from condokit.domain.entities import ExpenseEntry, Extraction, SheetType
from condokit.utils.amount_parser import to_amount
from condokit.utils.serial_dates import get_quarter, get_year, serial_to_date

TOTAL_MARKERS = ("Total", "TOTAL")
# Report titles are never section headers.
TITLE_MARKERS = TOTAL_MARKERS + ("Estado", "CONDOMINIO")

DESCRIPTION_LIMIT = 100


@dataclass(frozen=True)
class ExpensesState:
    """Accumulator carried across the expenses scan."""

    entries: tuple[ExpenseEntry, ...] = ()
    header: str = ""


def _is_header_row(row: Row) -> bool:
    label = text_of(cell_at(row, 0))
    return (
        len(label) > 3
        and not any(marker in label for marker in TITLE_MARKERS)
        and number_of(cell_at(row, 1)) is None
    )


def _entry_from(row: Row, header: str) -> Optional[ExpenseEntry]:
    description = text_of(cell_at(row, 0))
    serial = number_of(cell_at(row, 1))
    amount = number_of(cell_at(row, 2))
    if len(description) <= 3 or serial is None or amount is None:
        return None
    if any(marker in description for marker in TOTAL_MARKERS):
        return None

    expense_date = serial_to_date(serial)
    if expense_date is None:
        return None

    return ExpenseEntry(
        description=description[:DESCRIPTION_LIMIT],
        date=expense_date,
        amount=abs(to_amount(amount)),
        category=classify_expense_category(header),
        quarter=get_quarter(expense_date),
        fiscal_year=get_year(expense_date),
        header=header,
    )


def step(state: ExpensesState, row: Row) -> ExpensesState:
    """Advance the expenses scan by one row."""
    if not row:
        return state

    if _is_header_row(row):
        return replace(state, header=text_of(cell_at(row, 0)))

    entry = _entry_from(row, state.header)
    if entry is None:
        return state
    return replace(state, entries=state.entries + (entry,))


def extract_expenses(rows: Sequence[Row]) -> Extraction:
    """Extract expense lines, categorized by their section header."""
    state = ExpensesState()
    for row in rows:
        state = step(state, row)
    return Extraction(sheet_type=SheetType.EXPENSES, entities=state.entries)
