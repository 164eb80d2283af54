"""Budget sheet extractor."""

from typing import Optional, Sequence

from condokit.domain.cells import Row, cell_at, number_of, text_of
from condokit.domain.classifiers import classify_expense_category
from condokit.domain.entities import BudgetEntry, Extraction, SheetType
from condokit.utils.amount_parser import to_amount

SKIPPED_MARKERS = ("Total", "TOTAL", "Presupuesto", "CONDOMINIO")

# Smaller numbers in a budget row are percentages or account codes.
MIN_ANNUAL_AMOUNT = 100

CATEGORY_LIMIT = 80


def _annual_amount(row: Row) -> Optional[float]:
    for cell in row[1:]:
        value = number_of(cell)
        if value is not None and value > MIN_ANNUAL_AMOUNT:
            return value
    return None


def entry_from_row(row: Row) -> Optional[BudgetEntry]:
    """Build a budget line from a row, or None if the row is not one."""
    label = text_of(cell_at(row, 0))
    if len(label) <= 3 or any(marker in label for marker in SKIPPED_MARKERS):
        return None
    amount = _annual_amount(row)
    if amount is None:
        return None
    return BudgetEntry(
        category=label[:CATEGORY_LIMIT],
        annual_amount=to_amount(amount),
        department=classify_expense_category(label),
    )


def extract_budget(rows: Sequence[Row]) -> Extraction:
    """Extract budget lines: one category label and its annual amount per row."""
    entries = tuple(entry for entry in map(entry_from_row, rows) if entry is not None)
    return Extraction(sheet_type=SheetType.BUDGET, entities=entries)
