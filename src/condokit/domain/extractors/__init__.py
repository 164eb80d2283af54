"""Per-sheet-type row extractors."""

from typing import Callable, Sequence

from condokit.domain.cells import Row
from condokit.domain.entities import Extraction, SheetType
from condokit.domain.extractors.budget import extract_budget
from condokit.domain.extractors.expenses import extract_expenses
from condokit.domain.extractors.ledger import extract_ledger
from condokit.domain.extractors.movements import extract_movements
from condokit.domain.extractors.units import extract_units

EXTRACTORS: dict[SheetType, Callable[[Sequence[Row]], Extraction]] = {
    SheetType.UNITS: extract_units,
    SheetType.LEDGER: extract_ledger,
    SheetType.EXPENSES: extract_expenses,
    SheetType.MOVEMENTS: extract_movements,
    SheetType.BUDGET: extract_budget,
}


def extract(sheet_type: SheetType, rows: Sequence[Row]) -> Extraction:
    """Run the extractor for a sheet type over the given rows."""
    return EXTRACTORS[sheet_type](rows)


__all__ = [
    "EXTRACTORS",
    "extract",
    "extract_units",
    "extract_ledger",
    "extract_expenses",
    "extract_movements",
    "extract_budget",
]
