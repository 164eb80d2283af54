"""Sheet-type detection."""

import re
import unicodedata
from typing import Optional, Sequence

from condokit.domain.cells import Row, cell_at, text_of
from condokit.domain.entities import SheetType
from condokit.domain.extractors.movements import has_reserve_fund, has_side_by_side_accounts

# Checked in this order; the first type with a matching keyword wins.
SHEET_NAME_KEYWORDS: list[tuple[SheetType, tuple[str, ...]]] = [
    (SheetType.UNITS, ("distribucion", "units", "propietario")),
    (SheetType.BUDGET, ("presupuesto", "budget")),
    (SheetType.EXPENSES, ("gastos detall", "expense")),
    (SheetType.LEDGER, ("cierre-prop", "ledger")),
    (SheetType.MOVEMENTS, ("caja chica", "banco", "fondo de reserva")),
]

# Individual unit sheets: "A1", "B12".
UNIT_SHEET_PATTERN = re.compile(r"^[a-z]\d+$")


def fold_name(name: str) -> str:
    """Lower-case a name and strip accents ("Distribución" -> "distribucion")."""
    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def detect_sheet_type(name: str, rows: Sequence[Row] = ()) -> Optional[SheetType]:
    """Decide which import pipeline applies to a sheet.

    The sheet name decides. Row content is only consulted when the name
    matches nothing.

    Args:
        name: Sheet display name
        rows: Sheet rows

    Returns:
        Sheet type, or None if the sheet is not recognized
    """
    folded = fold_name(name)
    for sheet_type, keywords in SHEET_NAME_KEYWORDS:
        if any(keyword in folded for keyword in keywords):
            return sheet_type
    if UNIT_SHEET_PATTERN.match(folded):
        return SheetType.LEDGER
    return _detect_from_rows(rows)


def _detect_from_rows(rows: Sequence[Row]) -> Optional[SheetType]:
    if has_side_by_side_accounts(rows) or has_reserve_fund(rows):
        return SheetType.MOVEMENTS
    for row in rows:
        if fold_name(text_of(cell_at(row, 0))).startswith("apartamento"):
            return SheetType.LEDGER
    return None


def resolve_sheet_type(
    name: str, rows: Sequence[Row], forced_type: Optional[SheetType] = None
) -> Optional[SheetType]:
    """Return the forced type when given, otherwise the detected one."""
    if forced_type is not None:
        return forced_type
    return detect_sheet_type(name, rows)
