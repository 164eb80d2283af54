"""Unit ledger extractor."""

import re
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from condokit.domain.cells import Row, cell_at, number_of, text_of
from condokit.domain.classifiers import classify_ledger_category, classify_ledger_type
from condokit.domain.entities import Extraction, LedgerEntry, SheetType
from condokit.utils.amount_parser import to_amount
from condokit.utils.serial_dates import get_year, serial_to_date

# Serial 45000 is 2023-03-15; older dates are carried-over history.
MIN_LEDGER_SERIAL = 45000

# "Apartamento" alone opens a unit; "Unit" only when a code follows it.
UNIT_HEADER_PATTERN = re.compile(r"^(?:apartamento\b|unit\s+[A-Z]-?\d+\b)", re.IGNORECASE)
UNIT_CODE_PATTERN = re.compile(r"^([A-Z])-?(\d+)$", re.IGNORECASE)
UNIT_CODE_SEARCH = re.compile(r"[A-Z]-?\d+", re.IGNORECASE)

# Case-sensitive: lower-case "total" appears in real charge descriptions.
SKIPPED_MARKERS = ("SALDO ANTERIOR", "BALANCE AL", "TOTAL")

DESCRIPTION_LIMIT = 100


def canonical_unit_code(code: str) -> str:
    """Normalize a unit code to "Letter-Digits" upper case ("a1" -> "A-1")."""
    code = code.strip()
    match = UNIT_CODE_PATTERN.match(code)
    if match is None:
        return code.upper()
    letter, digits = match.groups()
    return f"{letter.upper()}-{digits}"


@dataclass(frozen=True)
class LedgerState:
    """Accumulator carried across the ledger scan."""

    entries: tuple[LedgerEntry, ...] = ()
    current_unit: Optional[str] = None


def _unit_from_header(row: Row) -> Optional[str]:
    first = text_of(cell_at(row, 0))
    if UNIT_HEADER_PATTERN.match(first) or UNIT_CODE_PATTERN.match(first):
        match = UNIT_CODE_SEARCH.search(first)
        return match.group(0) if match else first
    return None


def _date_serial(row: Row) -> Optional[float]:
    for index in (2, 1):
        serial = number_of(cell_at(row, index))
        if serial:
            return serial
    return None


def _magnitude(row: Row, index: int):
    value = number_of(cell_at(row, index))
    return abs(to_amount(value)) if value is not None else to_amount(0)


def _entry_from(row: Row, unit: str) -> Optional[LedgerEntry]:
    description = text_of(cell_at(row, 1)) or text_of(cell_at(row, 0))
    if len(description) < 3:
        return None

    serial = _date_serial(row)
    if serial is None or serial < MIN_LEDGER_SERIAL:
        return None
    if any(marker in description for marker in SKIPPED_MARKERS):
        return None

    entry_date = serial_to_date(serial)
    if entry_date is None:
        return None

    balance = number_of(cell_at(row, 5))
    return LedgerEntry(
        unit_code=canonical_unit_code(unit),
        description=description[:DESCRIPTION_LIMIT],
        date=entry_date,
        debit=_magnitude(row, 3),
        credit=_magnitude(row, 4),
        running_balance=to_amount(balance) if balance is not None else None,
        entry_type=classify_ledger_type(description),
        category=classify_ledger_category(description),
        fiscal_year=get_year(entry_date),
    )


def step(state: LedgerState, row: Row) -> LedgerState:
    """Advance the ledger scan by one row."""
    if not row:
        return state

    unit = _unit_from_header(row)
    if unit is not None:
        return replace(state, current_unit=unit)

    if state.current_unit is None:
        return state

    entry = _entry_from(row, state.current_unit)
    if entry is None:
        return state
    return replace(state, entries=state.entries + (entry,))


def extract_ledger(rows: Sequence[Row]) -> Extraction:
    """Extract unit ledger entries.

    Rows before the first unit header, undated rows, rows dated before
    2023 and opening-balance/total lines are skipped.
    """
    state = LedgerState()
    for row in rows:
        state = step(state, row)
    return Extraction(sheet_type=SheetType.LEDGER, entities=state.entries)
