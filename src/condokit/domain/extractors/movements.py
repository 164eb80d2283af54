"""Cash and bank movement extractor.

Two sheet shapes are recognized, and a sheet may match both:

* side by side: petty cash ("Caja Chica") and the bank account share one
  sheet, each in its own block of columns starting at a fixed offset;
* reserve fund: a single "Fondo de Reservas" account with its own layout.

Every account keeps its own running balance. An opening-balance row sets the
balance outright; any other row moves it by the row's credit or debit.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from condokit.domain.cells import Row, cell_at, number_of, row_contains, text_of
from condokit.domain.classifiers import classify_movement_category
from condokit.domain.entities import Extraction, MovementEntry, MovementKind, SheetType
from condokit.utils.amount_parser import round_amount, to_amount
from condokit.utils.serial_dates import get_year, serial_to_date

PETTY_CASH_MARKER = "caja chica"
BANK_MARKER = "banco"
RESERVE_FUND_MARKER = "fondo de reservas"

OPENING_BALANCE_MARKER = "Saldo balance"
COLUMN_TITLE = "Descripción"
SIDE_BY_SIDE_SKIPPED = ("TOTAL", "BALANCE AL", "Saldo banco", "Saldo efectivo", "Estado ")
RESERVE_FUND_TITLE = "FONDO DE RESERVAS"

DESCRIPTION_LIMIT = 100


@dataclass(frozen=True)
class AccountLayout:
    """Column positions of one account's block within a sheet."""

    account_key: str
    description: int
    date: int
    debit: int
    credit: int


def side_by_side_layout(account_key: str, offset: int) -> AccountLayout:
    return AccountLayout(
        account_key=account_key,
        description=offset,
        date=offset + 1,
        debit=offset + 3,
        credit=offset + 4,
    )


SIDE_BY_SIDE_ACCOUNTS = (
    side_by_side_layout("cajaChica", 1),
    side_by_side_layout("bancoPopular", 8),
)

RESERVE_FUND_ACCOUNT = AccountLayout(
    account_key="fondoReservas", description=1, date=2, debit=4, credit=5
)


@dataclass(frozen=True)
class AccountState:
    """Accumulator for one account's scan."""

    entries: tuple[MovementEntry, ...] = ()
    balance: Decimal = Decimal("0")


def has_side_by_side_accounts(rows: Sequence[Row]) -> bool:
    """Return True if some row mentions both petty cash and the bank."""
    return any(
        row_contains(row, PETTY_CASH_MARKER) and row_contains(row, BANK_MARKER)
        for row in rows
    )


def has_reserve_fund(rows: Sequence[Row]) -> bool:
    """Return True if any cell mentions the reserve fund."""
    return any(row_contains(row, RESERVE_FUND_MARKER) for row in rows)


def _movement(
    description: str,
    serial: float,
    kind: MovementKind,
    amount: Decimal,
    balance: Decimal,
    account_key: str,
) -> Optional[MovementEntry]:
    movement_date = serial_to_date(serial)
    if movement_date is None:
        return None
    return MovementEntry(
        description=description[:DESCRIPTION_LIMIT],
        date=movement_date,
        kind=kind,
        amount=amount,
        running_balance=round_amount(balance),
        category=classify_movement_category(description),
        fiscal_year=get_year(movement_date),
        account_key=account_key,
    )


def _amount_at(row: Row, index: int) -> Optional[Decimal]:
    value = number_of(cell_at(row, index))
    return to_amount(value) if value is not None else None


def _apply(state: AccountState, entry: Optional[MovementEntry], balance: Decimal) -> AccountState:
    if entry is None:
        return state
    return AccountState(entries=state.entries + (entry,), balance=balance)


def side_by_side_step(state: AccountState, row: Row, layout: AccountLayout) -> AccountState:
    """Advance one side-by-side account's scan by one row."""
    description = text_of(cell_at(row, layout.description))
    if len(description) < 3 or description == COLUMN_TITLE:
        return state
    if any(marker in description for marker in SIDE_BY_SIDE_SKIPPED):
        return state
    serial = number_of(cell_at(row, layout.date))
    if serial is None or serial_to_date(serial) is None:
        return state

    credit = _amount_at(row, layout.credit)
    debit = _amount_at(row, layout.debit) or Decimal("0")

    if OPENING_BALANCE_MARKER in description:
        kind = MovementKind.OPENING_BALANCE
        balance = credit or Decimal("0")
        amount = balance
    elif credit is not None and credit > 0:
        kind = MovementKind.CREDIT
        balance = state.balance + credit
        amount = abs(credit)
    else:
        # Debits may be written signed or unsigned; the balance takes them as written.
        kind = MovementKind.DEBIT
        balance = state.balance + debit
        amount = abs(debit)

    entry = _movement(description, serial, kind, amount, balance, layout.account_key)
    return _apply(state, entry, balance)


def reserve_fund_step(state: AccountState, row: Row, layout: AccountLayout = RESERVE_FUND_ACCOUNT) -> AccountState:
    """Advance the reserve fund scan by one row."""
    description = text_of(cell_at(row, layout.description))
    if len(description) < 3 or description == COLUMN_TITLE or RESERVE_FUND_TITLE in description:
        return state
    serial = number_of(cell_at(row, layout.date))
    if serial is None or serial_to_date(serial) is None:
        return state

    credit = _amount_at(row, layout.credit)
    debit = _amount_at(row, layout.debit)

    if OPENING_BALANCE_MARKER in description:
        kind = MovementKind.OPENING_BALANCE
        balance = credit or Decimal("0")
        amount = balance
    elif debit is not None and debit < 0:
        kind = MovementKind.DEBIT
        balance = state.balance + debit
        amount = abs(debit)
    elif credit is not None and credit > 0:
        kind = MovementKind.CREDIT
        balance = state.balance + credit
        amount = credit
    else:
        return state

    entry = _movement(description, serial, kind, amount, balance, layout.account_key)
    return _apply(state, entry, balance)


def _scan(rows: Sequence[Row], step, layout: AccountLayout) -> tuple[MovementEntry, ...]:
    state = AccountState()
    for row in rows:
        if row:
            state = step(state, row, layout)
    return state.entries


def extract_movements(rows: Sequence[Row]) -> Extraction:
    """Extract account movements with running balances.

    Args:
        rows: Sheet rows

    Returns:
        Extraction with side-by-side account movements first (petty cash,
        then bank), followed by reserve fund movements
    """
    entries: tuple[MovementEntry, ...] = ()
    if has_side_by_side_accounts(rows):
        for layout in SIDE_BY_SIDE_ACCOUNTS:
            entries += _scan(rows, side_by_side_step, layout)
    if has_reserve_fund(rows):
        entries += _scan(rows, reserve_fund_step, RESERVE_FUND_ACCOUNT)
    return Extraction(sheet_type=SheetType.MOVEMENTS, entities=entries)
