"""Units extractor.

A units sheet lists each owner on one row, followed by one row per physical
component (apartment, parking, storage) and a totals row carrying the unit's
size and ownership share:

    | Owner name  | A-1       |     |      |        |
    |             | Apartment | 101 | 95.5 |        |
    |             | Parking   | P1  | 12.0 |        |
    |             |           |     | 107.5| 0.1432 |

The scan is a fold over the rows. A pending unit is emitted when the next
owner row starts or when the input ends, and only if it received a positive
share.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from condokit.domain.cells import Row, cell_at, display, is_blank, number_of, text_of
from condokit.domain.entities import Extraction, SheetType, Unit, UnitComponent

UNIT_CODE_PATTERN = re.compile(r"^[A-Z]-?\d+$", re.IGNORECASE)

# Totals rows carry the unit size; smaller numbers are stray counters.
MIN_TOTAL_SIZE = 50

SHARE_TOLERANCE = 0.01


@dataclass(frozen=True)
class _PendingUnit:
    owner_name: str
    unit_code: str
    size_sqm: float = 0.0
    ownership_share: float = 0.0
    components: tuple[UnitComponent, ...] = ()

    def to_unit(self) -> Unit:
        return Unit(
            unit_code=self.unit_code,
            owner_name=self.owner_name,
            size_sqm=self.size_sqm,
            ownership_share=self.ownership_share,
            components=self.components,
        )


@dataclass(frozen=True)
class UnitsState:
    """Accumulator carried across the units scan."""

    units: tuple[Unit, ...] = ()
    pending: Optional[_PendingUnit] = None


def _flush(state: UnitsState) -> tuple[Unit, ...]:
    pending = state.pending
    if pending is not None and pending.unit_code and pending.ownership_share > 0:
        return state.units + (pending.to_unit(),)
    return state.units


def _is_owner_row(row: Row) -> bool:
    return len(text_of(cell_at(row, 0))) > 3 and bool(
        UNIT_CODE_PATTERN.match(text_of(cell_at(row, 1)))
    )


def _is_component_row(row: Row) -> bool:
    lot = cell_at(row, 2)
    return (
        is_blank(cell_at(row, 0))
        and not is_blank(cell_at(row, 1))
        and not is_blank(lot)
        and number_of(lot) != 0
        and number_of(cell_at(row, 3)) is not None
    )


def _is_totals_row(row: Row) -> bool:
    size = number_of(cell_at(row, 3))
    return (
        is_blank(cell_at(row, 0))
        and is_blank(cell_at(row, 1))
        and size is not None
        and size > MIN_TOTAL_SIZE
    )


def _share_from(row: Row) -> float:
    share = 0.0
    for index in (4, 5):
        value = number_of(cell_at(row, index))
        if value:
            share = value
            break
    # Shares written as percentages ("14.32") become fractions.
    if share > 1:
        share = share / 100
    return share


def step(state: UnitsState, row: Row) -> UnitsState:
    """Advance the units scan by one row."""
    if not row:
        return state

    if _is_owner_row(row):
        return UnitsState(
            units=_flush(state),
            pending=_PendingUnit(
                owner_name=text_of(cell_at(row, 0)),
                unit_code=text_of(cell_at(row, 1)),
            ),
        )

    if state.pending is None:
        return state

    if _is_component_row(row):
        component = UnitComponent(
            kind=display(cell_at(row, 1)),
            lot=display(cell_at(row, 2)),
            size=number_of(cell_at(row, 3)),
        )
        return replace(
            state,
            pending=replace(state.pending, components=state.pending.components + (component,)),
        )

    if _is_totals_row(row):
        return replace(
            state,
            pending=replace(
                state.pending,
                size_sqm=number_of(cell_at(row, 3)),
                ownership_share=_share_from(row),
            ),
        )

    return state


def share_warning(units: Sequence[Unit]) -> Optional[str]:
    """Return a warning when ownership shares do not add up to ~100%."""
    total = sum(unit.ownership_share for unit in units)
    if abs(total - 1) > SHARE_TOLERANCE:
        return f"Ownership shares sum to {total * 100:.2f}% (expected ~100%)"
    return None


def extract_units(rows: Sequence[Row]) -> Extraction:
    """Extract ownership units from a units sheet.

    Args:
        rows: Sheet rows

    Returns:
        Extraction with the units and, when shares do not sum to ~100%,
        a warning
    """
    state = UnitsState()
    for row in rows:
        state = step(state, row)
    units = _flush(state)

    warnings = ()
    warning = share_warning(units) if units else None
    if warning:
        warnings = (warning,)
    return Extraction(sheet_type=SheetType.UNITS, entities=units, warnings=warnings)
