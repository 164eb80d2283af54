"""Tests for the units extractor."""

import pytest

from condokit.domain.cells import to_row
from condokit.domain.entities import SheetType, UnitComponent
from condokit.domain.extractors.units import UnitsState, extract_units, share_warning, step


def _rows(raw):
    return [to_row(row) for row in raw]


def test_extract_two_units(units_rows):
    """Owner, component and totals rows build one unit per owner."""
    extraction = extract_units(_rows(units_rows))

    assert extraction.sheet_type == SheetType.UNITS
    assert len(extraction) == 2
    first, second = extraction.entities
    assert first.unit_code == "A-1"
    assert first.owner_name == "Juan Pérez"
    assert first.size_sqm == 107.5
    assert first.ownership_share == 0.45
    assert first.components == (
        UnitComponent(kind="Apartamento", lot="101", size=95.5),
        UnitComponent(kind="Parqueo", lot="P1", size=12),
    )
    assert second.unit_code == "A2"
    assert second.ownership_share == 0.55
    assert sum(u.ownership_share for u in extraction.entities) == pytest.approx(1.0, abs=0.01)
    assert extraction.warnings == ()


def test_percentage_share_is_normalized(units_rows):
    """A share written as 55 becomes 0.55."""
    units_rows[-1] = [None, None, None, 131.4, 55]
    extraction = extract_units(_rows(units_rows))

    assert extraction.entities[1].ownership_share == pytest.approx(0.55)
    assert extraction.warnings == ()


def test_share_from_sixth_cell(units_rows):
    """The share may sit one column further right."""
    units_rows[-1] = [None, None, None, 131.4, None, 0.55]
    extraction = extract_units(_rows(units_rows))

    assert extraction.entities[1].ownership_share == 0.55


def test_share_mismatch_warns(units_rows):
    """Shares far from 100% produce a warning, not an error."""
    units_rows[-1] = [None, None, None, 131.4, 0.35]
    extraction = extract_units(_rows(units_rows))

    assert len(extraction) == 2
    assert len(extraction.warnings) == 1
    assert "80.00%" in extraction.warnings[0]


def test_unit_without_share_is_dropped(units_rows):
    """An owner whose totals row never appears is not emitted."""
    rows = units_rows[:5] + units_rows[6:]
    extraction = extract_units(_rows(rows))

    assert [u.unit_code for u in extraction.entities] == ["A2"]


def test_small_totals_are_ignored():
    """Totals rows need a size above 50 m²."""
    rows = _rows([["Ana Ruiz", "B-1"], [None, None, None, 40, 0.5]])
    assert extract_units(rows).entities == ()


def test_no_units():
    extraction = extract_units(_rows([["Hoja vacía"], [], None]))
    assert len(extraction) == 0
    assert extraction.warnings == ()


def test_step_is_a_pure_transition():
    """Each row produces a new state; the previous state is untouched."""
    start = UnitsState()
    after_owner = step(start, to_row(["Ana Ruiz", "B-1"]))

    assert start.pending is None
    assert after_owner.pending.unit_code == "B-1"
    assert after_owner.units == ()


def test_notes_list_components(units_rows):
    unit = extract_units(_rows(units_rows)).entities[0]
    assert unit.notes == "Apartamento 101: 95.5 m²\nParqueo P1: 12 m²"


def test_share_warning_tolerance(units_rows):
    units = extract_units(_rows(units_rows)).entities
    assert share_warning(units) is None


def test_numeric_component_kind():
    rows = _rows(
        [
            ["Ana Ruiz", "B-1"],
            [None, 1, 201, 90],
            [None, None, None, 90, 1],
        ]
    )
    unit = extract_units(rows).entities[0]

    assert unit.components == (UnitComponent(kind="1", lot="201", size=90),)
