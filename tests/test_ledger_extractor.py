"""Tests for the unit ledger extractor."""

from decimal import Decimal
from datetime import date

from conftest import FEB_15_2024, JAN_15_2024
from condokit.domain.cells import to_row
from condokit.domain.entities import LedgerCategory, LedgerType
from condokit.domain.extractors.ledger import canonical_unit_code, extract_ledger


def _rows(raw):
    return [to_row(row) for row in raw]


def test_extract_ledger_entries(ledger_rows):
    """Only dated entries after the threshold and outside markers remain."""
    entries = extract_ledger(_rows(ledger_rows)).entities

    assert len(entries) == 2
    fee, payment = entries
    assert fee.unit_code == "A-1"
    assert fee.description == "Gastos comunes 1er trimestre"
    assert fee.date == date(2024, 1, 15)
    assert fee.debit == Decimal("3000")
    assert fee.credit == Decimal("0")
    assert fee.running_balance == Decimal("4500")
    assert fee.entry_type == LedgerType.FEE_CALL
    assert fee.category == LedgerCategory.COMMON_CHARGES
    assert fee.fiscal_year == 2024

    assert payment.credit == Decimal("3000")
    assert payment.entry_type == LedgerType.PAYMENT_RECEIVED
    assert payment.category == LedgerCategory.PAYMENT


def test_old_entries_and_opening_balance_excluded():
    rows = _rows(
        [
            ["Apartamento A-1"],
            [None, "Gastos comunes 2022", 44927, 3000],
            [None, "SALDO ANTERIOR", JAN_15_2024, None, None, 1500],
        ]
    )
    assert extract_ledger(rows).entities == ()


def test_rows_before_any_unit_are_ignored():
    rows = _rows([[None, "Pago por transferencia", JAN_15_2024, None, 500]])
    assert extract_ledger(rows).entities == ()


def test_standalone_unit_code_switches_unit():
    rows = _rows(
        [
            ["Apartamento A-1"],
            [None, "Gastos comunes trimestre", JAN_15_2024, 3000],
            ["a2"],
            [None, "Multa por ruido", FEB_15_2024, 500],
        ]
    )
    entries = extract_ledger(rows).entities

    assert [e.unit_code for e in entries] == ["A-1", "A-2"]
    assert entries[1].entry_type == LedgerType.LATE_FEE


def test_date_falls_back_to_second_cell():
    """When the third cell has no date, the second cell is used."""
    rows = _rows([["Unit B-3"], ["Cuota extraordinaria", JAN_15_2024, None, 7000]])
    entries = extract_ledger(rows).entities

    assert len(entries) == 1
    assert entries[0].unit_code == "B-3"
    assert entries[0].description == "Cuota extraordinaria"
    assert entries[0].debit == Decimal("7000")
    assert entries[0].entry_type == LedgerType.WORK_ASSESSMENT


def test_short_descriptions_and_undated_rows_skipped():
    rows = _rows(
        [
            ["Apartamento A-1"],
            [None, "ok", JAN_15_2024, 10],
            [None, "Gastos comunes", "15/01/2024", 10],
        ]
    )
    assert extract_ledger(rows).entities == ()


def test_description_truncated():
    rows = _rows([["Apartamento A-1"], [None, "x" * 150, JAN_15_2024, 10]])
    assert len(extract_ledger(rows).entities[0].description) == 100


def test_missing_balance_is_none():
    rows = _rows([["Apartamento A-1"], [None, "Ajuste redondeo", JAN_15_2024, -1.5]])
    entry = extract_ledger(rows).entities[0]

    assert entry.running_balance is None
    assert entry.debit == Decimal("1.5")


def test_canonical_unit_code():
    assert canonical_unit_code("a1") == "A-1"
    assert canonical_unit_code("A-1") == "A-1"
    assert canonical_unit_code("b12") == "B-12"
    assert canonical_unit_code("A-10") == "A-10"
    assert canonical_unit_code("b-12") == "B-12"
    assert canonical_unit_code(" a10 ") == "A-10"


def test_multi_digit_unit_codes():
    rows = _rows([["Apartamento A-10"], [None, "Gastos comunes trimestre", JAN_15_2024, 3000]])
    entry = extract_ledger(rows).entities[0]

    assert entry.unit_code == "A-10"


def test_unit_word_without_code_is_not_a_header():
    """Descriptions starting with "Unit" do not switch the current unit."""
    rows = _rows(
        [
            ["Unit B-3"],
            ["Unit maintenance fee", JAN_15_2024, None, 250],
        ]
    )
    entries = extract_ledger(rows).entities

    assert len(entries) == 1
    assert entries[0].unit_code == "B-3"
    assert entries[0].description == "Unit maintenance fee"
