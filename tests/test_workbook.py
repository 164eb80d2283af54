"""Tests for workbook loading."""

from datetime import datetime

import pytest

from condokit.domain.cells import EMPTY, Number, Text
from condokit.domain.errors import NotFoundError
from condokit.workbook import Workbook, load_workbook


def test_load_workbook_keeps_sheet_order(write_xlsx):
    path = write_xlsx({"Presupuesto": [["Seguro", 45000]], "A1": [["Apartamento A-1"]]})

    workbook = load_workbook(str(path))

    assert workbook.name == "workbook.xlsx"
    assert workbook.sheet_names == ["Presupuesto", "A1"]
    assert workbook.rows("Presupuesto")[0] == (Text("Seguro"), Number(45000))


def test_dates_become_serials(write_xlsx):
    path = write_xlsx({"Hoja1": [[datetime(2024, 1, 15), None, "x"]]})

    row = load_workbook(str(path)).rows("Hoja1")[0]

    assert row == (Number(45306), EMPTY, Text("x"))


def test_missing_file(tmp_path):
    with pytest.raises(NotFoundError, match="File not found"):
        load_workbook(str(tmp_path / "missing.xlsx"))


def test_missing_sheet():
    workbook = Workbook({"A1": [["Apartamento A-1"]]})

    assert workbook.has_sheet("A1")
    assert not workbook.has_sheet("A2")
    with pytest.raises(NotFoundError, match="Available: A1"):
        workbook.rows("A2")


def test_rows_are_tagged():
    workbook = Workbook({"Hoja1": [[None, "", " texto ", 3], None]})

    first, second = workbook.rows("Hoja1")
    assert first == (EMPTY, EMPTY, Text(" texto "), Number(3))
    assert second == ()
