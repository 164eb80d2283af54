"""Shared pytest fixtures for condokit tests."""

import json
import os
import tempfile
from typing import Any

import openpyxl
import pytest

from condokit.config import ImporterConfig
from condokit.domain.errors import RecordStoreError
from condokit.store.base import RecordStore
from condokit.store.factories import create_sqlite_store

# Serials used throughout the tests
JAN_01_2024 = 45292
JAN_15_2024 = 45306
FEB_15_2024 = 45337
APR_01_2024 = 45383
JUL_01_2024 = 45474
OCT_01_2024 = 45566
JAN_01_2023 = 44927


class RecordingStore(RecordStore):
    """In-memory store remembering every record it receives."""

    def __init__(self, fail_on: tuple[int, ...] = ()):
        self.records: list[tuple[str, dict[str, Any]]] = []
        self.calls = 0
        self.fail_on = fail_on

    def create_record(self, collection_id: str, properties: dict[str, Any]) -> str:
        self.calls += 1
        if self.calls in self.fail_on:
            raise RecordStoreError(f"validation failed for call {self.calls}")
        self.records.append((collection_id, properties))
        return f"rec-{self.calls}"


class ExplodingStore(RecordStore):
    """Store that fails the test if anything is written."""

    def create_record(self, collection_id: str, properties: dict[str, Any]) -> str:
        raise AssertionError("record store must not be called")


@pytest.fixture
def sqlite_store():
    """Create a temporary SQLite record store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    store.database_path = db_path

    yield store

    store.close()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def importer_config():
    """Configuration writing to named collections without pacing."""
    return ImporterConfig(
        databases={
            "units": "db-units",
            "ledger": "db-ledger",
            "expenses": "db-expenses",
            "movements": "db-movements",
            "budget": "db-budget",
        },
        request_delay=0,
        accounts={"cajaChica": "acct-caja", "bancoPopular": "acct-banco"},
    )


@pytest.fixture
def units_rows():
    """Two owners whose shares add up to 100%."""
    return [
        ["DISTRIBUCIÓN DE GASTOS COMUNES"],
        ["Propietario", "Unidad", "Lote", "m²", "%"],
        ["Juan Pérez", "A-1"],
        [None, "Apartamento", 101, 95.5],
        [None, "Parqueo", "P1", 12],
        [None, None, None, 107.5, 0.45],
        ["María Gómez", "A2"],
        [None, "Apartamento", 102, 131.4],
        [None, None, None, 131.4, 0.55],
    ]


@pytest.fixture
def ledger_rows():
    return [
        ["CIERRE PROPIETARIOS 2024"],
        ["Apartamento A-1"],
        [None, "Descripción", "Fecha", "Débito", "Crédito", "Balance"],
        [None, "SALDO ANTERIOR", JAN_01_2024, None, None, 1500],
        [None, "Gastos comunes 4to trimestre 2022", JAN_01_2023, 3000, None, 4500],
        [None, "Gastos comunes 1er trimestre", JAN_15_2024, 3000, None, 4500],
        [None, "Pago por transferencia", FEB_15_2024, None, -3000, 1500],
        [None, "TOTAL", FEB_15_2024, 3000, 3000, 1500],
    ]


@pytest.fixture
def expense_rows():
    return [
        ["CONDOMINIO TORRE MAR"],
        ["Estado de gastos 2024"],
        ["LUZ (Edenorte)"],
        ["Factura enero", JAN_15_2024, -2500.5],
        ["Factura abril", APR_01_2024, 2600],
        ["Total luz", None, 5100.5],
        ["Honorarios administrador"],
        ["Pago julio", JUL_01_2024, 8000],
    ]


def side_by_side_row(left=None, right=None) -> list:
    """Build a 13-column row with petty cash at column 1 and bank at column 8.

    Each side is (description, date, debit, credit).
    """
    row: list = [None] * 13
    for offset, side in ((1, left), (8, right)):
        if side is None:
            continue
        description, serial, debit, credit = side
        row[offset] = description
        row[offset + 1] = serial
        row[offset + 3] = debit
        row[offset + 4] = credit
    return row


@pytest.fixture
def side_by_side_rows():
    header = side_by_side_row(("CAJA CHICA", None, None, None), ("BANCO POPULAR", None, None, None))
    columns = side_by_side_row(
        ("Descripción", "Fecha", "Débito", "Crédito"),
        ("Descripción", "Fecha", "Débito", "Crédito"),
    )
    return [
        header,
        columns,
        side_by_side_row(
            ("Saldo balance anterior", JAN_01_2024, None, 1000),
            ("Saldo balance", JAN_01_2024, None, 20000.456),
        ),
        side_by_side_row(
            ("Pago cuota A-1", JAN_15_2024, None, 500),
            ("Cargo por manejo de cuenta", FEB_15_2024, -150.25, None),
        ),
        side_by_side_row(("Compra de escobas", FEB_15_2024, -200, None)),
        side_by_side_row(("TOTAL", None, -200, 1500)),
    ]


@pytest.fixture
def reserve_fund_rows():
    return [
        [None, "FONDO DE RESERVAS 2024"],
        [None, "Descripción", "Fecha", None, "Débito", "Crédito"],
        [None, "Saldo balance", JAN_01_2024, None, None, 50000],
        [None, "Aporte trimestral", JAN_15_2024, None, None, 7000],
        [None, "Retiro para reparacion techo", FEB_15_2024, None, -12000, None],
        [None, "Nota sin montos", FEB_15_2024, None, None, None],
    ]


@pytest.fixture
def budget_rows():
    return [
        ["CONDOMINIO TORRE MAR"],
        ["Presupuesto anual 2024"],
        ["Categoría", "%", "Anual"],
        ["Limpieza y jardinería", 8.5, 2500, 30000],
        ["Seguro edificio", 45000],
        ["Otros", 50],
        ["TOTAL", 75000],
    ]


@pytest.fixture
def write_xlsx(tmp_path):
    """Write sheets of raw values to an .xlsx file and return its path."""

    def _write(sheets: dict[str, list[list]], name: str = "workbook.xlsx"):
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(sheet_name)
            for row in rows:
                ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _write


@pytest.fixture
def config_file(tmp_path):
    """Write a SQLite-backed config file and return its path."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "building": {"name": "Torre Mar", "currency": "DOP"},
                "store": "sqlite",
                "sqlitePath": str(tmp_path / "records.db"),
                "requestDelay": 0,
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
