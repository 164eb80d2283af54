"""Spreadsheet workbook loading.

Workbooks are read once into memory as ordered sheets of tagged cell rows.
Date-formatted cells become date serials so extractors see the same numbers a
raw spreadsheet export carries.
"""

from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import openpyxl

from condokit.domain.cells import Row, to_row
from condokit.domain.errors import NotFoundError, file_not_found


class Workbook:
    """Ordered collection of named sheets."""

    def __init__(self, sheets: Mapping[str, Iterable[Optional[Iterable[Any]]]], name: str = ""):
        """Initialize workbook.

        Args:
            sheets: Sheet name to rows of raw values (None, numbers, strings,
                dates) or already tagged cells, in sheet order
            name: Display name, usually the file name
        """
        self.name = name
        self._sheets: dict[str, list[Row]] = {
            sheet_name: [to_row(row) for row in rows] for sheet_name, rows in sheets.items()
        }

    @property
    def sheet_names(self) -> list[str]:
        return list(self._sheets)

    def has_sheet(self, sheet_name: str) -> bool:
        return sheet_name in self._sheets

    def rows(self, sheet_name: str) -> list[Row]:
        """Return the rows of a sheet.

        Raises:
            NotFoundError: If the sheet does not exist
        """
        if sheet_name not in self._sheets:
            raise NotFoundError(
                f"Sheet '{sheet_name}' not found. Available: {', '.join(self.sheet_names)}"
            )
        return self._sheets[sheet_name]


def load_workbook(file_path: str) -> Workbook:
    """Read an .xlsx file into a Workbook.

    Args:
        file_path: Path to the spreadsheet

    Returns:
        Workbook with every sheet's rows

    Raises:
        NotFoundError: If the file doesn't exist
    """
    path = Path(file_path)
    if not path.is_file():
        raise NotFoundError(file_not_found(file_path))

    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        sheets = {
            sheet.title: [list(row) for row in sheet.iter_rows(values_only=True)]
            for sheet in wb.worksheets
        }
    finally:
        wb.close()
    return Workbook(sheets, name=path.name)
