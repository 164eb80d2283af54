"""Domain layer for condokit application."""

from condokit.domain.classifiers import (
    classify_expense_category,
    classify_ledger_category,
    classify_ledger_type,
    classify_movement_category,
)
from condokit.domain.detection import detect_sheet_type, resolve_sheet_type
from condokit.domain.extractors import extract

__all__ = [
    "classify_expense_category",
    "classify_ledger_category",
    "classify_ledger_type",
    "classify_movement_category",
    "detect_sheet_type",
    "resolve_sheet_type",
    "extract",
]
