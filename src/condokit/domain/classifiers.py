"""Description classifiers.

Each classifier lower-cases its input and walks an ordered list of rules; the
first rule whose predicate matches decides the label. When nothing matches the
classifier falls back to its default label, so every string (the empty string
included) gets a label.
"""

from enum import Enum
from typing import Callable

from condokit.domain.entities import (
    ExpenseCategory,
    LedgerCategory,
    LedgerType,
    MovementCategory,
)

Rule = tuple[Callable[[str], bool], Enum]


def _any_of(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(needle in text for needle in needles)


def _all_of(*needles: str) -> Callable[[str], bool]:
    return lambda text: all(needle in text for needle in needles)


def _either(*predicates: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: any(predicate(text) for predicate in predicates)


def _classify(text: str, rules: list, default):
    lowered = (text or "").lower()
    for predicate, label in rules:
        if predicate(lowered):
            return label
    return default


LEDGER_TYPE_RULES: list[Rule] = [
    (
        _any_of("pago ", "pago por", "deposito", "transferencia", "moneygram"),
        LedgerType.PAYMENT_RECEIVED,
    ),
    (
        _either(
            _any_of("cargo 2%", "cargo administrador", "multa", "alguacil"),
            _all_of("honorario", "recordatorio"),
        ),
        LedgerType.LATE_FEE,
    ),
    (
        _any_of(
            "pedido de fondo",
            "cuota extraordinaria",
            "pedido excepcional",
            "voto elec",
            "inscripcion de privilegio",
        ),
        LedgerType.WORK_ASSESSMENT,
    ),
    (_any_of("trimestre", "gastos común", "gastos total"), LedgerType.FEE_CALL),
    (_any_of("rectificación", "ajuste"), LedgerType.ADJUSTMENT),
    (
        _any_of("compra de", "camion de agua", "fuga", "daños"),
        LedgerType.PRIVATE_CHARGE,
    ),
]

LEDGER_CATEGORY_RULES: list[Rule] = [
    (_any_of("pago ", "deposito", "transferencia", "moneygram"), LedgerCategory.PAYMENT),
    (_any_of("privilegio", "alguacil", "notificacion"), LedgerCategory.LEGAL_FEES),
    (
        _any_of("cargo 2%", "cargo administrador", "multa", "recordatorio"),
        LedgerCategory.PENALTIES_AND_FEES,
    ),
    (
        _any_of("pedido de fondo", "cuota extraordinaria", "pedido excepcional", "voto elec"),
        LedgerCategory.EXTRAORDINARY_ASSESSMENT,
    ),
    (_any_of("trimestre", "gastos común", "gastos total"), LedgerCategory.COMMON_CHARGES),
]

EXPENSE_CATEGORY_RULES: list[Rule] = [
    (_any_of("inapa", "luz", "electricidad", "camion"), ExpenseCategory.UTILITIES),
    (_any_of("jardinero", "basura", "limpieza", "recogida"), ExpenseCategory.CLEANING),
    (_any_of("reparacion", "mantenimiento"), ExpenseCategory.MAINTENANCE),
    # Regular and extra management fees share one category.
    (_any_of("honorario"), ExpenseCategory.MANAGEMENT_FEE),
    (_any_of("cargo", "bancario", "impuesto"), ExpenseCategory.BANK_CHARGES),
    (_any_of("seguro", "poliza"), ExpenseCategory.INSURANCE),
    (_any_of("voto elec", "instalacion", "filtr"), ExpenseCategory.CAPITAL_WORKS),
    (_any_of("inscripcion", "rnc", "privilegio"), ExpenseCategory.LEGAL_AND_COMPLIANCE),
    # "cargo administrador" never reaches this rule, "cargo" matches Bank Charges first.
    (_any_of("otros", "cargo administrador"), ExpenseCategory.PENALTIES_AND_COLLECTIONS),
]

MOVEMENT_CATEGORY_RULES: list[Rule] = [
    (_any_of("saldo balance"), MovementCategory.TRANSFER),
    (_any_of("honorario admin"), MovementCategory.MANAGEMENT_FEE),
    (_any_of("yile", "jardinero"), MovementCategory.CLEANING),
    (_any_of("luz", "inapa", "camion"), MovementCategory.UTILITIES),
    (_any_of("recogida", "basura", "lora"), MovementCategory.CLEANING),
    (
        _any_of("frits", "zorica", "crismar", "reparacion", "cotizacion"),
        MovementCategory.CAPITAL_WORKS,
    ),
    (_any_of("cargo ", "impuesto", "membresia"), MovementCategory.BANK_CHARGES),
    (_any_of("seguro", "poliza"), MovementCategory.INSURANCE),
    (_any_of("retiro para"), MovementCategory.TRANSFER),
    (_any_of("pago ", "deposito"), MovementCategory.OWNER_PAYMENT),
]


def classify_ledger_type(description: str) -> LedgerType:
    """Classify a unit ledger line by its description. Defaults to Fee Call."""
    return _classify(description, LEDGER_TYPE_RULES, LedgerType.FEE_CALL)


def classify_ledger_category(description: str) -> LedgerCategory:
    """Classify a unit ledger line's category. Defaults to Common Charges."""
    return _classify(description, LEDGER_CATEGORY_RULES, LedgerCategory.COMMON_CHARGES)


def classify_expense_category(header: str) -> ExpenseCategory:
    """Classify an expense section header (or budget label). Defaults to Other."""
    return _classify(header, EXPENSE_CATEGORY_RULES, ExpenseCategory.OTHER)


def classify_movement_category(description: str) -> MovementCategory:
    """Classify a cash or bank movement by its description. Defaults to Other."""
    return _classify(description, MOVEMENT_CATEGORY_RULES, MovementCategory.OTHER)
