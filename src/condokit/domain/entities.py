"""Domain model entities for condokit.

These are pure data classes produced by the sheet extractors and consumed once
by the import driver. None of them is mutated after creation.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class SheetType(str, Enum):
    """Import pipeline selected for a sheet."""

    UNITS = "units"
    LEDGER = "ledger"
    EXPENSES = "expenses"
    MOVEMENTS = "movements"
    BUDGET = "budget"


class LedgerType(str, Enum):
    PAYMENT_RECEIVED = "Payment Received"
    LATE_FEE = "Late Fee"
    WORK_ASSESSMENT = "Work Assessment"
    FEE_CALL = "Fee Call"
    ADJUSTMENT = "Adjustment"
    PRIVATE_CHARGE = "Private Charge"


class LedgerCategory(str, Enum):
    PAYMENT = "Payment"
    LEGAL_FEES = "Legal Fees"
    PENALTIES_AND_FEES = "Penalties & Fees"
    EXTRAORDINARY_ASSESSMENT = "Extraordinary Assessment"
    COMMON_CHARGES = "Common Charges"


class ExpenseCategory(str, Enum):
    UTILITIES = "Utilities"
    CLEANING = "Cleaning"
    MAINTENANCE = "Maintenance"
    MANAGEMENT_FEE = "Management Fee"
    BANK_CHARGES = "Bank Charges"
    INSURANCE = "Insurance"
    CAPITAL_WORKS = "Capital Works"
    LEGAL_AND_COMPLIANCE = "Legal & Compliance"
    PENALTIES_AND_COLLECTIONS = "Penalties & Collections"
    OTHER = "Other"


class MovementCategory(str, Enum):
    TRANSFER = "Transfer"
    MANAGEMENT_FEE = "Management Fee"
    CLEANING = "Cleaning"
    UTILITIES = "Utilities"
    CAPITAL_WORKS = "Capital Works"
    BANK_CHARGES = "Bank Charges"
    INSURANCE = "Insurance"
    OWNER_PAYMENT = "Owner Payment"
    OTHER = "Other"


class MovementKind(str, Enum):
    OPENING_BALANCE = "Opening Balance"
    CREDIT = "Credit"
    DEBIT = "Debit"


@dataclass(frozen=True)
class UnitComponent:
    """A physical part of a unit (apartment, parking lot, storage room)."""

    kind: str
    lot: str
    size: float


@dataclass(frozen=True)
class Unit:
    """Ownership unit with its owner and share of building expenses."""

    unit_code: str
    owner_name: str
    size_sqm: float
    ownership_share: float
    components: tuple[UnitComponent, ...] = ()

    @property
    def notes(self) -> str:
        """One line per component, e.g. "Parqueo 12: 15 m²"."""
        lines = [
            f"{c.kind} {c.lot}: {_format_size(c.size)} m²" for c in self.components
        ]
        return "\n".join(lines)[:2000]


@dataclass(frozen=True)
class LedgerEntry:
    """Dated debit/credit line on one unit's account."""

    unit_code: str
    description: str
    date: date
    debit: Decimal
    credit: Decimal
    running_balance: Optional[Decimal]
    entry_type: LedgerType
    category: LedgerCategory
    fiscal_year: int


@dataclass(frozen=True)
class ExpenseEntry:
    """Building expense filed under the section header it appeared below."""

    description: str
    date: date
    amount: Decimal
    category: ExpenseCategory
    quarter: str
    fiscal_year: int
    header: str = ""


@dataclass(frozen=True)
class MovementEntry:
    """Dated movement on a cash or bank account with the balance after it."""

    description: str
    date: date
    kind: MovementKind
    amount: Decimal
    running_balance: Decimal
    category: MovementCategory
    fiscal_year: int
    account_key: str


@dataclass(frozen=True)
class BudgetEntry:
    """Annual budget line."""

    category: str
    annual_amount: Decimal
    department: ExpenseCategory


@dataclass(frozen=True)
class Extraction:
    """Entities extracted from one sheet plus any structural warnings."""

    sheet_type: SheetType
    entities: tuple = ()
    warnings: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.entities)


@dataclass
class ParentLookup:
    """Record identifiers of parent records, keyed by natural key.

    units maps canonical unit codes ("A-1") and accounts maps account keys
    ("cajaChica") to record-store ids.
    """

    units: dict[str, str] = field(default_factory=dict)
    accounts: dict[str, str] = field(default_factory=dict)


def _format_size(size: float) -> str:
    if float(size).is_integer():
        return str(int(size))
    return str(size)
