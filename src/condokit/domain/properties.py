"""Mapper functions from domain entities to record-store property maps.

Property maps follow the Notion page-property shape, which both record store
backends accept. This layer isolates the column naming of each collection.
"""

from decimal import Decimal
from typing import Any, Optional

from condokit.domain.entities import (
    BudgetEntry,
    ExpenseEntry,
    LedgerEntry,
    MovementEntry,
    ParentLookup,
    Unit,
)

RICH_TEXT_LIMIT = 2000


def title(text: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": text}}]}


def rich_text(text: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": text[:RICH_TEXT_LIMIT]}}]}


def number(value: Decimal | float | int) -> dict[str, Any]:
    if isinstance(value, Decimal):
        value = int(value) if value == value.to_integral_value() else float(value)
    return {"number": value}


def select(name: str) -> dict[str, Any]:
    return {"select": {"name": name}}


def date_value(value) -> dict[str, Any]:
    return {"date": {"start": value.isoformat()}}


def relation(record_id: str) -> dict[str, Any]:
    return {"relation": [{"id": record_id}]}


def unit_properties(unit: Unit) -> dict[str, Any]:
    """Convert a Unit to its property map."""
    props = {
        "Unit": title(unit.unit_code),
        "Owner Name": rich_text(unit.owner_name),
        "Ownership Share (%)": number(unit.ownership_share),
        "Size": number(unit.size_sqm),
    }
    if unit.notes:
        props["Notes"] = rich_text(unit.notes)
    return props


def ledger_properties(entry: LedgerEntry, unit_id: Optional[str] = None) -> dict[str, Any]:
    """Convert a LedgerEntry to its property map, linking the unit when known."""
    props = {
        "Entry": title(f"{entry.unit_code} — {entry.description}"),
        "Date": date_value(entry.date),
        "Type": select(entry.entry_type.value),
        "Category": select(entry.category.value),
        "Fiscal Year": number(entry.fiscal_year),
    }
    if entry.debit:
        props["Debit"] = number(entry.debit)
    if entry.credit:
        props["Credit"] = number(entry.credit)
    if entry.running_balance is not None:
        props["Balance After"] = number(entry.running_balance)
    if unit_id:
        props["Unit"] = relation(unit_id)
    return props


def expense_properties(entry: ExpenseEntry) -> dict[str, Any]:
    """Convert an ExpenseEntry to its property map. Imported expenses are paid."""
    return {
        "Description": title(entry.description),
        "Amount": number(entry.amount),
        "Date": date_value(entry.date),
        "Category": select(entry.category.value),
        "Status": select("Paid"),
        "Fiscal Year": number(entry.fiscal_year),
        "Quarter": select(entry.quarter),
    }


def movement_properties(entry: MovementEntry, account_id: Optional[str] = None) -> dict[str, Any]:
    """Convert a MovementEntry to its property map, linking the account when known."""
    props = {
        "Description": title(entry.description),
        "Date": date_value(entry.date),
        "Movement": select(entry.kind.value),
        "Amount": number(entry.amount),
        "Balance After": number(entry.running_balance),
        "Category": select(entry.category.value),
        "Fiscal Year": number(entry.fiscal_year),
    }
    if account_id:
        props["Account"] = relation(account_id)
    return props


def budget_properties(entry: BudgetEntry) -> dict[str, Any]:
    """Convert a BudgetEntry to its property map."""
    return {
        "Category": title(entry.category),
        "Annual Budget": number(entry.annual_amount),
        "Department": select(entry.department.value),
        "Status": select("On Track"),
    }


def to_properties(entity, parents: Optional[ParentLookup] = None) -> dict[str, Any]:
    """Map any extracted entity to its property map.

    Args:
        entity: Extracted entity
        parents: Optional parent record ids used for relation properties

    Returns:
        Property map for the entity's collection
    """
    parents = parents or ParentLookup()
    if isinstance(entity, Unit):
        return unit_properties(entity)
    if isinstance(entity, LedgerEntry):
        return ledger_properties(entity, parents.units.get(entity.unit_code))
    if isinstance(entity, ExpenseEntry):
        return expense_properties(entity)
    if isinstance(entity, MovementEntry):
        return movement_properties(entity, parents.accounts.get(entity.account_key))
    if isinstance(entity, BudgetEntry):
        return budget_properties(entity)
    raise TypeError(f"Unsupported entity type: {type(entity).__name__}")


def entity_label(entity) -> str:
    """Short human-readable label of an entity for error reports."""
    if isinstance(entity, Unit):
        return entity.unit_code
    if isinstance(entity, BudgetEntry):
        return entity.category
    return entity.description[:40]


def record_title(properties: dict[str, Any]) -> str:
    """Extract the plain title text from a property map."""
    for value in properties.values():
        if "title" in value:
            return "".join(part["text"]["content"] for part in value["title"])
    return ""
