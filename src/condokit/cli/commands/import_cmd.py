"""Workbook import command."""

from collections import defaultdict
from pathlib import Path
from typing import Optional

import click

from condokit.config import load_config
from condokit.domain.entities import Extraction, SheetType
from condokit.domain.errors import DomainError, file_not_found
from condokit.domain.importer import (
    IMPORTED,
    MISSING,
    UNRECOGNIZED,
    ImportReport,
    ImportService,
)
from condokit.cli.error_handling import handle_domain_error
from condokit.store.factories import create_record_store
from condokit.workbook import load_workbook

RULE = "=" * 50

# Write errors printed in full per sheet; later ones are only counted.
VERBOSE_ERROR_LIMIT = 3

NOUNS = {
    SheetType.UNITS: "units",
    SheetType.LEDGER: "ledger entries",
    SheetType.EXPENSES: "expenses",
    SheetType.MOVEMENTS: "movements",
    SheetType.BUDGET: "budget lines",
}


def _money(amount) -> str:
    return f"{amount:,.2f}"


def _display_units(extraction: Extraction, currency: str) -> None:
    units = extraction.entities
    total = sum(u.ownership_share for u in units)
    click.echo(f"Detected {len(units)} units (total ownership: {total * 100:.2f}%):")
    for u in units:
        click.echo(
            f"  {u.unit_code} | {u.owner_name[:30]} | {u.size_sqm:g} m² | "
            f"{u.ownership_share * 100:.2f}%"
        )


def _display_ledger(extraction: Extraction, currency: str) -> None:
    by_unit = defaultdict(int)
    for entry in extraction.entities:
        by_unit[entry.unit_code] += 1
    click.echo(
        f"Detected {len(extraction)} ledger entries across {len(by_unit)} units:"
    )
    for unit, count in by_unit.items():
        click.echo(f"  {unit}: {count} entries")


def _display_expenses(extraction: Extraction, currency: str) -> None:
    by_category = defaultdict(list)
    for entry in extraction.entities:
        by_category[entry.category.value].append(entry.amount)
    click.echo(f"Detected {len(extraction)} expenses:")
    for category, amounts in by_category.items():
        click.echo(
            f"  {category}: {len(amounts)} entries ({_money(sum(amounts))} {currency})"
        )


def _display_movements(extraction: Extraction, currency: str) -> None:
    by_account = defaultdict(list)
    for entry in extraction.entities:
        by_account[entry.account_key].append(entry)
    click.echo(f"Detected {len(extraction)} movements:")
    for account, entries in by_account.items():
        closing = entries[-1].running_balance
        click.echo(f"  {account}: {len(entries)} entries (closing: {_money(closing)})")


def _display_budget(extraction: Extraction, currency: str) -> None:
    total = sum(entry.annual_amount for entry in extraction.entities)
    click.echo(f"Detected {len(extraction)} budget lines (total: {_money(total)}):")
    for entry in extraction.entities:
        click.echo(
            f"  {entry.category}: {_money(entry.annual_amount)} ({entry.department.value})"
        )


PREVIEWS = {
    SheetType.UNITS: _display_units,
    SheetType.LEDGER: _display_ledger,
    SheetType.EXPENSES: _display_expenses,
    SheetType.MOVEMENTS: _display_movements,
    SheetType.BUDGET: _display_budget,
}


class _ProgressPrinter:
    """Renders previews and per-record progress while a workbook imports."""

    def __init__(self, currency: str, dry_run: bool):
        self.currency = currency
        self.dry_run = dry_run
        self.errors_shown = 0

    def on_extracted(self, sheet_name: str, extraction: Extraction) -> None:
        self.errors_shown = 0
        click.echo(f"\n{RULE}")
        click.echo(f"Importing \"{sheet_name}\" as: {extraction.sheet_type.value}")
        click.echo(RULE)

        if not extraction.entities:
            click.echo(f"No {NOUNS[extraction.sheet_type]} detected. Check sheet format.")
            return

        PREVIEWS[extraction.sheet_type](extraction, self.currency)
        for warning in extraction.warnings:
            click.echo(f"\nWARNING: {warning}")
        if self.dry_run:
            click.echo("\n[DRY RUN] No entries written.")

    def on_record(self, entity, error: Optional[str]) -> None:
        if error is None:
            click.echo(".", nl=False)
            return
        self.errors_shown += 1
        if self.errors_shown <= VERBOSE_ERROR_LIMIT:
            click.echo(f"\n  Failed {error}", err=True)


def _display_report(report: ImportReport) -> None:
    for sheet in report.sheets:
        if sheet.status == MISSING:
            click.echo(
                f"\nSheet \"{sheet.sheet_name}\" not found. "
                f"Available: {', '.join(sheet.available)}"
            )
        elif sheet.status == UNRECOGNIZED:
            click.echo(f"\nSkipping \"{sheet.sheet_name}\" (unrecognized format)")
        elif sheet.status == IMPORTED:
            noun = NOUNS[sheet.sheet_type]
            click.echo(
                f"\n{sheet.sheet_name}: {sheet.count} {noun} imported | {len(sheet.errors)} errors"
            )

    click.echo(f"\n{RULE}")
    suffix = " (DRY RUN)" if report.dry_run else ""
    click.echo(f"Import complete: {report.total} total entries{suffix}")
    if report.error_count:
        click.echo(f"  Errors: {report.error_count}")
    click.echo(RULE)


@click.command("import")
@click.argument("file_path", metavar="FILE")
@click.option(
    "--type",
    "sheet_type",
    type=click.Choice([t.value for t in SheetType]),
    help="Force import type (skips sheet detection)",
)
@click.option("--sheet", "sheet_name", help="Import this sheet only")
@click.option("--dry-run", is_flag=True, help="Preview without writing")
@click.pass_context
def import_workbook(
    ctx, file_path: str, sheet_type: Optional[str], sheet_name: Optional[str], dry_run: bool
):
    """Import a spreadsheet workbook.

    Sheet names decide the import type: "Distribución" -> units,
    "Gastos detallados" -> expenses, "A1".."A7" -> ledger,
    "Caja Chica" -> movements, "Presupuesto" -> budget.
    """
    if not Path(file_path).is_file():
        click.echo(f"Error: {file_not_found(file_path)}", err=True)
        ctx.exit(1)

    store = None
    try:
        config = load_config(ctx.obj.get("config_path"))
        workbook = load_workbook(file_path)
        if not dry_run:
            store = create_record_store(config)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nFile: {workbook.name}")
    click.echo(f"Sheets: {', '.join(workbook.sheet_names)}")

    printer = _ProgressPrinter(currency=config.currency, dry_run=dry_run)
    service = ImportService(store, config)
    try:
        report = service.import_workbook(
            workbook,
            sheet_name=sheet_name,
            forced_type=SheetType(sheet_type) if sheet_type else None,
            dry_run=dry_run,
            on_extracted=printer.on_extracted,
            on_record=printer.on_record,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    finally:
        if store is not None:
            store.close()

    _display_report(report)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_workbook)
