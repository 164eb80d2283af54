"""Workbook inspection command."""

import click

from condokit.domain.detection import detect_sheet_type
from condokit.domain.errors import DomainError
from condokit.cli.error_handling import handle_domain_error
from condokit.workbook import load_workbook


@click.command("sheets")
@click.argument("file_path", metavar="FILE")
@click.pass_context
def list_sheets(ctx, file_path: str):
    """List the sheets of a workbook and the import type detected for each."""
    try:
        workbook = load_workbook(file_path)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{'Sheet':<30} {'Type':<12} {'Rows':>6}")
    click.echo("-" * 50)
    for name in workbook.sheet_names:
        rows = workbook.rows(name)
        sheet_type = detect_sheet_type(name, rows)
        type_label = sheet_type.value if sheet_type else "-"
        click.echo(f"{name:<30} {type_label:<12} {len(rows):>6}")


def register_commands(cli):
    """Register sheets command with main CLI."""
    cli.add_command(list_sheets)
