"""Main CLI entry point."""

import logging
import sys

import click

# Import and register all commands at module level
from condokit.cli.commands import import_cmd, sheets


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to config.json (overrides CONDOKIT_CONFIG environment variable)",
    envvar="CONDOKIT_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.pass_context
def cli(ctx, config_path: str | None, verbose: bool):
    """Condokit - Condominium spreadsheet importer.

    Migrate unit ownership tables, unit ledgers, expense sheets, cash and
    bank movements, and budgets from spreadsheets into your databases.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Register all commands
import_cmd.register_commands(cli)
sheets.register_commands(cli)


def main():
    """Main entry point for CLI."""
    try:
        cli()
    except Exception as e:
        click.echo(f"Fatal: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
