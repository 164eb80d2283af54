"""Error reporting shared by the CLI commands."""

import logging

import click

from condokit.domain.errors import ConfigError, DomainError

logger = logging.getLogger(__name__)

CONFIG_HINT = "Pass --config, set CONDOKIT_CONFIG or CONDO_CONFIG, or add config.json here."


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print an import error to stderr and exit with status 1.

    Configuration errors are followed by a hint on where configuration is
    looked up.
    """
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ConfigError):
        click.echo(CONFIG_HINT, err=True)
    ctx.exit(1)
