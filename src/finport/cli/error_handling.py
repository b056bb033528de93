"""CLI error handling helpers."""

import click

from finport.domain.errors import DomainError
from finport.domain.import_result import ImportFailure


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_import_failure(ctx: click.Context, failure: ImportFailure) -> None:
    """Render a failed import and exit with failure."""
    click.echo(f"Error: {failure.message}", err=True)
    ctx.exit(1)
