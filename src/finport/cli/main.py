"""Main CLI entry point."""

import sys

import click
from loguru import logger

from finport.database.factories import create_sqlite_database

# Import and register all commands at module level
from finport.cli.commands import (
    employee,
    format,
    import_cmd,
    tds,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when verbose and WARNING otherwise."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINPORT_DB_PATH environment variable)",
    envvar="FINPORT_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """finport - Bank statement and salary sheet import.

    Parse statements from banks with different column layouts and salary
    sheets into draft records for review.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
format.register_commands(cli)
employee.register_commands(cli)
import_cmd.register_commands(cli)
tds.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
