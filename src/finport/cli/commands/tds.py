"""Quarterly TDS report commands."""

from pathlib import Path

import click

from finport.cli.error_handling import handle_domain_error, handle_import_failure
from finport.domain.errors import DomainError
from finport.domain.import_result import ImportFailure
from finport.domain.salary_import import SalaryImportService
from finport.domain.tds import TdsReportService
from finport.spreadsheet.writer import write_tds_workbook


@click.group()
def tds_group():
    """Summarize tax deducted at source."""
    pass


@tds_group.command("export")
@click.argument("salary_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--fy", "fy_start", type=int, required=True, help="Year the fiscal year starts (April)")
@click.option("--quarter", type=click.IntRange(1, 4), required=True, help="Quarter 1-4 (Q1 = Apr-Jun)")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output xlsx path")
@click.pass_context
def export_tds(ctx, salary_file: str, fy_start: int, quarter: int, output: str | None):
    """Export the TDS withheld per employee and month of a quarter.

    Only rows matched to a known employee are counted.

    Examples:
        finport tds export salaries_2024.xlsx --fy 2024 --quarter 1
        finport tds export salaries.csv --fy 2024 --quarter 4 -o q4.xlsx
    """
    db = ctx.obj["db"]

    outcome = SalaryImportService(db).parse(salary_file)
    if isinstance(outcome, ImportFailure):
        handle_import_failure(ctx, outcome)
        return

    try:
        report = TdsReportService(db).summarize(outcome.drafts, fy_start, quarter)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    path = write_tds_workbook(report, Path(output) if output else Path(report.file_name))
    click.echo(f"Wrote {report.label} FY{fy_start}-{str(fy_start + 1)[-2:]} TDS for {len(report.rows)} employees to {path}")
    click.echo(f"  Total TDS: {sum(report.monthly_totals):,.2f}")


def register_commands(cli):
    """Register TDS commands with main CLI."""
    cli.add_command(tds_group, name="tds")
