"""Statement and salary sheet import commands."""

import json

import click

from finport.cli.error_handling import handle_import_failure
from finport.domain.entities import DraftSalaryEntry, DraftTransaction
from finport.domain.import_result import BatchResult, ImportFailure, to_payload
from finport.domain.salary_import import SalaryImportService
from finport.domain.statement_import import StatementImportService


def _echo_json(result: BatchResult) -> None:
    _, payload = to_payload(result)
    click.echo(json.dumps(payload, indent=2))


def _echo_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        click.echo(f"      ! {warning}")


def _echo_transaction(draft: DraftTransaction) -> None:
    date_str = draft.date or "????-??-??"
    sign = "+" if draft.credit else "-"
    click.echo(
        f"  [{draft.id}] row {draft.row_index}  {date_str}  "
        f"{sign}{draft.amount:,.2f}  {draft.description}"
    )
    if draft.transaction_id:
        click.echo(f"      Transaction ID: {draft.transaction_id}")
    _echo_warnings(draft.warnings)


def _echo_salary(draft: DraftSalaryEntry) -> None:
    date_str = draft.date or "????-??-??"
    who = draft.employee_name or draft.account or "(no account)"
    click.echo(
        f"  [{draft.id}] row {draft.row_index}  {date_str}  {who}  "
        f"gross {draft.gross_salary:,.2f}  tds {draft.tds:,.2f}  net {draft.net_salary:,.2f}"
    )
    _echo_warnings(draft.warnings)


def _echo_summary(result: BatchResult) -> None:
    flagged = sum(1 for draft in result.drafts if draft.warnings)
    click.echo("\nParse complete:")
    click.echo(f"  Drafts: {len(result.drafts)}")
    if flagged:
        click.echo(f"  With warnings: {flagged}")
    if result.skipped:
        click.echo(f"  Skipped: {len(result.skipped)}")
        for skipped in result.skipped:
            click.echo(f"    row {skipped.row_index}: {skipped.reason}")


@click.group("import")
def import_group():
    """Parse statements and salary sheets into drafts for review."""
    pass


@import_group.command("statement")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--bank", "bank_name", required=True, help="Bank whose saved format to use")
@click.option("--json", "as_json", is_flag=True, help="Print the drafts as JSON")
@click.pass_context
def import_statement(ctx, statement_file: str, bank_name: str, as_json: bool):
    """Parse a bank statement (xlsx, xls or csv).

    Examples:
        finport import statement hdfc_march.xlsx --bank HDFC
        finport import statement icici.csv --bank ICICI --json
    """
    db = ctx.obj["db"]
    service = StatementImportService(db)

    outcome = service.parse_with_bank(statement_file, bank_name)
    if isinstance(outcome, ImportFailure):
        handle_import_failure(ctx, outcome)
        return

    if as_json:
        _echo_json(outcome)
        return

    for draft in outcome.drafts:
        _echo_transaction(draft)
    _echo_summary(outcome)


@import_group.command("salary")
@click.argument("salary_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the drafts as JSON")
@click.pass_context
def import_salary(ctx, salary_file: str, as_json: bool):
    """Parse a salary sheet with Date, Account and Debit columns.

    Accounts are matched against the employee directory by name.

    Examples:
        finport import salary salaries_april.xlsx
    """
    db = ctx.obj["db"]
    service = SalaryImportService(db)

    outcome = service.parse(salary_file)
    if isinstance(outcome, ImportFailure):
        handle_import_failure(ctx, outcome)
        return

    if as_json:
        _echo_json(outcome)
        return

    for draft in outcome.drafts:
        _echo_salary(draft)
    _echo_summary(outcome)


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_group, name="import")
