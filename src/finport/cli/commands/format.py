"""Statement format management commands."""

import click

from finport.cli.error_handling import handle_domain_error
from finport.domain.entities import AmountFormatType, StatementFormat
from finport.domain.errors import DomainError
from finport.domain.statement_format import StatementFormatService

FORMAT_TYPES = [t.value for t in AmountFormatType]


def _describe(fmt: StatementFormat, indent: str = "  ") -> None:
    click.echo(f"{indent}Date column: {fmt.date_column}")
    click.echo(f"{indent}Description column: {fmt.description_column}")
    if fmt.transaction_id_column:
        click.echo(f"{indent}Transaction ID column: {fmt.transaction_id_column}")
    if fmt.is_drcr:
        click.echo(f"{indent}Type: Amount with Dr/Cr indicator")
        click.echo(f"{indent}Amount column: {fmt.amount_column}")
        click.echo(f"{indent}Dr/Cr column: {fmt.drcr_column}")
        click.echo(f"{indent}Debit tokens: {', '.join(fmt.debit_tokens)}")
        click.echo(f"{indent}Credit tokens: {', '.join(fmt.credit_tokens)}")
    else:
        click.echo(f"{indent}Type: Separate Debit/Credit")
        click.echo(f"{indent}Debit column: {fmt.debit_column}")
        click.echo(f"{indent}Credit column: {fmt.credit_column}")


def _get_format_or_exit(ctx, service: StatementFormatService, bank_name: str) -> StatementFormat:
    fmt = service.get_format_by_bank(bank_name)
    if fmt is None:
        click.echo(f"Error: Statement format for bank '{bank_name}' not found", err=True)
        ctx.exit(1)
    return fmt


@click.group()
def format_group():
    """Manage bank statement formats."""
    pass


@format_group.command("create")
@click.argument("bank_name")
@click.option("--date-col", required=True, help="Header of the transaction date column")
@click.option("--desc-col", required=True, help="Header of the description column")
@click.option(
    "--type",
    "amount_format_type",
    type=click.Choice(FORMAT_TYPES),
    default=AmountFormatType.SEPARATE_DEBIT_CREDIT.value,
    show_default=True,
    help="How the statement encodes amounts",
)
@click.option("--trans-id-col", help="Header of the transaction ID column (optional)")
@click.option("--debit-col", help="Header of the debit column (separate_debit_credit)")
@click.option("--credit-col", help="Header of the credit column (separate_debit_credit)")
@click.option("--amount-col", help="Header of the amount column (drcr_with_amount)")
@click.option("--drcr-col", help="Header of the Dr/Cr indicator column (drcr_with_amount)")
@click.option("--debit-tokens", help="Comma-separated indicator texts meaning debit, e.g. 'DR,WDL'")
@click.option("--credit-tokens", help="Comma-separated indicator texts meaning credit, e.g. 'CR,DEP'")
@click.pass_context
def create_format(
    ctx,
    bank_name: str,
    date_col: str,
    desc_col: str,
    amount_format_type: str,
    trans_id_col: str | None,
    debit_col: str | None,
    credit_col: str | None,
    amount_col: str | None,
    drcr_col: str | None,
    debit_tokens: str | None,
    credit_tokens: str | None,
):
    """Create a statement format for a bank.

    Examples:
        finport format create HDFC --date-col "Txn Date" --desc-col Narration \\
            --debit-col "Withdrawal Amt." --credit-col "Deposit Amt."
        finport format create ICICI --date-col Date --desc-col Remarks \\
            --type drcr_with_amount --amount-col Amount --drcr-col Type \\
            --debit-tokens DR --credit-tokens CR
    """
    db = ctx.obj["db"]
    service = StatementFormatService(db)

    try:
        format_id = service.create_format(
            bank_name=bank_name,
            date_column=date_col,
            description_column=desc_col,
            amount_format_type=amount_format_type,
            transaction_id_column=trans_id_col,
            debit_column=debit_col,
            credit_column=credit_col,
            amount_column=amount_col,
            drcr_column=drcr_col,
            debit_tokens=debit_tokens,
            credit_tokens=credit_tokens,
        )
        click.echo(f"Created statement format for '{bank_name}' (ID: {format_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@format_group.command("list")
@click.pass_context
def list_formats(ctx):
    """List statement formats."""
    db = ctx.obj["db"]
    service = StatementFormatService(db)

    formats = service.list_formats()
    if not formats:
        click.echo("No statement formats found.")
        return

    click.echo("\nStatement Formats:")
    click.echo("-" * 60)
    for fmt in formats:
        click.echo(f"{fmt.bank_name} (ID: {fmt.id}, Type: {fmt.amount_format_type.value})")


@format_group.command("show")
@click.argument("bank_name")
@click.pass_context
def show_format(ctx, bank_name: str):
    """Show details of a bank's statement format."""
    db = ctx.obj["db"]
    service = StatementFormatService(db)

    fmt = _get_format_or_exit(ctx, service, bank_name)

    click.echo(f"\nBank: {fmt.bank_name}")
    click.echo(f"ID: {fmt.id}")
    _describe(fmt, indent="")


@format_group.command("update")
@click.argument("bank_name")
@click.option("--bank", "new_bank_name", help="New bank name")
@click.option("--date-col", help="Header of the transaction date column")
@click.option("--desc-col", help="Header of the description column")
@click.option("--type", "amount_format_type", type=click.Choice(FORMAT_TYPES), help="Amount encoding")
@click.option("--trans-id-col", help="Header of the transaction ID column ('' to clear)")
@click.option("--debit-col", help="Header of the debit column")
@click.option("--credit-col", help="Header of the credit column")
@click.option("--amount-col", help="Header of the amount column")
@click.option("--drcr-col", help="Header of the Dr/Cr indicator column")
@click.option("--debit-tokens", help="Comma-separated debit indicator texts")
@click.option("--credit-tokens", help="Comma-separated credit indicator texts")
@click.pass_context
def update_format(
    ctx,
    bank_name: str,
    new_bank_name: str | None,
    date_col: str | None,
    desc_col: str | None,
    amount_format_type: str | None,
    trans_id_col: str | None,
    debit_col: str | None,
    credit_col: str | None,
    amount_col: str | None,
    drcr_col: str | None,
    debit_tokens: str | None,
    credit_tokens: str | None,
) -> None:
    """Update a bank's statement format.

    Updates only the fields that are provided.

    Examples:
        finport format update HDFC --desc-col "Narration"
        finport format update ICICI --debit-tokens "DR,WDL"
    """
    db = ctx.obj["db"]
    service = StatementFormatService(db)

    fmt = _get_format_or_exit(ctx, service, bank_name)

    try:
        updated = service.update_format(
            fmt.id,
            bank_name=new_bank_name,
            date_column=date_col,
            description_column=desc_col,
            amount_format_type=amount_format_type,
            transaction_id_column=trans_id_col,
            debit_column=debit_col,
            credit_column=credit_col,
            amount_column=amount_col,
            drcr_column=drcr_col,
            debit_tokens=debit_tokens,
            credit_tokens=credit_tokens,
        )
        click.echo(f"Updated format '{updated.bank_name}'")
        _describe(updated)
    except DomainError as e:
        handle_domain_error(ctx, e)


@format_group.command("delete")
@click.argument("bank_name")
@click.pass_context
def delete_format(ctx, bank_name: str) -> None:
    """Delete a bank's statement format.

    Examples:
        finport format delete HDFC
    """
    db = ctx.obj["db"]
    service = StatementFormatService(db)

    fmt = _get_format_or_exit(ctx, service, bank_name)

    if not click.confirm(f"Are you sure you want to delete format '{fmt.bank_name}' (ID: {fmt.id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_format(fmt.id)
        click.echo(f"Deleted format '{fmt.bank_name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register format commands with main CLI."""
    cli.add_command(format_group, name="format")
