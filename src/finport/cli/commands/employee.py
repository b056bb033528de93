"""Employee directory commands."""

import click

from finport.cli.error_handling import handle_domain_error
from finport.domain.employee import EmployeeService
from finport.domain.errors import DomainError


@click.group()
def employee_group():
    """Manage employees matched by salary imports."""
    pass


@employee_group.command("add")
@click.argument("name")
@click.option("--pan", help="PAN (tax ID), shown in TDS exports")
@click.pass_context
def add_employee(ctx, name: str, pan: str | None):
    """Add an employee.

    NAME must be spelled as in the Account column of salary sheets
    (case and surrounding spaces are ignored).
    """
    db = ctx.obj["db"]
    service = EmployeeService(db)

    try:
        employee_id = service.create_employee(name=name, pan=pan)
        click.echo(f"Created employee '{name.strip()}' (ID: {employee_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@employee_group.command("list")
@click.pass_context
def list_employees(ctx):
    """List employees."""
    db = ctx.obj["db"]
    service = EmployeeService(db)

    employees = service.list_employees()
    if not employees:
        click.echo("No employees found.")
        return

    click.echo("\nEmployees:")
    click.echo("-" * 60)
    for emp in employees:
        pan = f", PAN: {emp.pan}" if emp.pan else ""
        click.echo(f"{emp.name} (ID: {emp.id}{pan})")


@employee_group.command("delete")
@click.argument("employee_id", type=int)
@click.pass_context
def delete_employee(ctx, employee_id: int):
    """Delete an employee by ID."""
    db = ctx.obj["db"]
    service = EmployeeService(db)

    try:
        service.delete_employee(employee_id)
        click.echo(f"Deleted employee {employee_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register employee commands with main CLI."""
    cli.add_command(employee_group, name="employee")
