"""
Employee commands for the northwind CLI.
"""

import click

from ...cli.base import BaseCommand, command_error_handler

class EmployeeTreeCommand(BaseCommand):
    """Command to print the reporting hierarchy."""

    @command_error_handler
    def execute(self) -> None:
        employees = {employee.id: employee for employee in self.repositories.employees.get_all()}
        hierarchy = self.repositories.employees.get_hierarchy()

        if not employees:
            click.echo("No employees found")
            return

        for employee_id, depth in hierarchy.walk():
            employee = employees[employee_id]
            title = f" - {employee.title}" if employee.title else ""
            click.echo(f"{'  ' * depth}{employee.full_name}{title}")

__all__ = ['EmployeeTreeCommand']
