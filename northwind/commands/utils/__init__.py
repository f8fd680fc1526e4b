"""
Utility commands for the northwind CLI.
Provides helper commands for store setup, diagnostics and deletes.
"""

from typing import Any

import click
from sqlalchemy import text

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...seed import seed_database

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")

        with self.session_manager.transaction() as session:
            session.execute(text("SELECT 1")).scalar()

        click.secho(
            "Successfully connected to the database!",
            fg='green'
        )

class InitDbCommand(BaseCommand):
    """Command to create the schema."""

    def __init__(self, config: Config, drop: bool = False):
        super().__init__(config)
        self.drop = drop

    @command_error_handler
    def execute(self) -> None:
        self.session_manager.create_schema(drop=self.drop)
        click.secho("Schema created", fg='green')

class SeedCommand(BaseCommand):
    """Command to load the sample dataset into an empty store."""

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager.transaction() as session:
            counts = seed_database(session)

        if not counts:
            click.echo("Store already has customers, nothing seeded")
            return

        click.secho("Seeded sample data:", fg='green')
        for group, count in counts.items():
            click.echo(f"  {group}: {count}")

class DeleteEntityCommand(BaseCommand):
    """Command to delete one record through its delete policies."""

    def __init__(self, config: Config, entity: str, key: str):
        super().__init__(config)
        self.entity = entity
        self.key = key

    def parse_key(self, arity: int = 1) -> Any:
        """Integer id, or ``order_id,product_id`` for order lines.

        Args:
            arity: Number of key columns of the entity
        """
        parts = [part.strip() for part in self.key.split(',')]
        try:
            values = tuple(int(part) for part in parts)
        except ValueError:
            raise click.BadParameter(f"Invalid id: {self.key}")
        if len(values) != arity:
            expected = 'an id' if arity == 1 else f"{arity} comma-separated ids"
            raise click.BadParameter(f"{self.entity} expects {expected}, got {self.key}")
        return values[0] if arity == 1 else values

    @command_error_handler
    def execute(self) -> None:
        repository = self.repositories.for_entity(self.entity)
        request = repository.delete(self.parse_key(len(repository.key_columns)))

        click.secho(f"Deleted {request.entity} {request.key!r}", fg='green')
        for label, count in request.affected.items():
            click.echo(f"  {label} affected: {count}")

__all__ = ['TestConnectionCommand', 'InitDbCommand', 'SeedCommand', 'DeleteEntityCommand']
