"""
Core CLI implementation for the northwind package.
"""

import click
from pathlib import Path

from .base import BaseCommand
from .config import Config
from .logging import setup_logging, get_logger
from ..commands import (
    TestConnectionCommand,
    InitDbCommand,
    SeedCommand,
    DeleteEntityCommand,
    ListCustomersCommand,
    ListCountriesCommand,
    ListProductsCommand,
    ListOrdersCommand,
    ExportOrdersCommand,
    EmployeeTreeCommand
)

ENTITIES = ['category', 'supplier', 'product', 'customer', 'employee', 'shipper', 'order', 'order-detail']

def run(command: BaseCommand) -> None:
    """Validate and execute a command."""
    if not command.validate():
        raise click.Abort()
    command.execute()

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.pass_context
def cli(ctx, debug: bool):
    """Northwind catalog CLI tool"""
    # Store debug flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    # Initialize config and store in context
    try:
        config = Config.from_env()
        config.validate()
    except ValueError as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)
    ctx.obj['config'] = config

    setup_logging(debug=debug, log_level=config.log_level, log_dir=config.log_dir)

    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")
        logger.debug(f"Using database: {config.database_url}")

@cli.command()
@click.pass_obj
def test_connection(obj):
    """Test database connectivity"""
    run(TestConnectionCommand(obj['config']))

@cli.command()
@click.option('--drop', is_flag=True, help='Drop existing tables first')
@click.pass_obj
def init_db(obj, drop: bool):
    """Create the database tables."""
    run(InitDbCommand(obj['config'], drop))

@cli.command()
@click.pass_obj
def seed(obj):
    """Load the sample dataset into an empty database."""
    run(SeedCommand(obj['config']))

@cli.command()
@click.argument('entity', type=click.Choice(ENTITIES, case_sensitive=False))
@click.argument('key')
@click.pass_obj
def delete(obj, entity: str, key: str):
    """Delete ENTITY with id KEY (order lines: ORDER_ID,PRODUCT_ID)."""
    run(DeleteEntityCommand(obj['config'], entity, key))

# Customer Commands Group
@cli.group()
def customers():
    """Customer queries"""
    pass

@customers.command('list')
@click.option('--country', help='Only customers in this country')
@click.option('--search', help='Text contained in company or contact name')
@click.option('--with-orders', is_flag=True, help='Only customers that placed an order')
@click.pass_obj
def list_customers(obj, country: str | None, search: str | None, with_orders: bool):
    """List customers by company name."""
    run(ListCustomersCommand(obj['config'], country, search, with_orders))

@customers.command('countries')
@click.pass_obj
def list_countries(obj):
    """List the countries customers are located in."""
    run(ListCountriesCommand(obj['config']))

# Product Commands Group
@cli.group()
def products():
    """Product queries"""
    pass

@products.command('list')
@click.option('--search', help='Text contained in the product name')
@click.option('--low-stock', is_flag=True, help='Only products below their reorder level')
@click.option('--show-discontinued', is_flag=True, help='Include discontinued products')
@click.pass_obj
def list_products(obj, search: str | None, low_stock: bool, show_discontinued: bool):
    """List products with stock figures."""
    run(ListProductsCommand(obj['config'], search, low_stock, show_discontinued))

# Order Commands Group
@cli.group()
def orders():
    """Order queries and exports"""
    pass

@orders.command('list')
@click.option('--pending', is_flag=True, help='Only unshipped orders')
@click.option('--overdue', is_flag=True, help='Only unshipped orders past their required date')
@click.option('--recent', is_flag=True, help='Only recently placed orders')
@click.option('--days', type=click.IntRange(min=0), help='Window for --recent, defaults to RECENT_DAYS')
@click.option('--search', help='Customer, employee or ship city text')
@click.pass_obj
def list_orders(obj, pending: bool, overdue: bool, recent: bool, days: int | None, search: str | None):
    """List orders, newest first."""
    run(ListOrdersCommand(obj['config'], pending, overdue, recent, search, days))

@orders.command('export')
@click.argument('output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path))
@click.pass_obj
def export_orders(obj, output: Path):
    """Export every order with its total to a CSV file."""
    run(ExportOrdersCommand(obj['config'], output))

# Employee Commands Group
@cli.group()
def employees():
    """Employee queries"""
    pass

@employees.command('tree')
@click.pass_obj
def employee_tree(obj):
    """Print the reporting hierarchy."""
    run(EmployeeTreeCommand(obj['config']))
