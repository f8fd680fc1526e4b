"""
Command implementations for the northwind CLI.
Each submodule provides specific command functionality.
"""

from .utils import TestConnectionCommand, InitDbCommand, SeedCommand, DeleteEntityCommand
from .catalog import ListCustomersCommand, ListCountriesCommand, ListProductsCommand
from .orders import ListOrdersCommand, ExportOrdersCommand
from .employees import EmployeeTreeCommand

__all__ = [
    'TestConnectionCommand',
    'InitDbCommand',
    'SeedCommand',
    'DeleteEntityCommand',
    'ListCustomersCommand',
    'ListCountriesCommand',
    'ListProductsCommand',
    'ListOrdersCommand',
    'ExportOrdersCommand',
    'EmployeeTreeCommand'
]
