"""
CLI module for the northwind package.
Provides command-line interface functionality and utilities.

The click group lives in ``northwind.cli.main``; it is not imported here
because the command modules import ``northwind.cli.base``.
"""

from .base import BaseCommand
from .config import Config
from .logging import setup_logging, get_logger

__all__ = ['BaseCommand', 'Config', 'setup_logging', 'get_logger']
