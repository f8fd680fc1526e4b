"""
Northwind catalog data-access package.

Repositories over the Northwind trading-company schema (categories,
suppliers, products, customers, employees, shippers, orders and order
lines), with delete policies, the employee hierarchy and pandas reports.
"""

from .db.session import SessionManager
from .errors import NorthwindError, NotFoundError, NotLoadedError, IntegrityError, ValidationError, StoreError
from .repositories import Repositories

__version__ = '0.1.0'

__all__ = [
    'SessionManager',
    'Repositories',
    'NorthwindError',
    'NotFoundError',
    'NotLoadedError',
    'IntegrityError',
    'ValidationError',
    'StoreError'
]
