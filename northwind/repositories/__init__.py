"""
Repository layer for data access.

One generic repository implements get/find/add/update/delete/exists/count
for any entity; the per-entity repositories add eager-loaded and filtered
queries and declare their delete policies.
"""

from ..db.session import SessionManager
from .base import Repository
from .fetch import FetchPlan, Include, include, is_loaded, loaded_shape, missing_paths
from .category import CategoryRepository
from .supplier import SupplierRepository
from .product import ProductRepository
from .customer import CustomerRepository
from .employee import EmployeeRepository
from .shipper import ShipperRepository
from .order import OrderRepository
from .order_detail import OrderDetailRepository


class Repositories:
    """Every repository bound to one session manager."""

    def __init__(self, session_manager: SessionManager, debug: bool = False):
        self.session_manager = session_manager
        self.categories = CategoryRepository(session_manager, debug=debug)
        self.suppliers = SupplierRepository(session_manager, debug=debug)
        self.products = ProductRepository(session_manager, debug=debug)
        self.customers = CustomerRepository(session_manager, debug=debug)
        self.employees = EmployeeRepository(session_manager, debug=debug)
        self.shippers = ShipperRepository(session_manager, debug=debug)
        self.orders = OrderRepository(session_manager, debug=debug)
        self.order_details = OrderDetailRepository(session_manager, debug=debug)

    def for_entity(self, name: str) -> Repository:
        """Look up a repository by entity name (``customer``, ``order-detail``...)."""
        by_name = {
            'category': self.categories,
            'supplier': self.suppliers,
            'product': self.products,
            'customer': self.customers,
            'employee': self.employees,
            'shipper': self.shippers,
            'order': self.orders,
            'order-detail': self.order_details,
        }
        try:
            return by_name[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown entity: {name}") from None


__all__ = [
    'Repository',
    'Repositories',
    'FetchPlan',
    'Include',
    'include',
    'is_loaded',
    'loaded_shape',
    'missing_paths',
    'CategoryRepository',
    'SupplierRepository',
    'ProductRepository',
    'CustomerRepository',
    'EmployeeRepository',
    'ShipperRepository',
    'OrderRepository',
    'OrderDetailRepository'
]
