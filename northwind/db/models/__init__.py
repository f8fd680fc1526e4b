"""SQLAlchemy models for database tables."""

from .base import Base
from .category import Category
from .supplier import Supplier
from .product import Product
from .customer import Customer
from .employee import Employee
from .shipper import Shipper
from .order import Order
from .order_detail import OrderDetail

__all__ = [
    'Base',
    'Category',
    'Supplier',
    'Product',
    'Customer',
    'Employee',
    'Shipper',
    'Order',
    'OrderDetail'
]
