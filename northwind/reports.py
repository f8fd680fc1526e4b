"""Tabular views over repository results.

Each builder takes entities as returned by a repository call and flattens
them into a pandas DataFrame. The relationships a builder reads must have
been loaded by that call; the docstrings name the repository method that
provides them.
"""

from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from .db.models import Order, Product, Supplier

ORDER_COLUMNS = [
    'order_id', 'order_date', 'required_date', 'shipped_date', 'customer',
    'employee', 'shipper', 'ship_city', 'freight', 'total', 'pending', 'overdue'
]

PRODUCT_COLUMNS = [
    'product_id', 'name', 'category', 'supplier', 'unit_price', 'units_in_stock',
    'reorder_level', 'low_stock', 'discontinued', 'total_value'
]

SUPPLIER_COLUMNS = ['supplier_id', 'company_name', 'country', 'product_count', 'active_product_count']


def order_summary_frame(orders: Iterable[Order], now: Optional[datetime] = None, with_totals: bool = True) -> pd.DataFrame:
    """One row per order.

    Expects orders from ``OrderRepository.get_orders_with_details`` (or any
    call loading parties and lines). Money columns hold Decimals.

    Args:
        orders: Orders with customer, employee and shipper loaded
        now: Reference time for the overdue flag
        with_totals: Compute ``total``, which needs the lines loaded;
            otherwise the column is left empty
    """
    now = now or datetime.now()
    rows = []
    for order in orders:
        rows.append({
            'order_id': order.id,
            'order_date': order.order_date,
            'required_date': order.required_date,
            'shipped_date': order.shipped_date,
            'customer': order.customer.company_name if order.customer else None,
            'employee': order.employee.full_name if order.employee else None,
            'shipper': order.shipper.company_name if order.shipper else None,
            'ship_city': order.ship_city,
            'freight': order.freight,
            'total': order.total if with_totals else None,
            'pending': order.is_pending,
            'overdue': order.is_overdue(now),
        })
    return pd.DataFrame(rows, columns=ORDER_COLUMNS)


def product_stock_frame(products: Iterable[Product]) -> pd.DataFrame:
    """One row per product, from ``ProductRepository.get_products_with_details``."""
    rows = []
    for product in products:
        rows.append({
            'product_id': product.id,
            'name': product.name,
            'category': product.category.name if product.category else None,
            'supplier': product.supplier.company_name if product.supplier else None,
            'unit_price': product.unit_price,
            'units_in_stock': product.units_in_stock,
            'reorder_level': product.reorder_level,
            'low_stock': product.is_low_stock,
            'discontinued': product.discontinued,
            'total_value': product.total_value,
        })
    return pd.DataFrame(rows, columns=PRODUCT_COLUMNS)


def supplier_summary_frame(suppliers: Iterable[Supplier]) -> pd.DataFrame:
    """Product counts per supplier.

    Needs the full product collections, as loaded by
    ``SupplierRepository.get_suppliers_with_products``.
    """
    rows = []
    for supplier in suppliers:
        rows.append({
            'supplier_id': supplier.id,
            'company_name': supplier.company_name,
            'country': supplier.country,
            'product_count': len(supplier.products),
            'active_product_count': sum(1 for product in supplier.products if not product.discontinued),
        })
    return pd.DataFrame(rows, columns=SUPPLIER_COLUMNS)
