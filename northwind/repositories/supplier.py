"""Supplier queries."""

from typing import List, Optional

from sqlalchemy import or_

from ..db.models import Product, Supplier
from ..policies import RestrictPolicy
from ..utils import contains
from .base import Repository
from .fetch import FetchPlan, include

class SupplierRepository(Repository[Supplier]):
    """Suppliers and the products they provide."""

    model = Supplier
    default_order_by = (Supplier.company_name,)
    delete_policies = (RestrictPolicy(Product, 'supplier_id', 'products'),)

    WITH_PRODUCTS = FetchPlan(include('products'))
    WITH_ACTIVE_PRODUCTS = FetchPlan(include('products', where=lambda product: product.discontinued.is_(False)))
    WITH_PRODUCT_CATEGORIES = FetchPlan(include('products', include('category')))

    def get_suppliers_with_products(self) -> List[Supplier]:
        return self._list(self._select(self.WITH_PRODUCTS))

    def get_suppliers_with_product_count(self) -> List[Supplier]:
        """All suppliers, each carrying only its non-discontinued products."""
        return self._list(self._select(self.WITH_ACTIVE_PRODUCTS))

    def get_suppliers_with_active_products(self) -> List[Supplier]:
        """Suppliers with at least one product still on sale."""
        return self._list(self._select(
            self.WITH_PRODUCTS,
            Supplier.products.any(Product.discontinued.is_(False))
        ))

    def get_supplier_with_products(self, supplier_id: int) -> Optional[Supplier]:
        """One supplier with its products and each product's category."""
        return self.get_by_id(supplier_id, self.WITH_PRODUCT_CATEGORIES)

    def search(self, term: str) -> List[Supplier]:
        """Suppliers whose company, contact, city or country contains ``term``."""
        return self._list(self._select(self.WITH_PRODUCTS, or_(
            contains(Supplier.company_name, term),
            contains(Supplier.contact_name, term),
            contains(Supplier.city, term),
            contains(Supplier.country, term),
        )))
